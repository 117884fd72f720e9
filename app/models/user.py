"""
User model for authentication.

Users are addressed by username; `is_admin` gates every mutating
company/job endpoint.
"""

from sqlalchemy import Boolean, Column, String, Text
from app.core.database import Base


class User(Base):
    __tablename__ = "users"

    username = Column(String(25), primary_key=True)
    password = Column(Text, nullable=False)  # bcrypt hash
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)
    is_admin = Column(Boolean, nullable=False, default=False, server_default="false")

    def __repr__(self):
        return f"<User(username='{self.username}', is_admin={self.is_admin})>"
