"""
Database models package.

The tables are declared here for Alembic and test setup; the crud layer
queries them with plain SQL.
"""

from app.models.company import Company
from app.models.job import Job
from app.models.user import User

__all__ = ["Company", "Job", "User"]
