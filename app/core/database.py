import logging
import re
from typing import Any, Dict, List, Sequence

from sqlalchemy import create_engine, make_url, text
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import Session, sessionmaker
from app.core.config import settings

logger = logging.getLogger(__name__)


def engine_options(url: str) -> Dict[str, Any]:
    """
    Keyword arguments for create_engine.

    SQLite URLs get SQLAlchemy's default pool, which takes no sizing options.
    """
    if make_url(url).get_backend_name() == "sqlite":
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,  # Verify connections before using them
        "pool_size": 10,  # Connection pool size
        "max_overflow": 20,  # Allow up to 20 connections beyond pool_size
    }


# Create SQLAlchemy engine
engine = create_engine(settings.DATABASE_URL, **engine_options(settings.DATABASE_URL))

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create Base class for models
Base = declarative_base()

# $1, $2, ... positional placeholders used by the crud layer
POSITIONAL_PARAM = re.compile(r"\$(\d+)")


def get_db():
    """
    Dependency function to get database session.
    Used in FastAPI endpoints with Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def execute(db: Session, sql: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
    """
    Run a statement written with positional placeholders and return its rows.

    The crud layer writes SQL the way Postgres drivers expect it
    (`WHERE handle = $1`). Placeholders are rewritten to SQLAlchemy named
    binds (`:p1`) so the same statement runs on any dialect SQLAlchemy
    supports, including the SQLite database used by the test suite.

    Args:
        db: Database session
        sql: Statement text using $1..$n placeholders
        params: Values for the placeholders, index-aligned ($1 is params[0])

    Returns:
        Rows as plain dicts (empty list for statements returning nothing)
    """
    bound = {f"p{i}": value for i, value in enumerate(params, start=1)}
    statement = text(POSITIONAL_PARAM.sub(r":p\1", sql))

    logger.debug(f"Executing SQL: {' '.join(sql.split())} | params={len(bound)}")

    try:
        result = db.execute(statement, bound)
        # Rows must be read before commit (UPDATE/DELETE ... RETURNING)
        rows = [dict(row) for row in result.mappings()] if result.returns_rows else []
        db.commit()
    except Exception:
        db.rollback()
        raise

    return rows


def init_db():
    """
    Initialize database.

    We rely on Alembic for table creation, so this only ensures the models
    are imported and registered on Base.metadata.

    Use "alembic upgrade head" to create/update database schema.
    """
    from app.models import company, job, user  # noqa: F401  Import models to register them
