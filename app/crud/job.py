"""
CRUD operations for jobs.

Implements the Repository pattern on top of plain SQL, providing a clean
interface for the API layer.
"""

import logging
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy.orm import Session

from app.core.database import execute
from app.core.exceptions import BadRequestError, NotFoundError
from app.core.sql import sql_for_partial_update
from app.schemas.job import JobCreateRequest

logger = logging.getLogger(__name__)

JOB_COLUMNS = 'id, title, salary, equity, company_handle AS "companyHandle"'

# Job fields share their names with their columns
UPDATE_COLUMNS: Dict[str, str] = {}
UPDATABLE_FIELDS = ("title", "salary", "equity")


def normalize_equity(row: Dict[str, Any]) -> Dict[str, Any]:
    """
    Return equity as Decimal whatever the driver gives back for NUMERIC.

    psycopg2 already returns Decimal; SQLite hands back int or float.
    """
    equity = row.get("equity")
    if equity is not None and not isinstance(equity, Decimal):
        row["equity"] = Decimal(str(equity))
    return row


def create(db: Session, job_data: JobCreateRequest) -> Dict[str, Any]:
    """
    Create a new job.

    Args:
        db: Database session
        job_data: Validated job creation data

    Returns:
        {id, title, salary, equity, companyHandle}

    Raises:
        BadRequestError: The company does not exist
    """
    company = execute(
        db,
        "SELECT handle FROM companies WHERE handle = $1",
        [job_data.company_handle],
    )
    if not company:
        raise BadRequestError(f"No company: {job_data.company_handle}")

    rows = execute(
        db,
        f"""INSERT INTO jobs (title, salary, equity, company_handle)
            VALUES ($1, $2, $3, $4)
            RETURNING {JOB_COLUMNS}""",
        [job_data.title, job_data.salary, job_data.equity, job_data.company_handle],
    )
    job = normalize_equity(rows[0])

    logger.info(f"Created job {job['id']}: {job['title']} ({job['companyHandle']})")
    return job


def find_all(
    db: Session,
    min_salary: Optional[int] = None,
    has_equity: Optional[bool] = None,
    title: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """
    Find jobs matching every filter given, ordered by title.

    Args:
        db: Database session
        min_salary: Minimum salary (inclusive)
        has_equity: When True, only jobs with non-zero equity. False or None
            does not filter.
        title: Case-insensitive substring of the job title

    Returns:
        [{id, title, salary, equity, companyHandle, companyName}, ...]

    Raises:
        NotFoundError: No job matches
    """
    where_expressions = []
    values: List[Any] = []

    if min_salary is not None:
        values.append(min_salary)
        where_expressions.append(f"j.salary >= ${len(values)}")
    if has_equity:
        where_expressions.append("j.equity > 0")
    if title is not None:
        values.append(f"%{title}%")
        where_expressions.append(f"LOWER(j.title) LIKE LOWER(${len(values)})")

    query = """SELECT j.id,
                      j.title,
                      j.salary,
                      j.equity,
                      j.company_handle AS "companyHandle",
                      c.name AS "companyName"
               FROM jobs AS j
               LEFT JOIN companies AS c ON c.handle = j.company_handle"""
    if where_expressions:
        query += " WHERE " + " AND ".join(where_expressions)
    query += " ORDER BY j.title"

    jobs = execute(db, query, values)
    if not jobs:
        raise NotFoundError("No jobs found")

    return [normalize_equity(job) for job in jobs]


def get(db: Session, job_id: int) -> Dict[str, Any]:
    """
    Retrieve a job with its company embedded.

    Returns:
        {id, title, salary, equity, company}
        where company is {handle, name, description, numEmployees, logoUrl}

    Raises:
        NotFoundError: No job with this id
    """
    rows = execute(db, f"SELECT {JOB_COLUMNS} FROM jobs WHERE id = $1", [job_id])
    if not rows:
        raise NotFoundError(f"No job: {job_id}")

    job = normalize_equity(rows[0])
    companies = execute(
        db,
        """SELECT handle,
                  name,
                  description,
                  num_employees AS "numEmployees",
                  logo_url AS "logoUrl"
           FROM companies
           WHERE handle = $1""",
        [job.pop("companyHandle")],
    )
    job["company"] = companies[0] if companies else None

    return job


def update(db: Session, job_id: int, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a job.

    Data can include {title, salary, equity}; explicit None clears salary
    or equity.

    Raises:
        BadRequestError: data is empty or names a field that cannot be updated
        NotFoundError: No job with this id
    """
    set_cols, values = sql_for_partial_update(data, UPDATE_COLUMNS, allowed=UPDATABLE_FIELDS)
    id_idx = len(values) + 1

    rows = execute(
        db,
        f"""UPDATE jobs
            SET {set_cols}
            WHERE id = ${id_idx}
            RETURNING {JOB_COLUMNS}""",
        [*values, job_id],
    )
    if not rows:
        raise NotFoundError(f"No job: {job_id}")

    logger.info(f"Updated job {job_id}: {', '.join(data)}")
    return normalize_equity(rows[0])


def remove(db: Session, job_id: int) -> None:
    """
    Delete a job by ID.

    Raises:
        NotFoundError: No job with this id
    """
    rows = execute(db, "DELETE FROM jobs WHERE id = $1 RETURNING id", [job_id])
    if not rows:
        raise NotFoundError(f"No job: {job_id}")

    logger.info(f"Deleted job {job_id}")
