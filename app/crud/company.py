"""
CRUD operations for companies.

Statements are plain SQL run through app.core.database.execute; rows come
back as dicts keyed by the API's camelCase field names.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.database import execute
from app.core.exceptions import BadRequestError, NotFoundError
from app.core.sql import sql_for_partial_update
from app.crud.job import normalize_equity
from app.schemas.company import CompanyCreateRequest

logger = logging.getLogger(__name__)

COMPANY_COLUMNS = 'handle, name, description, num_employees AS "numEmployees", logo_url AS "logoUrl"'

# Logical field name -> column, for fields whose names differ
UPDATE_COLUMNS = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}
UPDATABLE_FIELDS = ("name", "description", "numEmployees", "logoUrl")


def create(db: Session, company_data: CompanyCreateRequest) -> Dict[str, Any]:
    """
    Create a new company.

    Args:
        db: Database session
        company_data: Validated company creation data

    Returns:
        {handle, name, description, numEmployees, logoUrl}

    Raises:
        BadRequestError: A company with this handle or name already exists
    """
    duplicate = execute(
        db,
        "SELECT handle, name FROM companies WHERE handle = $1 OR name = $2",
        [company_data.handle, company_data.name],
    )
    if duplicate:
        raise BadRequestError(f"Duplicate company: {company_data.handle} ({company_data.name})")

    rows = execute(
        db,
        f"""INSERT INTO companies (handle, name, description, num_employees, logo_url)
            VALUES ($1, $2, $3, $4, $5)
            RETURNING {COMPANY_COLUMNS}""",
        [
            company_data.handle,
            company_data.name,
            company_data.description,
            company_data.num_employees,
            company_data.logo_url,
        ],
    )

    logger.info(f"Created company {company_data.handle}")
    return rows[0]


def find_all(
    db: Session,
    name_like: Optional[str] = None,
    min_employees: Optional[int] = None,
    max_employees: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """
    Find companies matching every filter given, ordered by name.

    Args:
        db: Database session
        name_like: Case-insensitive substring of the company name
        min_employees: Minimum number of employees (inclusive)
        max_employees: Maximum number of employees (inclusive)

    Raises:
        BadRequestError: min_employees is greater than max_employees
        NotFoundError: No company matches
    """
    if min_employees is not None and max_employees is not None and min_employees > max_employees:
        raise BadRequestError("minEmployees cannot be greater than maxEmployees")

    where_expressions = []
    values: List[Any] = []

    if min_employees is not None:
        values.append(min_employees)
        where_expressions.append(f"num_employees >= ${len(values)}")
    if max_employees is not None:
        values.append(max_employees)
        where_expressions.append(f"num_employees <= ${len(values)}")
    if name_like is not None:
        values.append(f"%{name_like}%")
        where_expressions.append(f"LOWER(name) LIKE LOWER(${len(values)})")

    query = f"SELECT {COMPANY_COLUMNS} FROM companies"
    if where_expressions:
        query += " WHERE " + " AND ".join(where_expressions)
    query += " ORDER BY name"

    companies = execute(db, query, values)
    if not companies:
        raise NotFoundError("No companies found")

    return companies


def get(db: Session, handle: str) -> Dict[str, Any]:
    """
    Retrieve a company and its jobs.

    Returns:
        {handle, name, description, numEmployees, logoUrl, jobs}
        where jobs is [{id, title, salary, equity}, ...] ordered by id

    Raises:
        NotFoundError: No company with this handle
    """
    rows = execute(
        db,
        f"SELECT {COMPANY_COLUMNS} FROM companies WHERE handle = $1",
        [handle],
    )
    if not rows:
        raise NotFoundError(f"No company: {handle}")

    company = rows[0]
    jobs = execute(
        db,
        """SELECT id, title, salary, equity
           FROM jobs
           WHERE company_handle = $1
           ORDER BY id""",
        [handle],
    )
    company["jobs"] = [normalize_equity(job) for job in jobs]

    return company


def update(db: Session, handle: str, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a company.

    Only the fields present in data are changed. Data can include
    {name, description, numEmployees, logoUrl}.

    Raises:
        BadRequestError: data is empty, names a field that cannot be updated,
            or renames the company to a name already taken
        NotFoundError: No company with this handle
    """
    set_cols, values = sql_for_partial_update(data, UPDATE_COLUMNS, allowed=UPDATABLE_FIELDS)
    handle_idx = len(values) + 1

    try:
        rows = execute(
            db,
            f"""UPDATE companies
                SET {set_cols}
                WHERE handle = ${handle_idx}
                RETURNING {COMPANY_COLUMNS}""",
            [*values, handle],
        )
    except IntegrityError as e:
        logger.warning(f"Rejected update of company {handle}: {e.orig}")
        raise BadRequestError(f"Duplicate company: {data.get('name', handle)}") from e

    if not rows:
        raise NotFoundError(f"No company: {handle}")

    logger.info(f"Updated company {handle}: {', '.join(data)}")
    return rows[0]


def remove(db: Session, handle: str) -> None:
    """
    Delete a company (its jobs go with it).

    Raises:
        NotFoundError: No company with this handle
    """
    rows = execute(
        db,
        "DELETE FROM companies WHERE handle = $1 RETURNING handle",
        [handle],
    )
    if not rows:
        raise NotFoundError(f"No company: {handle}")

    logger.info(f"Deleted company {handle}")
