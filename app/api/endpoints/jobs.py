import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import get_admin_user
from app.crud import job as job_crud
from app.schemas.job import (
    JobCreateRequest,
    JobDeletedResponse,
    JobDetailEnvelope,
    JobEnvelope,
    JobListEnvelope,
    JobUpdateRequest,
)
from app.schemas.user import CurrentUser

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)


@router.post("/", status_code=201, response_model=JobEnvelope)
def create_job(
    request: JobCreateRequest,
    db: Session = Depends(get_db),
    admin_user: CurrentUser = Depends(get_admin_user)
):
    """
    Create a job posting for an existing company. Admin only.

    Returns 400 if companyHandle does not name a company.
    """
    job = job_crud.create(db, request)
    return {"job": job}


@router.get("/", response_model=JobListEnvelope)
def list_jobs(
    min_salary: Optional[int] = Query(None, alias="minSalary", ge=0),
    has_equity: Optional[bool] = Query(None, alias="hasEquity"),
    title: Optional[str] = None,
    db: Session = Depends(get_db)
):
    """
    List jobs, optionally filtered.

    Args:
        minSalary: Minimum salary
        hasEquity: true to list only jobs offering equity
        title: Case-insensitive title substring

    Returns 404 when nothing matches.
    """
    jobs = job_crud.find_all(db, min_salary=min_salary, has_equity=has_equity, title=title)
    return {"jobs": jobs}


@router.get("/{job_id}", response_model=JobDetailEnvelope)
def get_job(job_id: int, db: Session = Depends(get_db)):
    """Retrieve a job with its company."""
    job = job_crud.get(db, job_id)
    return {"job": job}


@router.patch("/{job_id}", response_model=JobEnvelope)
def update_job(
    job_id: int,
    request: JobUpdateRequest,
    db: Session = Depends(get_db),
    admin_user: CurrentUser = Depends(get_admin_user)
):
    """
    Partially update a job. Admin only.

    Fields: title, salary, equity. null clears salary or equity.
    """
    data = request.model_dump(exclude_unset=True, by_alias=True)
    job = job_crud.update(db, job_id, data)
    return {"job": job}


@router.delete("/{job_id}", response_model=JobDeletedResponse)
def delete_job(
    job_id: int,
    db: Session = Depends(get_db),
    admin_user: CurrentUser = Depends(get_admin_user)
):
    """Delete a job by ID. Admin only."""
    job_crud.remove(db, job_id)
    logger.info(f"Job {job_id} deleted by {admin_user.username}")
    return {"deleted": job_id}
