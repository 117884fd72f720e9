from decimal import Decimal
from pydantic import Field, field_validator
from typing import List, Optional

from app.schemas.common import CamelModel, reject_null


class JobCreateRequest(CamelModel):
    """Schema for creating a new job"""
    title: str = Field(..., min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[Decimal] = Field(None, ge=0, le=1)
    company_handle: str = Field(..., min_length=1, max_length=25)

    class Config:
        extra = "forbid"


class JobUpdateRequest(CamelModel):
    """
    Schema for a partial job update.

    Explicit nulls clear salary/equity. id and companyHandle cannot be changed.
    """
    title: Optional[str] = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[Decimal] = Field(None, ge=0, le=1)

    @field_validator("title")
    @classmethod
    def fields_not_null(cls, v):
        return reject_null(v)

    class Config:
        extra = "forbid"


class JobSummary(CamelModel):
    """Job as listed under its company"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[Decimal] = None


class JobResponse(JobSummary):
    """Schema for job response"""
    company_handle: str


class JobListItem(JobResponse):
    company_name: Optional[str] = None


class JobCompany(CamelModel):
    handle: str
    name: str
    description: str
    num_employees: Optional[int] = None
    logo_url: Optional[str] = None


class JobDetailResponse(JobSummary):
    """Job with its company embedded"""
    company: Optional[JobCompany] = None


class JobEnvelope(CamelModel):
    job: JobResponse


class JobDetailEnvelope(CamelModel):
    job: JobDetailResponse


class JobListEnvelope(CamelModel):
    jobs: List[JobListItem]


class JobDeletedResponse(CamelModel):
    deleted: int
