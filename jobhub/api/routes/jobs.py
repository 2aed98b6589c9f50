"""Job posting endpoints."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from jobhub.api.deps import require_roles
from jobhub.api.schemas import JobCreate, JobListResponse, JobResponse, JobUpdate, MessageResponse, PageMeta
from jobhub.db import User, get_db
from jobhub.services import jobs as job_service

router = APIRouter()

posters = require_roles("employer", "admin")


@router.get("", response_model=JobListResponse)
def list_jobs(
    q: str | None = None,
    type: str | None = None,
    location: str | None = None,
    posted_by: str | None = None,
    page: int = Query(1),
    limit: int = Query(20),
    db: Session = Depends(get_db),
):
    """Search jobs, newest first."""
    jobs, meta = job_service.list_jobs(
        db, q=q, job_type=type, location=location, page=page, limit=limit, posted_by=posted_by
    )
    return JobListResponse(
        data=[JobResponse.model_validate(j) for j in jobs],
        meta=PageMeta(**meta),
    )


@router.get("/{job_id}", response_model=JobResponse)
def get_job(job_id: str, db: Session = Depends(get_db)):
    """Get a single job with its poster."""
    return JobResponse.model_validate(job_service.get_job(db, job_id))


@router.post("", response_model=JobResponse, status_code=201)
def create_job(
    data: JobCreate,
    user: User = Depends(posters),
    db: Session = Depends(get_db),
):
    """Post a new job as the calling employer."""
    job = job_service.create_job(db, user, data.model_dump(exclude_none=True))
    return JobResponse.model_validate(job)


@router.put("/{job_id}", response_model=JobResponse)
def update_job(
    job_id: str,
    data: JobUpdate,
    user: User = Depends(posters),
    db: Session = Depends(get_db),
):
    """Partially update a job the caller owns."""
    job = job_service.update_job(db, user, job_id, data.model_dump(exclude_unset=True))
    return JobResponse.model_validate(job)


@router.delete("/{job_id}", response_model=MessageResponse)
def delete_job(
    job_id: str,
    user: User = Depends(posters),
    db: Session = Depends(get_db),
):
    """Delete a job the caller owns, with its applications."""
    job_service.delete_job(db, user, job_id)
    return MessageResponse(message="Job removed")
