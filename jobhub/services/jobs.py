"""Job postings: search, CRUD and ownership."""

import logging
import math

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload, selectinload

from jobhub.db import Application, Job, User
from jobhub.errors import NotFoundError
from jobhub.services.access import ensure_owner
from jobhub.storage import StorageError, delete_stored

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20

# Optional text columns reset to these instead of NULL
_TEXT_DEFAULTS = {"requirements": "", "salary": "Not specified", "source": "JobHub"}


def _contains(value: str) -> str:
    """LIKE pattern matching value literally anywhere in the column."""
    escaped = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def list_jobs(
    db: Session,
    q: str | None = None,
    job_type: str | None = None,
    location: str | None = None,
    page: int | None = None,
    limit: int | None = None,
    posted_by: str | None = None,
) -> tuple[list[Job], dict]:
    """Return one page of jobs, newest first, plus pagination meta."""
    page = page if page and page > 0 else DEFAULT_PAGE
    limit = limit if limit and limit > 0 else DEFAULT_LIMIT

    query = db.query(Job)
    if q:
        pattern = _contains(q)
        query = query.filter(
            or_(
                Job.title.ilike(pattern, escape="\\"),
                Job.company.ilike(pattern, escape="\\"),
                Job.description.ilike(pattern, escape="\\"),
                Job.requirements.ilike(pattern, escape="\\"),
            )
        )
    if job_type:
        query = query.filter(Job.type == job_type)
    if location:
        query = query.filter(Job.location.ilike(_contains(location), escape="\\"))
    if posted_by:
        query = query.filter(Job.posted_by == posted_by)

    total = query.count()
    jobs = (
        query.options(joinedload(Job.poster))
        .order_by(Job.created_at.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    meta = {"total": total, "page": page, "limit": limit, "pages": math.ceil(total / limit)}
    return jobs, meta


def get_job(db: Session, job_id: str) -> Job:
    job = db.query(Job).options(joinedload(Job.poster)).filter(Job.id == job_id).first()
    if job is None:
        raise NotFoundError("Job not found")
    return job


def create_job(db: Session, user: User, fields: dict) -> Job:
    """Create a job posted by the caller from already validated fields."""
    job = Job(**fields, posted_by=user.id)
    db.add(job)
    db.commit()

    logger.info(f"User {user.id} created job {job.id} ({job.title} @ {job.company})")
    return get_job(db, job.id)


def update_job(db: Session, user: User, job_id: str, changes: dict) -> Job:
    """Overwrite only the fields present in changes."""
    job = get_job(db, job_id)
    ensure_owner(job.posted_by, user, "Not authorized to update this job", allow_admin=True)

    for field, value in changes.items():
        if value is None and field in _TEXT_DEFAULTS:
            value = _TEXT_DEFAULTS[field]
        setattr(job, field, value)
    db.commit()

    logger.info(f"User {user.id} updated job {job.id}: {sorted(changes)}")
    return get_job(db, job.id)


def delete_job(db: Session, user: User, job_id: str) -> None:
    """Delete a job together with its applications and their stored files."""
    job = (
        db.query(Job)
        .options(selectinload(Job.job_applications).selectinload(Application.documents))
        .filter(Job.id == job_id)
        .first()
    )
    if job is None:
        raise NotFoundError("Job not found")
    ensure_owner(job.posted_by, user, "Not authorized to delete this job", allow_admin=True)

    urls = [doc.url for app in job.job_applications for doc in app.documents]
    application_count = len(job.job_applications)

    db.delete(job)
    db.flush()
    try:
        for url in urls:
            delete_stored(url)
    except StorageError:
        db.rollback()
        raise
    db.commit()

    logger.info(
        f"User {user.id} deleted job {job_id} with {application_count} applications and {len(urls)} files"
    )
