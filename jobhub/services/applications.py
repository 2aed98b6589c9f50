"""
Application lifecycle.

Jobseekers apply to jobs, attach and remove documents, and withdraw.
Employers list the applications to their own jobs and move them between
statuses. Every operation that touches both the database and stored files
runs in a single transaction and orders the file step so a failure leaves
either no stray file or no dangling document row.
"""

import logging
from pathlib import Path

from sqlalchemy import func, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from jobhub.db import APPLICATION_STATUSES, Application, Document, Job, User
from jobhub.errors import AuthorizationError, ConflictError, NotFoundError, ValidationError
from jobhub.services.access import ensure_owner, is_owner, same_id
from jobhub.storage import (
    IncomingFile,
    StorageError,
    StoredFile,
    delete_stored,
    discard,
    save_uploads,
    validate_uploads,
)

logger = logging.getLogger(__name__)

_DOCUMENT_EXTENSIONS = {"pdf", "doc", "docx", "txt"}
_IMAGE_EXTENSIONS = {"jpg", "jpeg", "png"}


def infer_document_type(filename: str) -> str:
    """Guess the semantic type of an upload from its filename.

    Name hints win over the extension: "resume"/"cv", then "cover", then
    "certificate"/"cert".
    """
    name = filename.lower()
    if "resume" in name or "cv" in name:
        return "resume"
    if "cover" in name:
        return "coverLetter"
    if "certificate" in name or "cert" in name:
        return "certificate"

    extension = Path(name).suffix.lstrip(".")
    if extension in _DOCUMENT_EXTENSIONS:
        return "document"
    if extension in _IMAGE_EXTENSIONS:
        return "image"
    return "other"


def default_cover_letter(job: Job) -> str:
    return f"I'm excited to apply for the {job.title} position at {job.company}."


def _documents_from(stored: list[StoredFile], start: int = 0) -> list[Document]:
    return [
        Document(
            url=item.url,
            name=item.name,
            type=infer_document_type(item.name),
            size=item.size,
            position=start + offset,
        )
        for offset, item in enumerate(stored)
    ]


def _adjust_application_count(db: Session, job_id: str, delta: int) -> None:
    """Increment or decrement the job's counter in SQL, never below zero."""
    stmt = update(Job).where(Job.id == job_id).values(applications=Job.applications + delta)
    if delta < 0:
        stmt = stmt.where(Job.applications >= -delta)
    db.execute(stmt)


def _load_application(db: Session, application_id: str) -> Application:
    application = (
        db.query(Application)
        .options(
            selectinload(Application.job),
            selectinload(Application.applicant),
            selectinload(Application.documents),
        )
        .filter(Application.id == application_id)
        .first()
    )
    if application is None:
        raise NotFoundError("Application not found")
    return application


def _ensure_applicant_or_employer(application: Application, user: User, message: str) -> None:
    if is_owner(application.applicant_id, user):
        return
    if application.job is not None and is_owner(application.job.posted_by, user):
        return
    raise AuthorizationError(message)


def _find_existing(db: Session, job_id: str, applicant_id: str) -> Application | None:
    return (
        db.query(Application)
        .filter(Application.job_id == job_id, Application.applicant_id == applicant_id)
        .first()
    )


def apply(
    db: Session,
    user: User,
    job_id: str,
    cover_letter: str | None = None,
    files: list[IncomingFile] | None = None,
) -> Application:
    """Create an application for the caller, storing any attached documents."""
    files = files or []
    # Reject bad files before anything touches the database or disk
    validate_uploads(files)

    job = db.get(Job, job_id)
    if job is None:
        raise NotFoundError("Job not found")
    if _find_existing(db, job.id, user.id) is not None:
        raise ConflictError("You have already applied for this job")

    if not cover_letter or not cover_letter.strip():
        cover_letter = default_cover_letter(job)

    stored = save_uploads(files)
    try:
        application = Application(
            job_id=job.id,
            applicant_id=user.id,
            cover_letter=cover_letter,
            status="applied",
        )
        application.documents = _documents_from(stored)
        db.add(application)
        db.flush()
        _adjust_application_count(db, job.id, +1)
        db.commit()
    except IntegrityError:
        # A concurrent apply for the same pair won the unique constraint
        db.rollback()
        discard(stored)
        raise ConflictError("You have already applied for this job")
    except Exception:
        db.rollback()
        discard(stored)
        raise

    logger.info(
        f"User {user.id} applied to job {job_id} as application {application.id} "
        f"with {len(stored)} documents"
    )
    return _load_application(db, application.id)


def get_application(db: Session, user: User, application_id: str) -> Application:
    """Fetch one application for its applicant or the employer owning the job."""
    application = _load_application(db, application_id)
    _ensure_applicant_or_employer(application, user, "Not authorized to view this application")
    return application


def update_status(db: Session, user: User, application_id: str, status: str) -> Application:
    """Move an application to any status. Only the job's employer may do this."""
    if status not in APPLICATION_STATUSES:
        raise ValidationError.for_field(
            "status", f"Invalid status. Must be one of: {', '.join(APPLICATION_STATUSES)}"
        )

    application = _load_application(db, application_id)
    ensure_owner(application.job.posted_by, user, "Not authorized to update this application")

    previous = application.status
    application.status = status
    db.commit()

    logger.info(f"User {user.id} moved application {application_id} from {previous} to {status}")
    return _load_application(db, application_id)


def add_documents(db: Session, user: User, application_id: str, files: list[IncomingFile]) -> list[Document]:
    """Attach more documents to an existing application."""
    if not files:
        raise ValidationError.for_field("documents", "No files uploaded")
    validate_uploads(files)

    application = _load_application(db, application_id)
    _ensure_applicant_or_employer(
        application, user, "Not authorized to upload documents for this application"
    )

    start = (
        db.query(func.coalesce(func.max(Document.position), -1))
        .filter(Document.application_id == application.id)
        .scalar()
        + 1
    )

    stored = save_uploads(files)
    try:
        documents = _documents_from(stored, start=start)
        application.documents.extend(documents)
        db.commit()
    except Exception:
        db.rollback()
        discard(stored)
        raise

    logger.info(f"User {user.id} added {len(documents)} documents to application {application_id}")
    for document in documents:
        db.refresh(document)
    return documents


def delete_document(db: Session, user: User, application_id: str, document_id: str) -> None:
    """Remove a document row and its stored file together.

    The row removal is flushed first and only committed once the file is gone,
    so a failing file delete leaves the document in place.
    """
    application = _load_application(db, application_id)
    _ensure_applicant_or_employer(application, user, "Not authorized to delete this document")

    document = next((d for d in application.documents if same_id(d.id, document_id)), None)
    if document is None:
        raise NotFoundError("Document not found")

    url = document.url
    application.documents.remove(document)
    db.flush()
    try:
        delete_stored(url)
    except StorageError:
        db.rollback()
        raise
    db.commit()

    logger.info(f"User {user.id} deleted document {document_id} from application {application_id}")


def withdraw(db: Session, user: User, application_id: str) -> None:
    """Delete the caller's application, its files, and decrement the job counter."""
    application = _load_application(db, application_id)
    if not is_owner(application.applicant_id, user):
        raise AuthorizationError("Not authorized to withdraw this application")

    job_id = application.job_id
    urls = [d.url for d in application.documents]

    db.delete(application)
    _adjust_application_count(db, job_id, -1)
    db.flush()
    try:
        for url in urls:
            delete_stored(url)
    except StorageError:
        db.rollback()
        raise
    db.commit()

    logger.info(f"User {user.id} withdrew application {application_id} from job {job_id}")


def list_mine(db: Session, user: User) -> list[Application]:
    return (
        db.query(Application)
        .options(
            selectinload(Application.job),
            selectinload(Application.applicant),
            selectinload(Application.documents),
        )
        .filter(Application.applicant_id == user.id)
        .order_by(Application.created_at.desc())
        .all()
    )


def list_for_job(db: Session, user: User, job_id: str) -> list[Application]:
    """All applications to a job, for the employer who posted it."""
    job = db.get(Job, job_id)
    if job is None:
        raise NotFoundError("Job not found")
    ensure_owner(job.posted_by, user, "Not authorized to view applications for this job")

    return (
        db.query(Application)
        .options(
            selectinload(Application.job),
            selectinload(Application.applicant),
            selectinload(Application.documents),
        )
        .filter(Application.job_id == job.id)
        .order_by(Application.created_at.desc())
        .all()
    )


def stats(db: Session, user: User) -> dict:
    """Counts for the caller as applicant and as employer."""
    by_status = dict.fromkeys(APPLICATION_STATUSES, 0)
    rows = (
        db.query(Application.status, func.count(Application.id))
        .filter(Application.applicant_id == user.id)
        .group_by(Application.status)
        .all()
    )
    for status, count in rows:
        by_status[status] = count

    per_job = (
        db.query(Job.id, Job.title, func.count(Application.id))
        .outerjoin(Application, Application.job_id == Job.id)
        .filter(Job.posted_by == user.id)
        .group_by(Job.id, Job.title)
        .order_by(Job.title)
        .all()
    )

    return {
        "total_applications": sum(by_status.values()),
        "applications_by_status": by_status,
        "total_jobs_posted": len(per_job),
        "total_applications_received": sum(count for _, _, count in per_job),
        "applications_by_job": [
            {"job_id": job_id, "job_title": title, "application_count": count}
            for job_id, title, count in per_job
        ],
    }
