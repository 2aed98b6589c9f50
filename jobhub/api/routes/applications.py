"""Application lifecycle endpoints."""

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session

from jobhub.api.deps import get_current_user, require_roles
from jobhub.api.schemas import (
    ApplicationListResponse,
    ApplicationResponse,
    ApplicationStats,
    DocumentResponse,
    DocumentUploadResponse,
    MessageResponse,
    StatsResponse,
    StatusUpdate,
)
from jobhub.config import settings
from jobhub.db import User, get_db
from jobhub.services import applications as application_service
from jobhub.storage import IncomingFile

router = APIRouter()


def _read_uploads(uploads: list[UploadFile] | None) -> list[IncomingFile]:
    """Read multipart parts, skipping empty file inputs.

    Reads at most one byte past the size limit so oversized files are
    detected without buffering all of them.
    """
    files = []
    for upload in uploads or []:
        content = upload.file.read(settings.max_upload_size + 1)
        if not upload.filename and not content:
            continue
        files.append(
            IncomingFile(filename=upload.filename or "", content=content, content_type=upload.content_type)
        )
    return files


@router.post("/{job_id}/apply", response_model=ApplicationResponse, status_code=201)
def apply_for_job(
    job_id: str,
    cover_letter: str | None = Form(None, alias="coverLetter"),
    documents: list[UploadFile] | None = File(None),
    user: User = Depends(require_roles("jobseeker")),
    db: Session = Depends(get_db),
):
    """Apply to a job with an optional cover letter and documents."""
    application = application_service.apply(
        db, user, job_id, cover_letter=cover_letter, files=_read_uploads(documents)
    )
    return ApplicationResponse.model_validate(application)


@router.get("/my-applications", response_model=ApplicationListResponse)
def my_applications(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """List the caller's applications, newest first."""
    applications = application_service.list_mine(db, user)
    return ApplicationListResponse(applications=[ApplicationResponse.model_validate(a) for a in applications])


@router.get("/stats", response_model=StatsResponse)
def application_stats(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Application counts for the caller as applicant and employer."""
    return StatsResponse(stats=ApplicationStats(**application_service.stats(db, user)))


@router.get("/job/{job_id}", response_model=ApplicationListResponse)
def applications_for_job(
    job_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """List applications to a job owned by the caller."""
    applications = application_service.list_for_job(db, user, job_id)
    return ApplicationListResponse(applications=[ApplicationResponse.model_validate(a) for a in applications])


@router.get("/{application_id}", response_model=ApplicationResponse)
def get_application(
    application_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Get one application as its applicant or the job's employer."""
    return ApplicationResponse.model_validate(application_service.get_application(db, user, application_id))


@router.put("/{application_id}/status", response_model=ApplicationResponse)
def update_status(
    application_id: str,
    data: StatusUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Set the status of an application to one of the caller's jobs."""
    application = application_service.update_status(db, user, application_id, data.status)
    return ApplicationResponse.model_validate(application)


@router.post("/{application_id}/documents", response_model=DocumentUploadResponse)
def upload_documents(
    application_id: str,
    documents: list[UploadFile] | None = File(None),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Attach documents to an application."""
    added = application_service.add_documents(db, user, application_id, _read_uploads(documents))
    return DocumentUploadResponse(
        message="Documents uploaded successfully",
        documents=[DocumentResponse.model_validate(d) for d in added],
    )


@router.delete("/{application_id}/documents/{document_id}", response_model=MessageResponse)
def delete_document(
    application_id: str,
    document_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Remove a document and its stored file."""
    application_service.delete_document(db, user, application_id, document_id)
    return MessageResponse(message="Document deleted successfully")


@router.delete("/{application_id}/withdraw", response_model=MessageResponse)
def withdraw_application(
    application_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Withdraw the caller's own application."""
    application_service.withdraw(db, user, application_id)
    return MessageResponse(message="Application withdrawn successfully")
