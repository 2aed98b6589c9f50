"""Database table models."""

import uuid
from datetime import UTC, datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from jobhub.db.base import Base

ROLES = ("admin", "employer", "jobseeker")
JOB_TYPES = ("Full-Time", "Part-Time", "Internship", "Contract", "Remote")
APPLICATION_STATUSES = ("applied", "reviewing", "hired", "rejected")
DOCUMENT_TYPES = ("resume", "coverLetter", "certificate", "pdf", "document", "image", "other")


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(UTC)


class User(Base):
    """User account."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    name: Mapped[str] = mapped_column(String(50))
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255))
    role: Mapped[str] = mapped_column(String(20), default="jobseeker", index=True)  # admin/employer/jobseeker
    bio: Mapped[str] = mapped_column(String(500), default="")
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    last_login: Mapped[datetime | None] = mapped_column(DateTime, default=None)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, onupdate=utcnow)

    jobs: Mapped[list["Job"]] = relationship(back_populates="poster")
    applications: Mapped[list["Application"]] = relationship(back_populates="applicant")


class Job(Base):
    """A posted employment opportunity."""

    __tablename__ = "jobs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    title: Mapped[str] = mapped_column(String(255))
    company: Mapped[str] = mapped_column(String(255))
    location: Mapped[str] = mapped_column(String(255))
    type: Mapped[str] = mapped_column(String(20), default="Full-Time", index=True)
    description: Mapped[str] = mapped_column(Text)
    requirements: Mapped[str] = mapped_column(Text, default="")
    salary: Mapped[str] = mapped_column(String(100), default="Not specified")
    apply_link: Mapped[str | None] = mapped_column(Text, default=None)
    source: Mapped[str] = mapped_column(String(100), default="JobHub")
    deadline: Mapped[datetime | None] = mapped_column(DateTime, default=None)
    # Denormalised; only changed with SQL-side +/- 1 alongside the application row
    applications: Mapped[int] = mapped_column(Integer, default=0)
    posted_by: Mapped[str | None] = mapped_column(ForeignKey("users.id"), index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, onupdate=utcnow)

    poster: Mapped["User | None"] = relationship(back_populates="jobs")
    job_applications: Mapped[list["Application"]] = relationship(
        back_populates="job", cascade="all, delete-orphan", passive_deletes=True
    )


class Application(Base):
    """A jobseeker's submission against a job."""

    __tablename__ = "applications"
    __table_args__ = (UniqueConstraint("job_id", "applicant_id", name="uq_application_job_applicant"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    job_id: Mapped[str] = mapped_column(ForeignKey("jobs.id", ondelete="CASCADE"), index=True)
    applicant_id: Mapped[str] = mapped_column(ForeignKey("users.id"), index=True)
    cover_letter: Mapped[str] = mapped_column(Text, default="")
    status: Mapped[str] = mapped_column(String(20), default="applied")  # applied/reviewing/hired/rejected
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, onupdate=utcnow)

    job: Mapped["Job"] = relationship(back_populates="job_applications")
    applicant: Mapped["User"] = relationship(back_populates="applications")
    documents: Mapped[list["Document"]] = relationship(
        back_populates="application",
        order_by="Document.position",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class Document(Base):
    """An uploaded file attached to an application."""

    __tablename__ = "documents"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    application_id: Mapped[str] = mapped_column(ForeignKey("applications.id", ondelete="CASCADE"), index=True)
    url: Mapped[str] = mapped_column(Text)
    name: Mapped[str] = mapped_column(String(255))
    type: Mapped[str] = mapped_column(String(20), default="other")  # resume/coverLetter/certificate/...
    size: Mapped[int] = mapped_column(Integer, default=0)
    position: Mapped[int] = mapped_column(Integer, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    application: Mapped["Application"] = relationship(back_populates="documents")
