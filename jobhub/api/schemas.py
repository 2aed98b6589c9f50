"""API request/response schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, EmailStr, Field, HttpUrl, field_serializer, field_validator

RoleName = Literal["admin", "employer", "jobseeker"]
JobType = Literal["Full-Time", "Part-Time", "Internship", "Contract", "Remote"]
ApplicationStatus = Literal["applied", "reviewing", "hired", "rejected"]


# Auth schemas
class RegisterRequest(BaseModel):
    name: str = Field(min_length=2, max_length=50)
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)
    role: RoleName = "jobseeker"

    class Config:
        str_strip_whitespace = True


class LoginRequest(BaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class ProfileUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=2, max_length=50)
    email: EmailStr | None = None
    bio: str | None = Field(default=None, max_length=500)
    password: str | None = Field(default=None, min_length=6, max_length=128)

    class Config:
        str_strip_whitespace = True


class UserSummary(BaseModel):
    id: str
    name: str
    email: str

    class Config:
        from_attributes = True


class PosterResponse(UserSummary):
    role: str


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    role: str
    bio: str
    created_at: datetime

    class Config:
        from_attributes = True


class AuthResponse(BaseModel):
    user: UserResponse
    token: str


# Job schemas
def _coerce_salary(value):
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


def _blank_as_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


class JobCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    company: str = Field(min_length=1, max_length=255)
    location: str = Field(min_length=1, max_length=255)
    type: JobType
    description: str = Field(min_length=1)
    requirements: str = ""
    salary: str | None = Field(default=None, max_length=100)
    apply_link: HttpUrl | None = None
    source: str | None = Field(default=None, max_length=100)
    deadline: datetime | None = None

    class Config:
        str_strip_whitespace = True

    @field_validator("salary", mode="before")
    @classmethod
    def salary_as_text(cls, value):
        return _coerce_salary(value)

    @field_validator("apply_link", mode="before")
    @classmethod
    def blank_apply_link(cls, value):
        return _blank_as_none(value)

    @field_serializer("apply_link")
    def apply_link_as_text(self, value: HttpUrl | None) -> str | None:
        return str(value) if value is not None else None


class JobUpdate(BaseModel):
    """Partial update: only fields present in the request body are applied."""

    title: str | None = Field(default=None, min_length=1, max_length=255)
    company: str | None = Field(default=None, min_length=1, max_length=255)
    location: str | None = Field(default=None, min_length=1, max_length=255)
    type: JobType | None = None
    description: str | None = Field(default=None, min_length=1)
    requirements: str | None = None
    salary: str | None = Field(default=None, max_length=100)
    apply_link: HttpUrl | None = None
    source: str | None = Field(default=None, max_length=100)
    deadline: datetime | None = None

    class Config:
        str_strip_whitespace = True

    @field_validator("salary", mode="before")
    @classmethod
    def salary_as_text(cls, value):
        return _coerce_salary(value)

    @field_validator("apply_link", mode="before")
    @classmethod
    def blank_apply_link(cls, value):
        return _blank_as_none(value)

    @field_serializer("apply_link")
    def apply_link_as_text(self, value: HttpUrl | None) -> str | None:
        return str(value) if value is not None else None

    @field_validator("title", "company", "location", "type", "description")
    @classmethod
    def required_fields_not_null(cls, value):
        if value is None:
            raise ValueError("Field cannot be null")
        return value


class JobResponse(BaseModel):
    id: str
    title: str
    company: str
    location: str
    type: str
    description: str
    requirements: str
    salary: str
    apply_link: str | None
    source: str
    deadline: datetime | None
    applications: int
    posted_by: str | None
    poster: PosterResponse | None = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class PageMeta(BaseModel):
    total: int
    page: int
    limit: int
    pages: int


class JobListResponse(BaseModel):
    data: list[JobResponse]
    meta: PageMeta


class MessageResponse(BaseModel):
    message: str


# Application schemas
class JobSummary(BaseModel):
    id: str
    title: str
    company: str
    location: str
    type: str
    salary: str
    applications: int
    posted_by: str | None
    created_at: datetime

    class Config:
        from_attributes = True


class DocumentResponse(BaseModel):
    id: str
    url: str
    name: str
    type: str
    size: int
    created_at: datetime

    class Config:
        from_attributes = True


class ApplicationResponse(BaseModel):
    id: str
    job_id: str
    applicant_id: str
    cover_letter: str
    status: str
    documents: list[DocumentResponse]
    job: JobSummary | None = None
    applicant: UserSummary | None = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ApplicationListResponse(BaseModel):
    applications: list[ApplicationResponse]


class StatusUpdate(BaseModel):
    status: ApplicationStatus


class DocumentUploadResponse(BaseModel):
    message: str
    documents: list[DocumentResponse]


class JobApplicationCount(BaseModel):
    job_id: str
    job_title: str
    application_count: int


class ApplicationStats(BaseModel):
    total_applications: int
    applications_by_status: dict[str, int]
    total_jobs_posted: int
    total_applications_received: int
    applications_by_job: list[JobApplicationCount]


class StatsResponse(BaseModel):
    stats: ApplicationStats
