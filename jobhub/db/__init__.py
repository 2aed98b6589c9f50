"""Database package."""

from jobhub.db.base import Base, get_db, init_db
from jobhub.db.tables import (
    APPLICATION_STATUSES,
    DOCUMENT_TYPES,
    JOB_TYPES,
    ROLES,
    Application,
    Document,
    Job,
    User,
)

__all__ = [
    "Base",
    "get_db",
    "init_db",
    "User",
    "Job",
    "Application",
    "Document",
    "ROLES",
    "JOB_TYPES",
    "APPLICATION_STATUSES",
    "DOCUMENT_TYPES",
]
