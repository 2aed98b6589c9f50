"""Upload validation, file storage and identifier comparison."""

import uuid

import pytest

from jobhub.config import settings
from jobhub.db import User
from jobhub.errors import AuthorizationError, ValidationError
from jobhub.services.access import ensure_owner, is_owner, same_id
from jobhub.storage import (
    IncomingFile,
    delete_stored,
    discard,
    path_for_url,
    save_upload,
    save_uploads,
    validate_upload,
    validate_uploads,
)


def test_validate_accepts_allowed_extensions(upload_dir):
    for name in ("a.pdf", "b.JPG", "c.jpeg", "d.png", "e.doc", "f.docx", "g.txt"):
        validate_upload(IncomingFile(filename=name, content=b"data"))


@pytest.mark.parametrize("name", ["script.exe", "noext", "", "archive.pdf.zip"])
def test_validate_rejects_other_extensions(upload_dir, name):
    with pytest.raises(ValidationError) as exc:
        validate_upload(IncomingFile(filename=name, content=b"data"))
    assert exc.value.errors[0]["field"] == "documents"


def test_validate_rejects_oversized(upload_dir, monkeypatch):
    monkeypatch.setattr(settings, "max_upload_size", 10)
    validate_upload(IncomingFile(filename="ok.pdf", content=b"x" * 10))
    with pytest.raises(ValidationError, match="File too large"):
        validate_upload(IncomingFile(filename="big.pdf", content=b"x" * 11))


def test_validate_rejects_too_many_files(upload_dir):
    files = [IncomingFile(filename=f"{i}.pdf", content=b"x") for i in range(settings.max_files_per_request + 1)]
    with pytest.raises(ValidationError, match="Too many files"):
        validate_uploads(files)


def test_save_and_delete(upload_dir):
    stored = save_upload(IncomingFile(filename="../../etc/resume.pdf", content=b"%PDF"))

    assert stored.name == "resume.pdf"
    assert stored.size == 4
    assert stored.url.startswith("/uploads/") and stored.url.endswith(".pdf")
    assert stored.path.parent == upload_dir
    assert stored.path.read_bytes() == b"%PDF"

    delete_stored(stored.url)
    assert not stored.path.exists()
    # Already gone is not an error
    delete_stored(stored.url)


def test_path_for_url_stays_in_upload_dir(upload_dir):
    assert path_for_url("/uploads/../../secret.txt") == upload_dir / "secret.txt"


def test_save_uploads_and_discard(upload_dir):
    stored = save_uploads(
        [IncomingFile(filename="a.pdf", content=b"a"), IncomingFile(filename="b.png", content=b"b")]
    )
    assert len({s.url for s in stored}) == 2
    assert len(list(upload_dir.iterdir())) == 2

    discard(stored)
    assert list(upload_dir.iterdir()) == []


def test_same_id_normalizes_types():
    value = uuid.uuid4()
    assert same_id(value, str(value))
    assert same_id(str(value), value)
    assert not same_id(value, uuid.uuid4())
    assert not same_id(None, None)
    assert not same_id(str(value), None)


def test_ownership_checks():
    owner = User(id="u-1", role="employer")
    admin = User(id="u-2", role="admin")

    assert is_owner("u-1", owner)
    assert not is_owner("u-1", admin)

    ensure_owner("u-1", owner, "nope")
    ensure_owner("u-1", admin, "nope", allow_admin=True)
    with pytest.raises(AuthorizationError, match="nope"):
        ensure_owner("u-1", admin, "nope")
