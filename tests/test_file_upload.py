import io
import os
import re
from types import SimpleNamespace

import pytest
from fastapi import UploadFile

from jobboard.core.errors import NotFoundError
from jobboard.utils import file_upload
from jobboard.utils.file_upload import ResumeStorage, safe_filename


def test_safe_filename():
    assert safe_filename("my  cv final.pdf", now_ms=1700000000000) == "1700000000000-my-cv-final.pdf"
    assert safe_filename("../../etc/passwd", now_ms=1) == "1-passwd"
    assert safe_filename("C:\\Users\\me\\cv.docx", now_ms=1) == "1-cv.docx"
    assert safe_filename("", now_ms=1) == "1-resume"
    assert safe_filename("cv.pdf", now_ms=1, tag="ab12cd34") == "1-ab12cd34-cv.pdf"


def test_save_discard_resolve(tmp_path):
    storage = ResumeStorage(str(tmp_path / "uploads"))
    upload = UploadFile(file=io.BytesIO(b"resume bytes"), filename="cv.pdf")

    stored = storage.save(upload)
    assert storage.resolve(stored.filename) == stored.path
    with open(stored.path, "rb") as f:
        assert f.read() == b"resume bytes"

    storage.discard(stored)
    with pytest.raises(NotFoundError):
        storage.resolve(stored.filename)

    # deleting twice only logs
    storage.discard(stored)


def test_resolve_rejects_paths_outside_upload_dir(tmp_path):
    (tmp_path / "secret.txt").write_text("nope")
    storage = ResumeStorage(str(tmp_path / "uploads"))
    storage.ensure_dir()
    with pytest.raises(NotFoundError):
        storage.resolve("../secret.txt")


def test_public_dir_is_served(tmp_path):
    from fastapi.testclient import TestClient
    from jobboard.core.config import Settings
    from jobboard.main import create_app

    public = tmp_path / "public"
    public.mkdir()
    (public / "index.html").write_text("<h1>Jobs</h1>")
    settings = Settings(
        _env_file=None,
        database_url=f"sqlite:///{tmp_path / 'static.db'}",
        upload_dir=str(tmp_path / "uploads"),
        public_dir=str(public),
        seed_on_startup=False,
    )
    with TestClient(create_app(settings)) as client:
        assert "<h1>Jobs</h1>" in client.get("/").text
        assert client.get("/api/jobs").json() == []


def test_taken_name_gets_tagged(tmp_path, monkeypatch):
    monkeypatch.setattr(file_upload, "time", SimpleNamespace(time=lambda: 1700000000.0))
    storage = ResumeStorage(str(tmp_path / "uploads"))

    first = storage.save(UploadFile(file=io.BytesIO(b"one"), filename="cv.pdf"))
    second = storage.save(UploadFile(file=io.BytesIO(b"two"), filename="cv.pdf"))

    assert first.filename == "1700000000000-cv.pdf"
    assert re.fullmatch(r"1700000000000-[0-9a-f]{8}-cv\.pdf", second.filename)
    with open(first.path, "rb") as f:
        assert f.read() == b"one"
    with open(second.path, "rb") as f:
        assert f.read() == b"two"


def test_failed_copy_removes_partial_file(tmp_path, monkeypatch):
    def partial_copy(src, dst):
        dst.write(b"half a resu")
        raise OSError("No space left on device")

    monkeypatch.setattr(file_upload, "shutil", SimpleNamespace(copyfileobj=partial_copy))
    storage = ResumeStorage(str(tmp_path / "uploads"))

    with pytest.raises(OSError):
        storage.save(UploadFile(file=io.BytesIO(b"full resume"), filename="cv.pdf"))
    assert os.listdir(storage.upload_dir) == []
