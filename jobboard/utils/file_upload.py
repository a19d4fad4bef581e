"""
File Upload Utility - resume storage on local disk.

Stored names are ``<epoch-millis>-<original name>`` with whitespace runs
replaced by '-'. When that name is already taken (two uploads of the same
file in the same millisecond), a random hex tag goes after the timestamp.
Files are created exclusively and never overwritten, and a copy that fails
halfway leaves nothing behind.
"""

import logging
import os
import re
import secrets
import shutil
import time
from dataclasses import dataclass
from typing import Optional

from fastapi import UploadFile

from jobboard.core.errors import InternalError, NotFoundError

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")
MAX_NAME_ATTEMPTS = 5


@dataclass(frozen=True)
class StoredFile:
    filename: str
    path: str


def safe_filename(original: str, now_ms: Optional[int] = None, tag: Optional[str] = None) -> str:
    """Timestamp-prefixed, whitespace-free, directory-free file name."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    base = os.path.basename(original.replace("\\", "/")) or "resume"
    prefix = f"{now_ms}-{tag}" if tag else str(now_ms)
    return f"{prefix}-{_WHITESPACE.sub('-', base)}"


class ResumeStorage:
    def __init__(self, upload_dir: str):
        self.upload_dir = os.path.abspath(upload_dir)

    def ensure_dir(self) -> None:
        os.makedirs(self.upload_dir, exist_ok=True)

    def save(self, upload: UploadFile) -> StoredFile:
        """Write an uploaded file to disk under a name no other upload holds."""
        self.ensure_dir()
        now_ms = int(time.time() * 1000)

        for attempt in range(MAX_NAME_ATTEMPTS):
            tag = secrets.token_hex(4) if attempt else None
            filename = safe_filename(upload.filename or "", now_ms, tag)
            path = os.path.join(self.upload_dir, filename)
            try:
                out = open(path, "xb")
            except FileExistsError:
                continue

            stored = StoredFile(filename=filename, path=path)
            try:
                with out:
                    upload.file.seek(0)
                    shutil.copyfileobj(upload.file, out)
            except BaseException:
                self.discard(stored)
                raise
            return stored

        raise InternalError("Could not store uploaded file")

    def discard(self, stored: Optional[StoredFile]) -> None:
        """Delete a stored file. Failures are logged, never raised."""
        if stored is None:
            return
        try:
            os.remove(stored.path)
        except OSError as e:
            logger.error("Failed to delete uploaded file %s: %s", stored.path, e)

    def resolve(self, filename: str) -> str:
        """Absolute path of a stored file, for downloads."""
        path = os.path.abspath(os.path.join(self.upload_dir, filename))
        if os.path.dirname(path) != self.upload_dir or not os.path.isfile(path):
            raise NotFoundError("File not found")
        return path
