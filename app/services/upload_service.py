import logging
import os
import random
import re
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from fastapi import UploadFile

from app.utils.exceptions import (
    InvalidFileTypeException, FileTooLargeException, TooManyFilesException,
)

logger = logging.getLogger(__name__)


ALLOWED_TYPES = (
    "image/jpeg",
    "image/png",
    "image/gif",
    "image/webp",
    "application/octet-stream",
)
ALLOWED_EXTENSIONS = re.compile(r"\.(jpg|jpeg|png|gif|webp)$", re.IGNORECASE)

CHUNK_SIZE = 64 * 1024


def is_allowed_file(content_type: str | None, file_name: str | None) -> bool:
    """A file passes if either its declared MIME type or its extension is an image one."""
    if content_type and content_type.split(";")[0].strip().lower() in ALLOWED_TYPES:
        return True
    return bool(file_name and ALLOWED_EXTENSIONS.search(file_name))


def generate_file_name(original_name: str | None) -> str:
    """<ms timestamp>-<random int><original extension>"""
    ext = os.path.splitext(original_name or "")[1].lower()
    return f"{int(time.time() * 1000)}-{random.randint(0, 999_999_999)}{ext}"


def to_public_url(path: str, base_url: str) -> str:
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


@dataclass
class StoredFile:
    fileName:     str
    path:         str      # host-relative URL path
    diskPath:     Path
    size:         int
    contentType:  str | None
    originalName: str | None


class UploadStore:
    """
    Validates and writes uploaded images into one directory.

    The store knows nothing about database rows: callers get back
    StoredFile records and link them to a vehicle or form themselves.
    """

    def __init__(
        self,
        directory: str | Path,
        url_prefix: str,
        max_size: int = 5 * 1024 * 1024,
        max_files: int = 10,
    ):
        self.directory  = Path(directory)
        self.url_prefix = "/" + url_prefix.strip("/")
        self.max_size   = max_size
        self.max_files  = max_files

    # ─── Directory ────────────────────────────────────────────────────────────
    def ensure_directory(self) -> Path:
        if not self.directory.exists():
            self.directory.mkdir(parents=True, exist_ok=True)
            logger.info(f"Created upload directory: {self.directory.resolve()}")
        return self.directory

    def is_writable(self) -> bool:
        return self.directory.is_dir() and os.access(self.directory, os.W_OK)

    # ─── Validation ───────────────────────────────────────────────────────────
    def validate(self, files: Sequence[UploadFile]) -> None:
        """Type and count checks only; nothing touches the disk."""
        if len(files) > self.max_files:
            raise TooManyFilesException(self.max_files)
        for f in files:
            if not is_allowed_file(f.content_type, f.filename):
                logger.warning(f"File rejected: {f.filename} ({f.content_type})")
                raise InvalidFileTypeException(f.filename)

    # ─── Storage ──────────────────────────────────────────────────────────────
    def save_all(self, files: Sequence[UploadFile]) -> list[StoredFile]:
        """
        Validate every file, then write them in upload order.

        Either all files end up on disk or none do: a size-limit failure
        removes whatever this call already wrote.
        """
        files = [f for f in files if f.filename]
        self.validate(files)
        if not files:
            return []

        self.ensure_directory()
        stored: list[StoredFile] = []
        try:
            for f in files:
                stored.append(self._write(f))
        except Exception:
            self.discard(stored)
            raise
        return stored

    def _write(self, upload: UploadFile) -> StoredFile:
        # Exclusive create: never overwrite another request's file.
        while True:
            name = generate_file_name(upload.filename)
            target = self.directory / name
            try:
                out = open(target, "xb")
            except FileExistsError:
                logger.warning(f"Generated name {name} already exists, picking another")
                continue
            break

        size = 0
        upload.file.seek(0)
        with out:
            while chunk := upload.file.read(CHUNK_SIZE):
                size += len(chunk)
                if size > self.max_size:
                    break
                out.write(chunk)

        if size > self.max_size:
            target.unlink(missing_ok=True)
            logger.warning(f"File rejected: {upload.filename} exceeds {self.max_size} bytes")
            raise FileTooLargeException(self.max_size, upload.filename)

        logger.info(f"File accepted: {upload.filename} -> {name} ({size} bytes)")
        return StoredFile(
            fileName=name,
            path=f"{self.url_prefix}/{name}",
            diskPath=target,
            size=size,
            contentType=upload.content_type,
            originalName=upload.filename,
        )

    # ─── Cleanup ──────────────────────────────────────────────────────────────
    def discard(self, stored: Sequence[StoredFile]) -> None:
        for s in stored:
            s.diskPath.unlink(missing_ok=True)
        if stored:
            logger.info(f"Discarded {len(stored)} stored file(s)")

    def delete_paths(self, paths: Sequence[str]) -> None:
        """Remove files by the host-relative paths kept in the database."""
        for p in paths:
            if not p.startswith(self.url_prefix + "/"):
                logger.warning(f"Not deleting {p}: outside {self.url_prefix}")
                continue
            (self.directory / Path(p).name).unlink(missing_ok=True)
