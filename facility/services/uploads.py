"""
Uploaded files: validation, storage and cleanup.

Files are written through Django's default storage under
``MEDIA_ROOT/<kind>/`` and referenced by their relative name (for
example ``photos/photo-1718000000000-123456789.jpg``).  Writes that
create several rows stage their files in :class:`StagedUploads` so a
failed write leaves no orphaned files behind.
"""
from __future__ import annotations

import logging
import os
import secrets
import time

from django.conf import settings
from django.core.files.storage import default_storage
from django.core.files.uploadedfile import UploadedFile

from facility.exceptions import ValidationError

logger = logging.getLogger(__name__)


def _rules(kind: str) -> dict:
    try:
        return settings.UPLOAD_RULES[kind]
    except KeyError:
        raise ValueError(f"Unknown upload kind {kind!r}") from None


def validate_upload(kind: str, upload: UploadedFile, *, field: str) -> str:
    """Check type and size of ``upload``; return the lower-cased extension."""
    rules = _rules(kind)
    ext = os.path.splitext(upload.name or '')[1].lower()
    if rules['extensions'] and ext not in rules['extensions']:
        allowed = ', '.join(e.lstrip('.') for e in rules['extensions'])
        raise ValidationError(f"Only {allowed} files are allowed", field=field)
    if rules['content_types']:
        ctype = (getattr(upload, 'content_type', '') or '').lower()
        if not any(ctype.startswith(t) for t in rules['content_types']):
            raise ValidationError("Only image and PDF files are allowed", field=field)
    if upload.size > rules['max_mb'] * 1024 * 1024:
        raise ValidationError(f"File exceeds {rules['max_mb']}MB", field=field)
    return ext


def generated_name(kind: str, label: str, ext: str) -> str:
    stamp = int(time.time() * 1000)
    return f"{kind}/{label}-{stamp}-{secrets.randbelow(10**9)}{ext}"


def save_upload(kind: str, upload: UploadedFile, *, label: str, field: str) -> str:
    ext = validate_upload(kind, upload, field=field)
    name = default_storage.save(generated_name(kind, label, ext), upload)
    logger.debug("Stored upload %s", name)
    return name


def remove_upload(name: str | None) -> bool:
    """Delete a stored file; a file that is already gone is not an error."""
    if not name:
        return False
    if not default_storage.exists(name):
        logger.info("Upload %s already missing, nothing to delete", name)
        return False
    default_storage.delete(name)
    return True


class StagedUploads:
    """Collect files saved during a write and delete them if the write fails.

    Usage::

        with StagedUploads() as staged:
            photo = staged.save('photos', request_file, label='photo', field='photo')
            ...  # database work; an exception here removes the photo again
    """

    def __init__(self) -> None:
        self.names: list[str] = []

    def save(self, kind: str, upload: UploadedFile | None, *, label: str, field: str) -> str:
        if upload is None:
            return ''
        name = save_upload(kind, upload, label=label, field=field)
        self.names.append(name)
        return name

    def discard(self) -> None:
        for name in self.names:
            try:
                remove_upload(name)
            except OSError:
                logger.exception("Could not remove staged upload %s", name)
        self.names.clear()

    def __enter__(self) -> "StagedUploads":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is not None:
            self.discard()
        return False
