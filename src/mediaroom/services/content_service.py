"""Content creation, media upload, detail reads and author deletes."""
from __future__ import annotations

import base64
import binascii
import logging
import re
import time

from sqlalchemy.orm import Session

from mediaroom.core.errors import (
    NotFoundError,
    UpstreamError,
    UpstreamTimeoutError,
    ValidationError,
)
from mediaroom.core.settings import settings
from mediaroom.models import ContentKind
from mediaroom.repositories.content_repo import ContentRepository
from mediaroom.repositories.records import ContentDetail
from mediaroom.services import counters
from mediaroom.services.blob_store import (
    BlobStoreClient,
    BlobStoreDisabledError,
    BlobStoreError,
    BlobStoreTimeoutError,
    get_blob_store_client,
)
from mediaroom.services.counters import CounterField

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]")
_MEDIA_PREFIXES = {ContentKind.PHOTO: "image/", ContentKind.VIDEO: "video/"}


def _parse_kind(kind: ContentKind | str) -> ContentKind:
    try:
        return ContentKind(kind)
    except ValueError as exc:
        raise ValidationError(f"Unsupported content kind: {kind}") from exc


def _clean_title(title: str) -> str:
    text = (title or "").strip()
    if not text:
        raise ValidationError("Title is required")
    if len(text) > settings.title_max_length:
        raise ValidationError(
            f"Title is too long (max {settings.title_max_length} characters)"
        )
    return text


def _max_upload_bytes(kind: ContentKind) -> int:
    if kind is ContentKind.VIDEO:
        return settings.upload_max_video_bytes
    return settings.upload_max_photo_bytes


def sanitize_filename(filename: str) -> str:
    """Return a storage-safe version of a client-supplied filename."""
    name = (filename or "").replace("\\", "/").rsplit("/", 1)[-1]
    name = _UNSAFE_FILENAME_CHARS.sub("_", name).lstrip(".")
    return name or "upload"


def build_object_path(filename: str, *, now: float | None = None) -> str:
    """Return ``uploads/<millis>-<name>`` for a new blob."""
    millis = int((time.time() if now is None else now) * 1000)
    return f"uploads/{millis}-{sanitize_filename(filename)}"


def default_thumbnail(kind: ContentKind, media_url: str | None) -> str | None:
    """Pick the thumbnail to store when none was uploaded."""
    if kind is ContentKind.VIDEO:
        return settings.video_placeholder_thumbnail
    if kind is ContentKind.PHOTO:
        return media_url
    return None


def _decode_payload(encoded: str, label: str) -> bytes:
    try:
        return base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValidationError(f"{label} is not valid base64") from exc


def create_content(
    db: Session,
    *,
    author_id: int,
    kind: ContentKind | str,
    title: str,
    description: str | None = None,
    media_url: str | None = None,
    thumbnail_url: str | None = None,
) -> ContentDetail:
    """Persist a content row whose media, if any, is already hosted.

    Raises:
        ValidationError: For an unknown kind, a bad title, or a photo/video
            without a media URL.
    """
    content_kind = _parse_kind(kind)
    clean_title = _clean_title(title)
    if content_kind is ContentKind.TEXT:
        media_url = None
    elif not media_url:
        raise ValidationError(f"A {content_kind.value} post requires media")

    repo = ContentRepository(db)
    content = repo.create(
        author_id=author_id,
        kind=content_kind.value,
        title=clean_title,
        description=(description or "").strip() or None,
        media_url=media_url,
        thumbnail_url=thumbnail_url or default_thumbnail(content_kind, media_url),
    )
    db.commit()
    content_id = content.id
    logger.info("User %s created %s content %s", author_id, content_kind.value, content_id)

    detail = repo.find_by_id(content_id)
    if detail is None:  # pragma: no cover - deleted between commit and read
        raise NotFoundError("Content not found")
    return detail


async def upload_and_create(
    db: Session,
    *,
    author_id: int,
    kind: ContentKind | str,
    title: str,
    file_b64: str,
    filename: str,
    content_type: str,
    description: str | None = None,
    thumbnail_b64: str | None = None,
    client: BlobStoreClient | None = None,
) -> ContentDetail:
    """Upload media bytes to the blob store, then persist the content row.

    Everything that can be validated locally is checked before the first
    upload so a rejected request never leaves an orphaned blob.

    Raises:
        ValidationError: For malformed or oversized payloads.
        UpstreamError: If the blob store is disabled or fails.
        UpstreamTimeoutError: If the blob store times out.
    """
    content_kind = _parse_kind(kind)
    _clean_title(title)
    if content_kind is ContentKind.TEXT:
        raise ValidationError("Text posts cannot carry media")

    expected_prefix = _MEDIA_PREFIXES[content_kind]
    if not (content_type or "").lower().startswith(expected_prefix):
        raise ValidationError(f"Expected a {expected_prefix}* file for a {content_kind.value} post")

    data = _decode_payload(file_b64, "file_b64")
    if not data:
        raise ValidationError("Uploaded file is empty")
    limit = _max_upload_bytes(content_kind)
    if len(data) > limit:
        raise ValidationError(f"File too large (max {limit // (1024 * 1024)} MB)")

    thumbnail = _decode_payload(thumbnail_b64, "thumbnail_b64") if thumbnail_b64 else None
    if thumbnail is not None and len(thumbnail) > settings.upload_max_photo_bytes:
        raise ValidationError("Thumbnail too large")

    store = client or get_blob_store_client()
    try:
        media_url = await store.put_object(build_object_path(filename), data, content_type)
        thumbnail_url = None
        if thumbnail:
            thumbnail_url = await store.put_object(
                build_object_path(f"thumb-{filename}.jpg"), thumbnail, "image/jpeg"
            )
    except BlobStoreDisabledError as exc:
        raise UpstreamError("Media uploads are not available") from exc
    except BlobStoreTimeoutError as exc:
        raise UpstreamTimeoutError("Blob store timed out") from exc
    except BlobStoreError as exc:
        raise UpstreamError("Failed to store media", retryable=True) from exc

    return create_content(
        db,
        author_id=author_id,
        kind=content_kind,
        title=title,
        description=description,
        media_url=media_url,
        thumbnail_url=thumbnail_url,
    )


def get_content(db: Session, content_id: int, *, count_view: bool = True) -> ContentDetail:
    """Return content detail, counting a view first when ``count_view`` is set.

    A failed view increment is logged and does not fail the read.

    Raises:
        NotFoundError: If the content does not exist.
    """
    if count_view:
        try:
            counters.increment(db, content_id, CounterField.VIEWS)
        except UpstreamError as exc:
            logger.warning("Could not count view of content %s: %s", content_id, exc.message)

    detail = ContentRepository(db).find_by_id(content_id)
    if detail is None:
        raise NotFoundError("Content not found")
    return detail


def delete_content(db: Session, content_id: int, author_id: int) -> bool:
    """Delete content owned by ``author_id``; False if missing or not the author."""
    deleted = ContentRepository(db).delete_by_id_and_author(content_id, author_id)
    if not deleted:
        db.rollback()
        return False
    db.commit()
    logger.info("User %s deleted content %s", author_id, content_id)
    return True


def count_content(db: Session) -> int:
    return ContentRepository(db).count()
