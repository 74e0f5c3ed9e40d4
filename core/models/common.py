# =============================================================================
# core/models/common.py - Shared Field Types
# =============================================================================
# - MediaField: a media reference classified once when the request is parsed
# - OptionalMediaField: same, but null means "leave unchanged" (updates)
# - OptionalUrl: "" or an absolute http(s) URL
# - media_spec / media_value: glue between request models and the uploader
# =============================================================================

from __future__ import annotations

from typing import Annotated, Any
from urllib.parse import urlparse

from pydantic import BeforeValidator, PlainSerializer, PlainValidator, WithJsonSchema

from core.media import InvalidReference, MediaReference

# (field path, reference, label prefix) as consumed by ConditionalUploader
MediaSpec = tuple[str, MediaReference, str]


def _parse_media(value: Any) -> MediaReference:
    if isinstance(value, MediaReference):
        return value
    if value is not None and not isinstance(value, str):
        raise ValueError("media reference must be a string")
    try:
        return MediaReference.parse(value)
    except InvalidReference as e:
        raise ValueError(e.message) from e


MediaField = Annotated[
    MediaReference,
    PlainValidator(_parse_media),
    PlainSerializer(lambda ref: ref.value, return_type=str),
    WithJsonSchema({
        "type": "string",
        "description": "Empty, a blob: reference from /media/drafts, or an uploaded image URL",
    }),
]


def _parse_optional_media(value: Any) -> MediaReference | None:
    # null means "leave unchanged"; "" clears the field
    return None if value is None else _parse_media(value)


OptionalMediaField = Annotated[
    MediaReference | None,
    PlainValidator(_parse_optional_media),
    PlainSerializer(lambda ref: None if ref is None else ref.value, return_type=str | None),
    WithJsonSchema({
        "anyOf": [{"type": "string"}, {"type": "null"}],
        "description": "Omit or null to keep the current image, empty string to clear it",
    }),
]


def _check_url(value: Any) -> Any:
    if value is None or value == "":
        return value
    if not isinstance(value, str):
        raise ValueError("must be a URL string")
    parsed = urlparse(value.strip())
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("must be a valid http(s) URL or empty")
    return value.strip()


OptionalUrl = Annotated[str | None, BeforeValidator(_check_url)]


def split_tags(value: Any) -> Any:
    """Accept "a, b ,c" as well as ["a", "b", "c"]."""
    if isinstance(value, str):
        return [t.strip() for t in value.split(",") if t.strip()]
    return value


def media_spec(field: str, ref: MediaReference | None, label: str) -> list[MediaSpec]:
    """One-element spec list, or empty when the field was left out of an update."""
    return [] if ref is None else [(field, ref, label)]


def media_value(resolved: dict[str, MediaReference], field: str) -> str | None:
    """Text column value for a resolved media field."""
    return resolved[field].to_field()
