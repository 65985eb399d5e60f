"""Primitive value codecs shared by every feed entity.

Dates, mime types, URLs and markup stripping, plus the field readers that
implement the lenient decode policy:

  - a required key that is missing, null or malformed raises DecodeError
  - an optional key that is missing or null takes its default
  - an optional key whose value fails conversion takes its default and a
    warning is logged
"""
import logging
import re
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, List, Mapping, Optional, TypeVar
from urllib.parse import urlsplit

from dateutil.parser import isoparse

from jfeed.errors import DecodeError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# date "T" time offset, e.g. 2019-08-27T14:03:00-07:00 or 2019-08-27T21:03:00Z
_RFC3339_RE = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?(Z|[+-]\d{2}:?\d{2})$"
)
_TAG_RE = re.compile(r"<[^>]+>")
_BAD_URL_CHARS_RE = re.compile(r"[\s\x00-\x1f\x7f]")


JSONFEED_VERSION_URL = "https://jsonfeed.org/version/1"


class FeedVersion(str, Enum):
    """Supported JSON Feed schema versions."""

    V1 = JSONFEED_VERSION_URL

    def __str__(self) -> str:
        return self.value


class MimeType(str, Enum):
    """Attachment media types understood by the decoder."""

    AUDIO_WAV = "audio/wav"
    AUDIO_WEBM = "audio/webm"
    VIDEO_WEBM = "video/webm"
    AUDIO_OGG = "audio/ogg"
    VIDEO_OGG = "video/ogg"
    AUDIO_MP4 = "audio/mp4"
    VIDEO_MP4 = "video/mp4"
    AUDIO_MPEG = "audio/mpeg"
    AUDIO_FLAC = "audio/flac"
    AUDIO_AAC = "audio/aac"

    def __str__(self) -> str:
        return self.value


def parse_date(value: Any) -> Optional[datetime]:
    """Parse an RFC 3339 date-time string. Returns None instead of raising."""
    if not isinstance(value, str) or not _RFC3339_RE.match(value.strip()):
        return None
    try:
        return isoparse(value.strip())
    except (ValueError, OverflowError):
        return None


def format_date(dt: datetime) -> str:
    """Format a datetime as ``YYYY-MM-DDTHH:MM:SS+HH:MM`` (``Z`` for UTC)."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    text = dt.replace(microsecond=0).isoformat()
    if text.endswith("+00:00"):
        text = text[:-6] + "Z"
    return text


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_mime_type(value: Any) -> MimeType:
    if isinstance(value, MimeType):
        return value
    try:
        return MimeType(value)
    except ValueError:
        raise DecodeError(f"unsupported mime type {value!r}")


def parse_version(value: Any) -> FeedVersion:
    if isinstance(value, FeedVersion):
        return value
    try:
        return FeedVersion(value)
    except ValueError:
        raise DecodeError(f"unsupported feed version {value!r}")


def parse_url(value: Any) -> str:
    """Check that ``value`` is a syntactically usable URL string and return it."""
    if not isinstance(value, str):
        raise DecodeError(f"expected a URL string, got {type(value).__name__}")
    if not value or _BAD_URL_CHARS_RE.search(value):
        raise DecodeError(f"malformed URL {value!r}")
    try:
        urlsplit(value)
    except ValueError as e:
        raise DecodeError(f"malformed URL {value!r}: {e}")
    return value


def strip_html(markup: str) -> str:
    """Remove anything that looks like a tag. Entities are left alone."""
    return _TAG_RE.sub("", markup)


# --- converters used with read_required / read_optional ---

def as_str(value: Any) -> str:
    if not isinstance(value, str):
        raise DecodeError(f"expected a string, got {type(value).__name__}")
    return value


def as_url(value: Any) -> str:
    return parse_url(value)


def as_bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise DecodeError(f"expected a boolean, got {type(value).__name__}")
    return value


def as_count(value: Any) -> int:
    """Non-negative integer. Booleans are rejected even though they are ints."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(f"expected an integer, got {type(value).__name__}")
    if value < 0:
        raise DecodeError(f"expected a non-negative integer, got {value}")
    return value


def as_date(value: Any) -> datetime:
    dt = parse_date(value)
    if dt is None:
        raise DecodeError(f"not an RFC 3339 date-time: {value!r}")
    return dt


def as_str_list(value: Any) -> List[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise DecodeError("expected a list of strings")
    return list(value)


def as_object(value: Any, key: Optional[str] = None) -> Mapping[str, Any]:
    if not isinstance(value, dict):
        raise DecodeError(f"expected an object, got {type(value).__name__}", key)
    return value


def as_list(value: Any, key: Optional[str] = None) -> list:
    if not isinstance(value, list):
        raise DecodeError(f"expected a list, got {type(value).__name__}", key)
    return value


def read_required(obj: Mapping[str, Any], key: str, convert: Callable[[Any], T]) -> T:
    if key not in obj:
        raise DecodeError("missing required field", key)
    value = obj[key]
    if value is None:
        raise DecodeError("required field is null", key)
    try:
        return convert(value)
    except DecodeError as e:
        raise DecodeError(e.message, key) from e


def read_optional(
    obj: Mapping[str, Any],
    key: str,
    convert: Callable[[Any], T],
    default: Optional[T] = None,
    owner: str = "Decode",
) -> Optional[T]:
    if key not in obj or obj[key] is None:
        return default
    try:
        return convert(obj[key])
    except DecodeError as e:
        logger.warning(f"[{owner}] Ignoring '{key}': {e.message}")
        return default
