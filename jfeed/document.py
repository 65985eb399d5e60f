"""JSON document adapter: bytes to Feed and back.

No I/O happens here; see jfeed.sources for reading and writing documents.
"""
import json
import logging
from typing import Any, Optional, Union

from jfeed.errors import DecodeError
from jfeed.models import Feed, Item

logger = logging.getLogger(__name__)


def _load_json(data: Union[bytes, str]) -> Any:
    if isinstance(data, (bytes, bytearray)):
        try:
            data = bytes(data).decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise DecodeError(f"document is not valid UTF-8: {e}") from e
    try:
        return json.loads(data)
    except json.JSONDecodeError as e:
        raise DecodeError(f"document is not valid JSON: {e}") from e


def _dump_json(obj: Any, indent: Optional[int]) -> bytes:
    separators = (",", ":") if indent is None else None
    return json.dumps(obj, indent=indent, ensure_ascii=False, separators=separators).encode("utf-8")


def decode_feed(data: Union[bytes, str]) -> Feed:
    """Decode a JSON Feed document. Raises DecodeError (or ConstructionError)."""
    feed = Feed.from_dict(_load_json(data))
    logger.info(f"[Document] Decoded feed '{feed.title}' ({len(feed.items)} items)")
    return feed


def encode_feed(feed: Feed, indent: Optional[int] = 2) -> bytes:
    """Encode ``feed`` as UTF-8 JSON. ``indent=None`` gives compact output."""
    return _dump_json(feed.to_dict(), indent)


def decode_item(data: Union[bytes, str]) -> Item:
    return Item.from_dict(_load_json(data))


def encode_item(item: Item, indent: Optional[int] = 2) -> bytes:
    return _dump_json(item.to_dict(), indent)
