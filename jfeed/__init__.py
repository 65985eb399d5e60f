"""jfeed: lenient reader and minimal writer for JSON Feed version 1."""
__version__ = "1.0.0"

from jfeed.codecs import FeedVersion, MimeType, format_date, parse_date, strip_html
from jfeed.document import decode_feed, decode_item, encode_feed, encode_item
from jfeed.errors import ConstructionError, DecodeError, FeedError, SourceUnavailableError
from jfeed.models import Attachment, Author, Feed, Hub, Item
from jfeed.sources import load_feed, save_feed

__all__ = [
    "Attachment", "Author", "ConstructionError", "DecodeError", "Feed", "FeedError",
    "FeedVersion", "Hub", "Item", "MimeType", "SourceUnavailableError",
    "decode_feed", "decode_item", "encode_feed", "encode_item", "format_date",
    "load_feed", "parse_date", "save_feed", "strip_html",
]
