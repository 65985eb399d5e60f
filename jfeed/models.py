"""Data models for jfeed: Feed, Item, Author, Hub and Attachment.

Each entity converts itself to and from the plain dict shape of a JSON Feed
object. Decoding is lenient about optional fields; encoding writes optional
fields only when they carry a value.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, TypeVar

from jfeed.codecs import (
    FeedVersion,
    MimeType,
    as_bool,
    as_count,
    as_date,
    as_list,
    as_object,
    as_str,
    as_str_list,
    as_url,
    format_date,
    parse_date,
    parse_mime_type,
    parse_url,
    parse_version,
    read_optional,
    read_required,
    strip_html,
    utcnow,
)
from jfeed.errors import ConstructionError, DecodeError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _drop_none(d: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in d.items() if v is not None}


def _decode_nested(decode: Callable[[Any], T], value: Any, path: str) -> T:
    try:
        return decode(value)
    except DecodeError as e:
        raise e.nested(path) from e


def _decode_list(decode: Callable[[Any], T], values: list, key: str) -> List[T]:
    return [_decode_nested(decode, v, f"{key}[{i}]") for i, v in enumerate(values)]


def _check_url(owner: str, name: str, value: Any, required: bool = False) -> None:
    """Apply the decoder's URL rules at construction time."""
    if value is None and not required:
        return
    try:
        parse_url(value)
    except DecodeError as e:
        raise ConstructionError(f"{owner} {name}: {e.message}") from e


@dataclass
class Author:
    name: Optional[str] = None
    url: Optional[str] = None
    avatar: Optional[str] = None

    def __post_init__(self):
        if self.name is None and self.url is None and self.avatar is None:
            raise ConstructionError("author needs at least one of name, url or avatar")
        if self.name is not None and not isinstance(self.name, str):
            raise ConstructionError(f"author name must be a string, got {type(self.name).__name__}")
        _check_url("author", "url", self.url)
        _check_url("author", "avatar", self.avatar)

    @classmethod
    def from_dict(cls, d: Any) -> "Author":
        d = as_object(d)
        return cls(
            name=read_optional(d, "name", as_str, owner="Author"),
            url=read_optional(d, "url", as_url, owner="Author"),
            avatar=read_optional(d, "avatar", as_url, owner="Author"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({"name": self.name, "url": self.url, "avatar": self.avatar})


@dataclass
class Hub:
    """Real-time subscription endpoint (e.g. WebSub) for a feed."""

    type: str
    url: str

    def __post_init__(self):
        if not isinstance(self.type, str) or not self.type:
            raise ConstructionError("hub needs both a type and a url")
        _check_url("hub", "url", self.url, required=True)

    @classmethod
    def from_dict(cls, d: Any) -> "Hub":
        d = as_object(d)
        return cls(
            type=read_required(d, "type", as_str),
            url=read_required(d, "url", as_url),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "url": self.url}


@dataclass
class Attachment:
    url: str
    mime_type: MimeType
    title: Optional[str] = None
    size_in_bytes: Optional[int] = None
    duration_in_seconds: Optional[int] = None

    def __post_init__(self):
        _check_url("attachment", "url", self.url, required=True)
        try:
            self.mime_type = MimeType(self.mime_type)
        except ValueError:
            raise ConstructionError(f"unsupported mime type {self.mime_type!r}")
        for name in ("size_in_bytes", "duration_in_seconds"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ConstructionError(f"{name} must not be negative (got {value})")

    @classmethod
    def from_dict(cls, d: Any) -> "Attachment":
        d = as_object(d)
        return cls(
            url=read_required(d, "url", as_url),
            mime_type=read_required(d, "mime_type", parse_mime_type),
            title=read_optional(d, "title", as_str, owner="Attachment"),
            size_in_bytes=read_optional(d, "size_in_bytes", as_count, owner="Attachment"),
            duration_in_seconds=read_optional(d, "duration_in_seconds", as_count, owner="Attachment"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            "url": self.url,
            "mime_type": self.mime_type.value,
            "title": self.title,
            "size_in_bytes": self.size_in_bytes,
            "duration_in_seconds": self.duration_in_seconds,
        })


@dataclass(eq=False)
class Item:
    """A single entry of a feed.

    Two items are equal when their ids are equal, whatever else differs, so
    ``item in feed.items`` answers "is this entry already there".
    """

    id: str
    html_content: str
    url: Optional[str] = None
    external_url: Optional[str] = None
    image: Optional[str] = None
    banner_image: Optional[str] = None
    title: Optional[str] = None
    summary: Optional[str] = None
    date_published: datetime = field(default_factory=utcnow)
    date_modified: Optional[datetime] = None
    author: Optional[Author] = None
    tags: List[str] = field(default_factory=list)
    attachments: List[Attachment] = field(default_factory=list)

    def __post_init__(self):
        if not isinstance(self.id, str) or not self.id:
            raise ConstructionError("item id must be a non-empty string")
        if not isinstance(self.html_content, str):
            raise ConstructionError(
                f"item {self.id}: html_content must be a string, got {type(self.html_content).__name__}"
            )
        if not isinstance(self.date_published, datetime):
            raise ConstructionError(f"item {self.id}: date_published must be a datetime")
        if self.date_modified is not None and not isinstance(self.date_modified, datetime):
            raise ConstructionError(f"item {self.id}: date_modified must be a datetime")
        if self.author is not None and not isinstance(self.author, Author):
            raise ConstructionError(f"item {self.id}: author must be an Author")
        for name in ("url", "external_url", "image", "banner_image"):
            _check_url(f"item {self.id}", name, getattr(self, name))

    def __eq__(self, other):
        if not isinstance(other, Item):
            return NotImplemented
        return self.id == other.id

    def __hash__(self):
        return hash(self.id)

    @property
    def text_content(self) -> str:
        """``html_content`` with markup removed. Always derived, never stored."""
        return strip_html(self.html_content)

    @classmethod
    def from_dict(cls, d: Any) -> "Item":
        d = as_object(d)
        item_id = read_required(d, "id", as_str)

        published = parse_date(d.get("date_published"))
        if published is None:
            # Known nondeterminism: the same bad input decodes to different instants.
            logger.warning(
                f"[Item] {item_id}: unusable date_published {d.get('date_published')!r}, using current time"
            )
            published = utcnow()

        author = None
        if d.get("author") is not None:
            author = _decode_nested(Author.from_dict, d["author"], "author")

        attachments: List[Attachment] = []
        if d.get("attachments") is not None:
            attachments = _decode_list(
                Attachment.from_dict, as_list(d["attachments"], "attachments"), "attachments"
            )

        return cls(
            id=item_id,
            html_content=read_required(d, "content_html", as_str),
            url=read_optional(d, "url", as_url, owner="Item"),
            external_url=read_optional(d, "external_url", as_url, owner="Item"),
            image=read_optional(d, "image", as_url, owner="Item"),
            banner_image=read_optional(d, "banner_image", as_url, owner="Item"),
            title=read_optional(d, "title", as_str, owner="Item"),
            summary=read_optional(d, "summary", as_str, owner="Item"),
            date_published=published,
            date_modified=read_optional(d, "date_modified", as_date, owner="Item"),
            author=author,
            tags=read_optional(d, "tags", as_str_list, default=[], owner="Item"),
            attachments=attachments,
        )

    def to_dict(self) -> Dict[str, Any]:
        d = _drop_none({
            "id": self.id,
            "url": self.url,
            "external_url": self.external_url,
            "image": self.image,
            "banner_image": self.banner_image,
            "title": self.title,
            "content_html": self.html_content,
            "content_text": self.text_content,
            "summary": self.summary,
            "date_published": format_date(self.date_published),
            "date_modified": format_date(self.date_modified) if self.date_modified else None,
            "author": self.author.to_dict() if self.author else None,
        })
        if self.tags:
            d["tags"] = list(self.tags)
        if self.attachments:
            d["attachments"] = [a.to_dict() for a in self.attachments]
        return d


@dataclass
class Feed:
    """Top-level JSON Feed document. Owns its author, hubs and items."""

    title: str
    author: Author
    version: FeedVersion = FeedVersion.V1
    home_page_url: Optional[str] = None
    feed_url: Optional[str] = None
    icon: Optional[str] = None
    favicon: Optional[str] = None
    description: Optional[str] = None
    user_comment: Optional[str] = None
    expired: bool = False
    hubs: List[Hub] = field(default_factory=list)
    items: List[Item] = field(default_factory=list)

    def __post_init__(self):
        if not isinstance(self.title, str) or not self.title:
            raise ConstructionError("feed title must be a non-empty string")
        if not isinstance(self.author, Author):
            raise ConstructionError(f"feed author must be an Author, got {type(self.author).__name__}")
        for name in ("home_page_url", "feed_url", "icon", "favicon"):
            _check_url("feed", name, getattr(self, name))
        try:
            self.version = FeedVersion(self.version)
        except ValueError:
            raise ConstructionError(f"unsupported feed version {self.version!r}")

    @classmethod
    def from_dict(cls, d: Any) -> "Feed":
        d = as_object(d)
        version = read_required(d, "version", parse_version)
        title = read_required(d, "title", as_str)
        author = _decode_nested(Author.from_dict, read_required(d, "author", as_object), "author")
        items = _decode_list(Item.from_dict, read_required(d, "items", as_list), "items")

        hubs: List[Hub] = []
        if d.get("hubs") is not None:
            hubs = _decode_list(Hub.from_dict, as_list(d["hubs"], "hubs"), "hubs")

        feed = cls(
            title=title,
            author=author,
            version=version,
            home_page_url=read_optional(d, "home_page_url", as_url, owner="Feed"),
            feed_url=read_optional(d, "feed_url", as_url, owner="Feed"),
            icon=read_optional(d, "icon", as_url, owner="Feed"),
            favicon=read_optional(d, "favicon", as_url, owner="Feed"),
            description=read_optional(d, "description", as_str, owner="Feed"),
            user_comment=read_optional(d, "user_comment", as_str, owner="Feed"),
            expired=read_optional(d, "expired", as_bool, default=False, owner="Feed"),
            hubs=hubs,
            items=items,
        )
        logger.debug(f"[Feed] Decoded '{feed.title}': {len(feed.items)} items, {len(feed.hubs)} hubs")
        return feed

    def to_dict(self) -> Dict[str, Any]:
        d = _drop_none({
            "version": self.version.value,
            "title": self.title,
            "home_page_url": self.home_page_url,
            "feed_url": self.feed_url,
            "icon": self.icon,
            "favicon": self.favicon,
            "author": self.author.to_dict(),
            "description": self.description,
            "user_comment": self.user_comment,
        })
        # absent means false
        if self.expired:
            d["expired"] = True
        if self.hubs:
            d["hubs"] = [h.to_dict() for h in self.hubs]
        d["items"] = [i.to_dict() for i in self.items]
        return d
