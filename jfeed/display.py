"""Human-readable rendering of a feed for the terminal."""
import io
from datetime import datetime
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from jfeed.codecs import format_date
from jfeed.models import Attachment, Author, Feed, Item
from jfeed.utils import relative_time, truncate

NOT_PROVIDED = "Not Provided"


def describe_author(author: Author) -> str:
    return (
        f"Name: {author.name or NOT_PROVIDED}\n"
        f"Website: {author.url or NOT_PROVIDED}\n"
        f"Avatar URL: {author.avatar or NOT_PROVIDED}"
    )


def describe_attachment(attachment: Attachment) -> str:
    return (
        f"URL: {attachment.url}\n"
        f"Type: {attachment.mime_type.value}\n"
        f"Title: {attachment.title or NOT_PROVIDED}\n"
        f"Size in Bytes: {attachment.size_in_bytes or 0}\n"
        f"Duration in seconds: {attachment.duration_in_seconds or 0}"
    )


def _author_line(author: Optional[Author]) -> str:
    if author is None:
        return ""
    return author.name or author.url or author.avatar or ""


def _when(dt: datetime, now: Optional[datetime]) -> str:
    return f"{format_date(dt)} ({relative_time(dt, now)})"


def _render_item(console: Console, index: int, item: Item, now: Optional[datetime]) -> None:
    console.print(f"\n[bold white]{index}. {escape(item.title or item.id)}[/]")
    meta = [f"🕐 {_when(item.date_published, now)}"]
    if item.date_modified:
        meta.append(f"✏️  {_when(item.date_modified, now)}")
    by = _author_line(item.author)
    if by:
        meta.append(f"✍️  {escape(by)}")
    console.print(f"   [dim]{' | '.join(meta)}[/]")
    link = item.url or item.external_url
    if link:
        console.print(f"   [blue underline]{escape(link)}[/]")
    if item.tags:
        console.print(f"   [dim]🏷️  {escape(', '.join(item.tags))}[/]")
    preview = item.summary or item.text_content
    if preview and preview.strip():
        console.print(f"   [dim italic]{escape(truncate(preview, 200))}[/]")
    for a in item.attachments:
        size = f", {a.size_in_bytes} bytes" if a.size_in_bytes else ""
        console.print(f"   📎 {escape(a.title or a.url)} [dim]({a.mime_type.value}{size})[/]")


def render_feed(feed: Feed, width: int = 100, now: Optional[datetime] = None) -> str:
    """Render ``feed`` as plain text using a recording rich console."""
    console = Console(record=True, width=width, file=io.StringIO(), highlight=False)
    status = " [red](expired)[/]" if feed.expired else ""
    console.print(Panel(f"[bold cyan]📰 {escape(feed.title)}[/]{status} — {len(feed.items)} items", expand=False))
    if feed.description:
        console.print(f"[italic]{escape(feed.description)}[/]")

    meta = Table(show_header=False, box=None, padding=(0, 1))
    meta.add_column(style="dim")
    meta.add_column()
    for label, value in (
        ("Author", _author_line(feed.author)),
        ("Home page", feed.home_page_url),
        ("Feed URL", feed.feed_url),
        ("Icon", feed.icon),
        ("Favicon", feed.favicon),
        ("Comment", feed.user_comment),
    ):
        if value:
            meta.add_row(label, escape(value))
    for hub in feed.hubs:
        meta.add_row("Hub", escape(f"{hub.type} {hub.url}"))
    if meta.row_count:
        console.print(meta)

    for i, item in enumerate(feed.items, 1):
        _render_item(console, i, item, now)

    return console.export_text()


def summarize_feed(feed: Feed) -> str:
    """One-line summary: title, item count, attachment count, newest item date."""
    attachments = sum(len(i.attachments) for i in feed.items)
    newest = max((i.date_published for i in feed.items), default=None)
    parts = [f"{feed.title}", f"{len(feed.items)} items", f"{attachments} attachments"]
    if newest is not None:
        parts.append(f"newest {format_date(newest)}")
    if feed.expired:
        parts.append("expired")
    return " | ".join(parts)
