"""Shared test fixtures."""
import copy
from datetime import datetime, timedelta, timezone

import pytest

from jfeed.models import Attachment, Author, Feed, Hub, Item

PACIFIC = timezone(timedelta(hours=-7))

SAMPLE_DOCUMENT = {
    "version": "https://jsonfeed.org/version/1",
    "title": "Bryce's Podcast",
    "home_page_url": "https://example.org/",
    "feed_url": "https://example.org/feed.json",
    "icon": "https://example.org/icon.png",
    "author": {"name": "Bryce", "url": "https://example.org/about"},
    "description": "Weekly chatter",
    "hubs": [{"type": "WebSub", "url": "https://hub.example.org/"}],
    "items": [
        {
            "id": "ep-2",
            "url": "https://example.org/ep-2",
            "title": "Episode 2",
            "content_html": "<p>Second <em>episode</em></p>",
            "content_text": "something stale",
            "date_published": "2019-08-27T14:03:00-07:00",
            "date_modified": "2019-08-28T09:00:00Z",
            "tags": ["audio", "weekly"],
            "attachments": [
                {
                    "url": "https://example.org/ep-2.mp3",
                    "mime_type": "audio/mpeg",
                    "size_in_bytes": 1234567,
                    "duration_in_seconds": 1800,
                }
            ],
        },
        {
            "id": "ep-1",
            "content_html": "<p>First</p>",
            "date_published": "2019-08-20T14:03:00-07:00",
            "author": {"name": "Guest"},
        },
    ],
}


@pytest.fixture
def sample_document():
    return copy.deepcopy(SAMPLE_DOCUMENT)


@pytest.fixture
def sample_feed():
    return Feed(
        title="Bryce's Podcast",
        author=Author(name="Bryce", url="https://example.org/about"),
        home_page_url="https://example.org/",
        feed_url="https://example.org/feed.json",
        description="Weekly chatter",
        hubs=[Hub(type="WebSub", url="https://hub.example.org/")],
        items=[
            Item(
                id="ep-2",
                html_content="<p>Second <em>episode</em></p>",
                url="https://example.org/ep-2",
                title="Episode 2",
                date_published=datetime(2019, 8, 27, 14, 3, tzinfo=PACIFIC),
                date_modified=datetime(2019, 8, 28, 9, 0, tzinfo=timezone.utc),
                tags=["audio", "weekly"],
                attachments=[
                    Attachment(
                        url="https://example.org/ep-2.mp3",
                        mime_type="audio/mpeg",
                        title="Episode 2 audio",
                        size_in_bytes=1234567,
                        duration_in_seconds=1800,
                    )
                ],
            ),
            Item(
                id="ep-1",
                html_content="<p>First</p>",
                date_published=datetime(2019, 8, 20, 14, 3, tzinfo=PACIFIC),
                author=Author(name="Guest"),
            ),
        ],
    )
