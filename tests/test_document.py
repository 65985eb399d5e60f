"""Tests for the JSON document adapter."""
import json

import pytest

from jfeed.document import decode_feed, decode_item, encode_feed, encode_item
from jfeed.errors import DecodeError
from jfeed.models import Author, Feed, Hub, Item


class TestDecodeFeed:
    def test_bytes(self, sample_document):
        feed = decode_feed(json.dumps(sample_document).encode("utf-8"))
        assert feed.title == "Bryce's Podcast"

    def test_str(self, sample_document):
        assert decode_feed(json.dumps(sample_document)).items[0].id == "ep-2"

    def test_utf8_bom(self, sample_document):
        data = b"\xef\xbb\xbf" + json.dumps(sample_document).encode("utf-8")
        assert decode_feed(data).title == "Bryce's Podcast"

    def test_invalid_json(self):
        with pytest.raises(DecodeError, match="not valid JSON"):
            decode_feed(b'{"version": ')

    def test_invalid_utf8(self):
        with pytest.raises(DecodeError, match="UTF-8"):
            decode_feed(b"\xff\xfe\x00")

    def test_top_level_not_object(self):
        with pytest.raises(DecodeError):
            decode_feed(b"[]")

    def test_unknown_mime_fails_document(self, sample_document):
        sample_document["items"][1]["attachments"] = [
            {"url": "https://example.org/x", "mime_type": "application/unknown"}
        ]
        with pytest.raises(DecodeError):
            decode_feed(json.dumps(sample_document))


class TestEncodeFeed:
    def test_idempotent(self, sample_feed):
        assert encode_feed(sample_feed) == encode_feed(sample_feed)

    def test_valid_json(self, sample_feed):
        data = json.loads(encode_feed(sample_feed))
        assert data["version"] == "https://jsonfeed.org/version/1"
        assert len(data["items"]) == 2

    def test_compact(self, sample_feed):
        data = encode_feed(sample_feed, indent=None)
        assert b"\n" not in data
        assert b'"version":"https://jsonfeed.org/version/1"' in data

    def test_non_ascii_kept(self):
        feed = Feed(title="Café", author=Author(name="Zoë"))
        assert "Café".encode("utf-8") in encode_feed(feed)

    def test_omission_rules(self):
        feed = Feed(title="T", author=Author(name="A"))
        data = json.loads(encode_feed(feed))
        assert "expired" not in data
        assert "hubs" not in data
        assert data["items"] == []

        feed.expired = True
        feed.hubs = [Hub(type="WebSub", url="https://hub.example")]
        data = json.loads(encode_feed(feed))
        assert data["expired"] is True
        assert len(data["hubs"]) == 1

    def test_roundtrip(self, sample_feed):
        assert decode_feed(encode_feed(sample_feed)) == sample_feed

    def test_roundtrip_is_stable(self, sample_document):
        once = encode_feed(decode_feed(json.dumps(sample_document)))
        twice = encode_feed(decode_feed(once))
        assert once == twice


class TestItemDocument:
    def test_decode_minimal(self):
        item = decode_item(b'{"id": "1", "content_html": "<p>Hi</p>"}')
        assert item.id == "1"
        assert item.tags == []

    def test_encode(self):
        data = json.loads(encode_item(Item(id="1", html_content="<p>Hello <b>World</b></p>")))
        assert data["content_text"] == "Hello World"
