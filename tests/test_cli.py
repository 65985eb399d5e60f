"""Tests for the jfeed command line."""
import json

import pytest

from jfeed.cli import main


@pytest.fixture
def feed_file(tmp_path, sample_document):
    path = tmp_path / "feed.json"
    path.write_text(json.dumps(sample_document), encoding="utf-8")
    return path


class TestCli:
    def test_json_output_is_minimal(self, feed_file, capsys):
        assert main([str(feed_file), "--no-config", "-f", "json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["items"][0]["content_text"] == "Second episode"
        assert "expired" not in data
        assert data["hubs"] == [{"type": "WebSub", "url": "https://hub.example.org/"}]

    def test_compact(self, feed_file, capsys):
        assert main([str(feed_file), "--no-config", "-f", "json", "--compact"]) == 0
        assert capsys.readouterr().out.count("\n") == 1

    def test_console_output(self, feed_file, capsys):
        assert main([str(feed_file), "--no-config"]) == 0
        out = capsys.readouterr().out
        assert "Bryce's Podcast" in out
        assert "Episode 2" in out

    def test_summary(self, feed_file, capsys):
        assert main([str(feed_file), "--no-config", "-f", "summary"]) == 0
        assert capsys.readouterr().out.startswith("Bryce's Podcast | 2 items")

    def test_check_ok(self, feed_file, capsys):
        assert main([str(feed_file), "--no-config", "--check"]) == 0
        assert capsys.readouterr().out.startswith("OK: ")

    def test_check_bad_document(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text('{"version": "https://jsonfeed.org/version/1", "title": "x"}', encoding="utf-8")
        assert main([str(path), "--no-config", "--check"]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing.json"), "--no-config"]) == 1
        assert "could not read" in capsys.readouterr().err

    def test_output_file(self, feed_file, tmp_path, capsys):
        out = tmp_path / "out.json"
        assert main([str(feed_file), "--no-config", "-f", "json", "-o", str(out)]) == 0
        assert json.loads(out.read_text(encoding="utf-8"))["title"] == "Bryce's Podcast"
        assert "Wrote 2 items" in capsys.readouterr().err

    def test_source_required(self):
        with pytest.raises(SystemExit) as exc:
            main(["--no-config"])
        assert exc.value.code == 2
