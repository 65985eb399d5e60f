"""Byte sources and sinks for feed documents.

The codec never touches files or the network itself. These helpers supply
the raw bytes (local file, stdin or HTTP) and persist encoded output. A
source that cannot deliver raises SourceUnavailableError, which is a
DecodeError, so callers handle "unavailable" and "undecodable" the same way.
"""
import logging
import os
import random
import sys
import tempfile
import threading
import time
from pathlib import Path
from typing import Optional, Union

import requests

from jfeed.document import decode_feed, encode_feed
from jfeed.errors import SourceUnavailableError
from jfeed.models import Feed

logger = logging.getLogger(__name__)

ACCEPT = "application/feed+json, application/json;q=0.9, */*;q=0.1"

# Shared session for connection pooling
_session: Optional[requests.Session] = None
_session_lock = threading.Lock()


def _build_headers() -> dict:
    from jfeed import __version__
    return {
        "User-Agent": f"jfeed/{__version__} (+https://jsonfeed.org/version/1)",
        "Accept": ACCEPT,
    }


def _get_session() -> requests.Session:
    """Return a shared requests.Session."""
    global _session
    if _session is None:
        with _session_lock:
            if _session is None:
                s = requests.Session()
                adapter = requests.adapters.HTTPAdapter(
                    pool_connections=4,
                    pool_maxsize=4,
                    max_retries=0,  # retries handled in fetch_url
                )
                s.mount("https://", adapter)
                s.mount("http://", adapter)
                s.headers.update(_build_headers())
                _session = s
    return _session


def is_url(source: str) -> bool:
    return source.lower().startswith(("http://", "https://"))


def fetch_url(
    url: str,
    timeout: float = 15,
    retries: int = 2,
    backoff: float = 1.0,
    jitter: float = 0.5,
) -> bytes:
    """GET ``url`` and return the body, retrying with exponential backoff."""
    for attempt in range(retries + 1):
        try:
            resp = _get_session().get(url, timeout=timeout)
            resp.raise_for_status()
            logger.info(f"[Source] {url}: {len(resp.content)} bytes")
            return resp.content
        except requests.RequestException as e:
            if attempt < retries:
                base_wait = backoff * (2 ** attempt)
                wait = base_wait + random.uniform(0, base_wait * jitter)
                logger.info(f"[Source] Retry {attempt + 1}/{retries} for {url} in {wait:.1f}s")
                time.sleep(wait)
            else:
                logger.warning(f"[Source] Failed to fetch {url} after {retries + 1} attempts: {e}")
                raise SourceUnavailableError(f"could not fetch {url}: {e}") from e
    raise SourceUnavailableError(f"could not fetch {url}")


def read_file(path: Union[str, Path]) -> bytes:
    try:
        return Path(path).read_bytes()
    except OSError as e:
        logger.warning(f"[Source] Failed to read {path}: {e}")
        raise SourceUnavailableError(f"could not read {path}: {e.strerror or e}") from e


def read_stdin() -> bytes:
    try:
        return sys.stdin.buffer.read()
    except (OSError, AttributeError) as e:
        raise SourceUnavailableError(f"could not read standard input: {e}") from e


def read_source(source: str, timeout: float = 15, retries: int = 2) -> bytes:
    """Read raw bytes from ``-`` (stdin), an http(s) URL or a file path."""
    if source == "-":
        return read_stdin()
    if is_url(source):
        return fetch_url(source, timeout=timeout, retries=retries)
    return read_file(source)


def load_feed(source: str, timeout: float = 15, retries: int = 2) -> Feed:
    """Read ``source`` and decode it. Raises DecodeError on any failure."""
    return decode_feed(read_source(source, timeout=timeout, retries=retries))


def write_file(path: Union[str, Path], data: bytes) -> None:
    """Write ``data`` atomically: temp file in the same directory, then rename."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(tmp, path)
    except BaseException:
        if os.path.exists(tmp):
            os.unlink(tmp)
        raise
    logger.info(f"[Sink] Wrote {len(data)} bytes to {path}")


def save_feed(feed: Feed, path: Union[str, Path], indent: Optional[int] = 2) -> None:
    write_file(path, encode_feed(feed, indent=indent))
