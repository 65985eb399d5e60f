"""Exceptions raised by jfeed."""
from typing import Optional


class FeedError(ValueError):
    """Base class for everything jfeed raises on purpose."""


class ConstructionError(FeedError):
    """A value was built from typed fields that violate an invariant."""


class DecodeError(FeedError):
    """Input bytes or a JSON object could not be turned into a feed model.

    ``key`` is the path of the offending field, e.g. ``items[2].id``.
    """

    def __init__(self, message: str, key: Optional[str] = None):
        self.message = message
        self.key = key
        super().__init__(f"{key}: {message}" if key else message)

    def nested(self, prefix: str) -> "DecodeError":
        """Return a copy of this error with ``prefix`` prepended to its key path."""
        if not self.key:
            key = prefix
        elif self.key.startswith("["):
            key = f"{prefix}{self.key}"
        else:
            key = f"{prefix}.{self.key}"
        return type(self)(self.message, key)


class SourceUnavailableError(DecodeError):
    """A byte source could not supply the document."""
