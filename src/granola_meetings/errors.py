"""Exceptions raised by the Granola meeting cache reader."""


class GranolaError(Exception):
    """Base class for errors raised on purpose by this package."""


class CacheParseError(GranolaError):
    """The cache file (or its string-encoded inner cache) is not valid JSON."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to parse cache file {path}: {reason}")


class QueryValidationError(GranolaError, ValueError):
    """A query argument was rejected before the query ran."""


class CacheReadError(GranolaError):
    """The cache path exists but could not be read."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to read cache file {path}: {reason}")
