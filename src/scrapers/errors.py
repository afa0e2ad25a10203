# src/scrapers/errors.py

"""Failures that abort a recommendation export run."""

from pathlib import Path


class RecommendationError(Exception):
    """Base class for every run-aborting failure."""


class FetchError(RecommendationError):
    """A page could not be retrieved (transport error or non-2xx)."""

    def __init__(self, offset: int, limit: int, message: str) -> None:
        self.offset = offset
        self.limit = limit
        super().__init__(
            f"page offset={offset} limit={limit}: {message}"
        )


class ResponseFormatError(RecommendationError):
    """The page body is not a decodable JSONP-wrapped object."""


class FieldParseError(RecommendationError):
    """An item field is missing or not of the expected numeric type."""

    def __init__(
        self,
        field: str,
        message: str,
        offset: int | None = None,
    ) -> None:
        self.field = field
        self.message = message
        self.offset = offset
        where = f"page offset={offset}, " if offset is not None else ""
        super().__init__(f"{where}field '{field}': {message}")

    def at_offset(self, offset: int) -> "FieldParseError":
        """Return a copy tagged with the page offset it came from."""
        return FieldParseError(self.field, self.message, offset)


class OutputWriteError(RecommendationError):
    """The output file could not be written."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(f"cannot write {path}: {message}")
