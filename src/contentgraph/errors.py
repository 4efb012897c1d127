from __future__ import annotations


class ContentError(Exception):
    """Base class for failures while reading the content tree."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class NotFoundError(ContentError):
    """A file, section or post does not exist."""


class ParseError(ContentError):
    """Front-matter or a post's date prefix could not be parsed."""


class ContentReadError(ContentError):
    """The filesystem refused a read for a reason other than absence."""
