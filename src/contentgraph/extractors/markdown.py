from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any, Generic, TypeVar

import frontmatter
import yaml
from markdown_it import MarkdownIt

from ..errors import ParseError
from ..indexer.entries import ContentSource, FileSystemSource

# CommonMark with the GFM table and strikethrough rules; bare URLs become links
MD = MarkdownIt("commonmark", {"linkify": True}).enable(["table", "strikethrough", "linkify"])

A = TypeVar("A", bound="PageAttrs")

def _optional_str(meta: dict[str, Any], key: str, path: str) -> str | None:
    value = meta.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ParseError(f"{path}: '{key}' must be a string, got {type(value).__name__}", path)
    return value

def _optional_date(meta: dict[str, Any], key: str, path: str) -> date | None:
    value = meta.get(key)
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value).date()
        except ValueError as e:
            raise ParseError(f"{path}: '{key}' is not an ISO date: {value!r}", path) from e
    raise ParseError(f"{path}: '{key}' must be a date, got {type(value).__name__}", path)

@dataclass(frozen=True)
class PageAttrs:
    """Front-matter shared by pages, sections and posts."""

    title: str
    description: str | None = None
    updated: date | None = None
    draft: bool | None = None
    language: str | None = None

    @classmethod
    def _fields_from(cls, meta: dict[str, Any], path: str) -> dict[str, Any]:
        title = meta.get("title")
        if title is None:
            raise ParseError(f"{path}: front-matter is missing 'title'", path)
        draft = meta.get("draft")
        if draft is not None and not isinstance(draft, bool):
            raise ParseError(f"{path}: 'draft' must be true or false", path)
        return {
            "title": str(title),
            "description": _optional_str(meta, "description", path),
            "updated": _optional_date(meta, "updated", path),
            "draft": draft,
            "language": _optional_str(meta, "language", path),
        }

    @classmethod
    def from_metadata(cls, meta: dict[str, Any], path: str = "<string>"):
        return cls(**cls._fields_from(meta, path))

@dataclass(frozen=True)
class PostAttrs(PageAttrs):
    tags: tuple[str, ...] = ()

    @classmethod
    def _fields_from(cls, meta: dict[str, Any], path: str) -> dict[str, Any]:
        fields = super()._fields_from(meta, path)
        taxonomies = meta.get("taxonomies") or {}
        if not isinstance(taxonomies, dict):
            raise ParseError(f"{path}: 'taxonomies' must be a mapping", path)
        tags = taxonomies.get("tags") or []
        if not isinstance(tags, list):
            raise ParseError(f"{path}: 'taxonomies.tags' must be a list", path)
        fields["tags"] = tuple(str(t) for t in tags)
        return fields

@dataclass(frozen=True)
class MarkdownFile(Generic[A]):
    attrs: A
    body: str

def parse_markdown(raw: str, attrs_type: type[A] = PageAttrs, path: str = "<string>") -> MarkdownFile[A]:
    """Split front-matter from `raw` and type it as `attrs_type`."""
    try:
        post = frontmatter.loads(raw)
    except (yaml.YAMLError, ValueError, TypeError) as e:
        raise ParseError(f"{path}: malformed front-matter: {e}", path) from e
    meta = dict(post.metadata or {})
    return MarkdownFile(attrs=attrs_type.from_metadata(meta, path), body=post.content)

def load_markdown(source: ContentSource, rel_path: str, attrs_type: type[A] = PageAttrs) -> MarkdownFile[A]:
    """Read one document from `source`.

    Raises NotFoundError when the file is missing and ParseError when its
    front-matter is malformed or lacks a title.
    """
    return parse_markdown(source.read_text(rel_path), attrs_type, rel_path)

def load_markdown_file(path: str | Path, attrs_type: type[A] = PageAttrs) -> MarkdownFile[A]:
    p = Path(path)
    return load_markdown(FileSystemSource(p.parent), p.name, attrs_type)

def render_html(body: str) -> str:
    return MD.render(body)
