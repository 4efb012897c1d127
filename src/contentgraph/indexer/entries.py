"""Directory access and filename rules for the content tree.

The walker only talks to a `ContentSource`, so the rules below can be
exercised against an in-memory tree as easily as against the filesystem.
"""

from __future__ import annotations

import errno
import re
from dataclasses import dataclass
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Protocol

from ..errors import ContentReadError, NotFoundError, ParseError
from ..utils import DATE_PREFIX_RE

LOCALIZED_INDEX_RE = re.compile(r"^_index(\.[A-Za-z]{2,3}(-[A-Za-z0-9]+)?)?\.md$")
POST_SEPARATORS = ("-", "_", ".", " ")
MARKDOWN_SUFFIX = ".md"

@dataclass(frozen=True)
class Entry:
    name: str
    is_dir: bool

class ContentSource(Protocol):
    def list_entries(self, rel_dir: str) -> list[Entry]:
        ...

    def read_text(self, rel_path: str) -> str:
        ...

@dataclass
class FileSystemSource:
    """Reads a content tree rooted at `root`. Paths are POSIX-style and relative."""
    root: Path

    def _resolve(self, rel: str) -> Path:
        return self.root / rel if rel else self.root

    def list_entries(self, rel_dir: str) -> list[Entry]:
        p = self._resolve(rel_dir)
        try:
            children = list(p.iterdir())
        except FileNotFoundError as e:
            raise NotFoundError(f"Directory not found: {rel_dir or '.'}", rel_dir) from e
        except OSError as e:
            raise ContentReadError(f"Cannot list {rel_dir or '.'}: {e}", rel_dir) from e
        return sorted((Entry(c.name, c.is_dir()) for c in children), key=lambda e: e.name)

    def read_text(self, rel_path: str) -> str:
        try:
            return self._resolve(rel_path).read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise NotFoundError(f"File not found: {rel_path}", rel_path) from e
        except OSError as e:
            if e.errno == errno.ENOTDIR:
                raise NotFoundError(f"File not found: {rel_path}", rel_path) from e
            raise ContentReadError(f"Cannot read {rel_path}: {e}", rel_path) from e

class EntryKind(Enum):
    SKIP = "skip"
    SECTION = "section"
    SUBSECTION = "subsection"
    POST = "post"
    PAGE = "page"

def _is_ignored(name: str) -> bool:
    return name == ".DS_Store" or bool(LOCALIZED_INDEX_RE.match(name))

def is_post_name(name: str) -> bool:
    return DATE_PREFIX_RE.match(name) is not None

def classify_root_entry(entry: Entry) -> EntryKind:
    if entry.name.startswith("."):
        return EntryKind.SKIP
    if entry.is_dir:
        return EntryKind.SECTION
    if entry.name == "_index.md":
        return EntryKind.PAGE
    if _is_ignored(entry.name) or not entry.name.endswith(MARKDOWN_SUFFIX):
        return EntryKind.SKIP
    return EntryKind.PAGE

def classify_section_entry(entry: Entry) -> EntryKind:
    if entry.name.startswith(".") or _is_ignored(entry.name):
        return EntryKind.SKIP
    if is_post_name(entry.name):
        if entry.is_dir or entry.name.endswith(MARKDOWN_SUFFIX):
            return EntryKind.POST
        return EntryKind.SKIP
    if entry.is_dir:
        return EntryKind.SUBSECTION
    if entry.name.endswith(MARKDOWN_SUFFIX):
        return EntryKind.PAGE
    return EntryKind.SKIP

def page_slug(name: str) -> str:
    """Slug of a plain page file; the root `_index.md` maps to the empty slug."""
    if name == "_index.md":
        return ""
    return name.removesuffix(MARKDOWN_SUFFIX)

def split_post_name(name: str) -> tuple[date, str]:
    """Split `YYYY-MM-DD<sep><slug>[.md]` into its date and slug.

    Exactly one separator character from POST_SEPARATORS is dropped after
    the date; any other character is kept as part of the slug.
    """
    m = DATE_PREFIX_RE.match(name)
    if not m:
        raise ParseError(f"Post name has no date prefix: {name}", name)
    try:
        post_date = date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
    except ValueError as e:
        raise ParseError(f"Invalid date prefix in {name}: {e}", name) from e

    slug = name[m.end():].removesuffix(MARKDOWN_SUFFIX)
    if slug[:1] in POST_SEPARATORS:
        slug = slug[1:]
    if not slug:
        raise ParseError(f"Post name has no slug after the date: {name}", name)
    return post_date, slug
