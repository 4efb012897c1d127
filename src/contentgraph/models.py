from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Union

@dataclass(frozen=True)
class LinkSet:
    """Hyperlinks found in one document, split by target.

    Both tuples have set semantics; their order carries no meaning.
    """
    internal: tuple[str, ...] = ()
    external: tuple[str, ...] = ()

@dataclass(frozen=True)
class Tag:
    title: str
    slug: str
    path: str

@dataclass(frozen=True)
class Page:
    title: str
    path: str
    slug: str
    section: str
    html: str
    word_count: int
    reading_time: int
    description: str | None = None
    updated: date | None = None
    draft: bool | None = None
    language: str | None = None
    links: LinkSet | None = None
    kind: str = field(default="page", init=False)

@dataclass(frozen=True, kw_only=True)
class Post(Page):
    date: date
    tags: tuple[Tag, ...] = ()
    kind: str = field(default="post", init=False)

@dataclass(frozen=True)
class IndexEntry:
    """Stand-in for a section inside the flattened page listing."""
    title: str
    slug: str
    path: str
    kind: str = field(default="index", init=False)

ContentItem = Union[Page, Post, IndexEntry]

@dataclass(frozen=True)
class Section:
    title: str
    path: str
    slug: str
    html: str
    word_count: int
    reading_time: int
    pages: tuple[Page, ...] = ()
    sub_sections: tuple["Section", ...] = ()
    description: str | None = None
    updated: date | None = None
    draft: bool | None = None
    links: LinkSet | None = None

    @property
    def posts(self) -> tuple[Post, ...]:
        return tuple(p for p in self.pages if isinstance(p, Post))

@dataclass(frozen=True)
class SiteTree:
    """Everything under the content root: top-level sections and root pages."""
    sections: tuple[Section, ...]
    pages: tuple[Page, ...]

@dataclass(frozen=True)
class InternalLink:
    pathname: str
    count: int

@dataclass(frozen=True)
class ExternalTarget:
    target_url: str
    source_urls: tuple[str, ...]

@dataclass(frozen=True)
class ExternalLink:
    domain: str
    count: int
    links: tuple[ExternalTarget, ...]

@dataclass(frozen=True)
class Links:
    count: int
    internal: tuple[InternalLink, ...] = ()
    external: tuple[ExternalLink, ...] = ()

@dataclass(frozen=True)
class Stats:
    blog_by_year: dict[str, tuple[Post, ...]]
    posts: int
    words: str
    tags: int
    links: Links
