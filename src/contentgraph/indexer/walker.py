from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Iterable, TypeVar

from ..config import SiteConfig
from ..extractors.links import get_links
from ..extractors.markdown import MarkdownFile, PageAttrs, PostAttrs, load_markdown, render_html
from ..models import Page, Post, Section, SiteTree, Tag
from ..utils import get_reading_time, get_word_count, slugify
from .entries import (
    ContentSource,
    Entry,
    EntryKind,
    FileSystemSource,
    classify_root_entry,
    classify_section_entry,
    page_slug,
    split_post_name,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

ROOT_SECTION = "main"

def _join(*parts: str) -> str:
    return "/".join(p.strip("/") for p in parts if p)

def _post_order(item: Page) -> tuple[int, int]:
    # Newest post first; plain pages trail the posts in insertion order.
    if isinstance(item, Post):
        return 0, -item.date.toordinal()
    return 1, 0

def insert_sorted(pages: list[Page], item: Page) -> None:
    """Append `item` and, when it is a post, re-sort the whole list newest first."""
    pages.append(item)
    if isinstance(item, Post):
        pages.sort(key=_post_order)

@dataclass
class ContentWalker:
    """Builds pages, posts and sections from a content tree.

    Nothing is cached: every call reads the tree again.
    """
    cfg: SiteConfig
    source: ContentSource | None = None

    def __post_init__(self) -> None:
        if self.source is None:
            self.source = FileSystemSource(self.cfg.content_root)

    def _map(self, fn: Callable[[T], R], items: Iterable[T]) -> list[R]:
        """Run `fn` over sibling entries concurrently, keeping their order.

        The first exception raised by any worker propagates to the caller.
        """
        items = list(items)
        if len(items) <= 1 or self.cfg.workers == 1:
            return [fn(i) for i in items]
        with ThreadPoolExecutor(max_workers=self.cfg.workers) as executor:
            return list(executor.map(fn, items))

    def _tag(self, title: str) -> Tag:
        slug = slugify(title)
        return Tag(title=title, slug=slug, path=_join(self.cfg.tags_path, slug))

    def _common(self, doc: MarkdownFile[PageAttrs]) -> dict:
        body = doc.body
        return {
            "title": doc.attrs.title,
            "html": render_html(body),
            "word_count": get_word_count(body),
            "reading_time": get_reading_time(body, self.cfg.words_per_minute),
            "description": doc.attrs.description,
            "updated": doc.attrs.updated,
            "draft": doc.attrs.draft,
            "links": get_links(body),
        }

    def load_page(self, slug: str, section: str | None = None) -> Page:
        """Load `<section>/<slug>.md`; the empty slug reads the `_index.md` file."""
        section = (section or "").strip("/")
        rel = _join(section, f"{slug or '_index'}.md")
        doc = load_markdown(self.source, rel)
        logger.debug(f"Loaded page {rel}")
        return Page(
            path=_join(section, slug),
            slug=slug,
            section=section or ROOT_SECTION,
            language=doc.attrs.language,
            **self._common(doc),
        )

    def load_post(self, section: str, entry: Entry) -> Post:
        post_date, slug = split_post_name(entry.name)
        if entry.is_dir:
            rel = _join(section, entry.name, "index.md")
        else:
            rel = _join(section, entry.name)
        doc = load_markdown(self.source, rel, PostAttrs)
        logger.debug(f"Loaded post {rel}")
        return Post(
            path=_join(section, slug),
            slug=slug,
            section=section,
            language=doc.attrs.language,
            date=post_date,
            tags=tuple(self._tag(t) for t in doc.attrs.tags),
            **self._common(doc),
        )

    def _load_section_entry(self, section: str, kind: EntryKind, entry: Entry) -> Page:
        if kind is EntryKind.POST:
            return self.load_post(section, entry)
        return self.load_page(page_slug(entry.name), section)

    def load_section(self, name: str) -> Section:
        """Load a section, its pages and posts, and its subsections recursively.

        A missing `_index.md` raises NotFoundError.
        """
        name = name.strip("/")
        index = load_markdown(self.source, _join(name, "_index.md"))
        entries = self.source.list_entries(name)

        work: list[tuple[EntryKind, Entry]] = []
        sub_names: list[str] = []
        for entry in entries:
            kind = classify_section_entry(entry)
            if kind is EntryKind.SUBSECTION:
                sub_names.append(_join(name, entry.name))
            elif kind in (EntryKind.POST, EntryKind.PAGE):
                work.append((kind, entry))

        loaded = self._map(lambda w: self._load_section_entry(name, *w), work)
        pages: list[Page] = []
        for item in loaded:
            insert_sorted(pages, item)

        sub_sections = tuple(self.load_section(s) for s in sub_names)
        logger.info(f"Loaded section {name}: {len(pages)} pages, {len(sub_sections)} subsections")

        return Section(
            path=name if "/" in name else "",
            slug=name,
            pages=tuple(pages),
            sub_sections=sub_sections,
            **self._common(index),
        )

    def load_root(self) -> SiteTree:
        sections: list[Section] = []
        page_slugs: list[str] = []
        for entry in self.source.list_entries(""):
            kind = classify_root_entry(entry)
            if kind is EntryKind.SECTION:
                sections.append(self.load_section(entry.name))
            elif kind is EntryKind.PAGE:
                page_slugs.append(page_slug(entry.name))
        pages = self._map(self.load_page, page_slugs)
        return SiteTree(sections=tuple(sections), pages=tuple(pages))
