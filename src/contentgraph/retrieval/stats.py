"""Site-wide aggregation: flattened page listing, tags, link graph and totals."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Iterable
from urllib.parse import urlsplit

import tldextract
from babel.numbers import format_decimal

from ..models import (
    ContentItem,
    ExternalLink,
    ExternalTarget,
    IndexEntry,
    InternalLink,
    Links,
    Page,
    Post,
    Section,
    SiteTree,
    Stats,
    Tag,
)
from ..utils import title_sort_key

logger = logging.getLogger(__name__)

# Bundled public suffix snapshot only; never fetches the list.
_EXTRACT = tldextract.TLDExtract(cache_dir=None, suffix_list_urls=())

def registrable_domain(url: str) -> str:
    """`https://blog.example.co.uk/x` -> `example.co.uk`.

    Hosts without a public suffix (IP addresses, localhost) return the bare host.
    Hrefs with no host at all (`other-page`, `www.example.com`) are their own
    bucket, keyed on the href as written.
    """
    host = urlsplit(url).hostname
    if not host:
        return url
    ext = _EXTRACT(host)
    if ext.domain and ext.suffix:
        return f"{ext.domain}.{ext.suffix}"
    return host

def _subsection_items(section: Section) -> list[ContentItem]:
    items: list[ContentItem] = []
    for sub in section.sub_sections:
        items.extend(sub.pages)
        items.extend(_subsection_items(sub))
        items.append(IndexEntry(title=sub.title, slug=sub.slug, path=sub.slug))
    return items

def flatten_pages(tree: SiteTree) -> list[ContentItem]:
    """Every page and post in the tree plus one index entry per section, sorted by title."""
    items: list[ContentItem] = []
    for section in tree.sections:
        items.extend(_subsection_items(section))
        items.extend(section.pages)
        items.append(IndexEntry(title=section.title, slug=section.slug, path=section.slug))
    items.extend(tree.pages)
    return sorted(items, key=lambda i: title_sort_key(i.title))

def collect_tags(posts: Iterable[Post]) -> list[Tag]:
    """Unique tags across `posts`, keyed on slug, sorted by title."""
    by_slug: dict[str, Tag] = {}
    for post in posts:
        for tag in post.tags:
            by_slug.setdefault(tag.slug, tag)
    return sorted(by_slug.values(), key=lambda t: title_sort_key(t.title))

def group_posts_by_year(posts: Iterable[Post]) -> dict[str, tuple[Post, ...]]:
    groups: dict[str, list[Post]] = {}
    for post in posts:
        groups.setdefault(str(post.date.year), []).append(post)
    return {year: tuple(items) for year, items in groups.items()}

def format_word_count(total: int, locale: str = "en_IN") -> str:
    return format_decimal(total, locale=locale.replace("-", "_"))

def total_words(items: Iterable[ContentItem]) -> int:
    return sum(i.word_count for i in items if not isinstance(i, IndexEntry))

def aggregate_links(items: Iterable[ContentItem]) -> Links | None:
    """Group every page's links: external by registrable domain, internal by path.

    Both groupings are ordered by reference count, highest first; ties keep
    the order in which they were first seen.
    """
    pages = [i for i in items if isinstance(i, Page) and i.links is not None]

    domains: dict[str, dict[str, list[str]]] = {}
    domain_counts: Counter[str] = Counter()
    internal_counts: Counter[str] = Counter()

    for page in pages:
        source = f"/{page.path}"
        for href in page.links.external:
            domain = registrable_domain(href)
            domain_counts[domain] += 1
            domains.setdefault(domain, {}).setdefault(href, []).append(source)
        for href in page.links.internal:
            internal_counts[href] += 1

    external = [
        ExternalLink(
            domain=domain,
            count=domain_counts[domain],
            links=tuple(
                ExternalTarget(target_url=target, source_urls=tuple(sources))
                for target, sources in targets.items()
            ),
        )
        for domain, targets in domains.items()
    ]
    external.sort(key=lambda e: -e.count)

    internal = [InternalLink(pathname=p, count=c) for p, c in internal_counts.items()]
    internal.sort(key=lambda i: -i.count)

    if not external and not internal:
        return None
    logger.debug(f"Aggregated {len(internal)} internal paths and {len(external)} external domains")
    return Links(count=len(internal) + len(external), internal=tuple(internal), external=tuple(external))

def compute_stats(
    all_items: list[ContentItem],
    blog: Section,
    tags: list[Tag],
    links: Links | None,
    locale: str = "en_IN",
) -> Stats:
    posts = blog.posts
    return Stats(
        blog_by_year=group_posts_by_year(posts),
        posts=len(posts),
        words=format_word_count(total_words(all_items), locale),
        tags=len(tags),
        links=links if links is not None else Links(count=0),
    )
