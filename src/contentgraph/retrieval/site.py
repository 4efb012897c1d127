from __future__ import annotations

import logging
from dataclasses import dataclass

from ..config import SiteConfig
from ..indexer.entries import ContentSource
from ..indexer.walker import ContentWalker
from ..models import ContentItem, Links, Page, Post, Section, Stats, Tag
from .stats import aggregate_links, collect_tags, compute_stats, flatten_pages

logger = logging.getLogger(__name__)

@dataclass
class Site:
    """Read-only queries over a content tree.

    Every query walks the tree from scratch, so results always reflect the
    files on disk. Lookups return None when nothing matches; structural reads
    (`get_page`, `get_section`) raise NotFoundError instead.
    """
    cfg: SiteConfig
    source: ContentSource | None = None

    def __post_init__(self) -> None:
        self.walker = ContentWalker(self.cfg, self.source)

    def _blog(self, blog_section: str | None) -> Section:
        return self.walker.load_section(blog_section or self.cfg.blog_section)

    def get_page(self, slug: str, section: str | None = None) -> Page:
        return self.walker.load_page(slug, section)

    def get_section(self, name: str) -> Section:
        return self.walker.load_section(name)

    def get_post(self, slug: str, blog_section: str | None = None) -> Post | None:
        for post in self._blog(blog_section).posts:
            if post.slug == slug:
                return post
        return None

    def get_posts_by_tag(self, tag_slug: str, blog_section: str | None = None) -> tuple[Post, ...] | None:
        posts = tuple(
            p for p in self._blog(blog_section).posts
            if any(t.slug == tag_slug for t in p.tags)
        )
        return posts or None

    def get_all_pages(self) -> list[ContentItem]:
        return flatten_pages(self.walker.load_root())

    def get_all_tags(self, blog_section: str | None = None) -> list[Tag]:
        return collect_tags(self._blog(blog_section).posts)

    def get_tag(self, slug: str) -> Tag | None:
        for tag in self.get_all_tags():
            if tag.slug == slug:
                return tag
        return None

    def get_all_links(self) -> Links | None:
        return aggregate_links(self.get_all_pages())

    def get_global_stats(self, blog_section: str | None = None) -> Stats:
        all_items = self.get_all_pages()
        blog = self._blog(blog_section)
        tags = collect_tags(blog.posts)
        stats = compute_stats(all_items, blog, tags, aggregate_links(all_items), self.cfg.number_locale)
        logger.info(f"Stats: {stats.posts} posts, {stats.words} words, {stats.tags} tags")
        return stats
