"""contentgraph: markdown content tree to pages, sections, blog and link graph.

Walks a `content/` directory of markdown files, builds typed Page, Post and
Section entities, and derives tags, posts-per-year, word totals and a
site-wide internal/external link graph. Nothing is cached or written back.

Public API:
- SiteConfig
- Site
- ContentWalker
"""

from .config import SiteConfig
from .indexer.walker import ContentWalker
from .retrieval.site import Site

__all__ = ["SiteConfig", "Site", "ContentWalker"]
