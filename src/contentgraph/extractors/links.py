from __future__ import annotations

from typing import Any, Iterable

from markdown_it.token import Token

from ..models import LinkSet
from .markdown import MD

def _hrefs_from_tokens(tokens: Iterable[Token]) -> list[str]:
    """Collect link targets from a token stream, descending into children."""
    hrefs: list[str] = []
    for token in tokens:
        if token.type == "link_open":
            href = token.attrGet("href")
            if href is not None:
                hrefs.append(str(href))
        if token.children:
            hrefs.extend(_hrefs_from_tokens(token.children))
    return hrefs

def get_links(body: str) -> LinkSet | None:
    """Classify every hyperlink in a markdown body as internal or external.

    Reference-style definitions count even when nothing uses them. Same-page
    anchors and mailto links are dropped. Hrefs are reported as the author
    wrote them, with the parser's percent-encoding undone. Returns None when
    nothing is left.
    """
    env: dict[str, Any] = {}
    tokens = MD.parse(body, env)
    hrefs = _hrefs_from_tokens(tokens)
    hrefs.extend(ref["href"] for ref in env.get("references", {}).values())

    internal: set[str] = set()
    external: set[str] = set()
    for href in map(MD.normalizeLinkText, hrefs):
        if not href or href.startswith("mailto:") or href.startswith("#"):
            continue
        if href.startswith("/"):
            internal.add(href)
        else:
            external.add(href)

    if not internal and not external:
        return None
    return LinkSet(internal=tuple(sorted(internal)), external=tuple(sorted(external)))
