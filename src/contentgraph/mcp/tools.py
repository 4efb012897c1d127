from __future__ import annotations

from typing import Any

from ..retrieval.site import Site
from ..serialize import to_jsonable

def _optional(params: dict[str, Any], key: str) -> str | None:
    value = params.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"Param {key} must be a string")
    return value

def _required(params: dict[str, Any], key: str) -> str:
    value = _optional(params, key)
    if value is None:
        raise ValueError(f"Missing required param: {key}")
    return value

def tool_page(site: Site, params: dict[str, Any]) -> dict[str, Any]:
    """Get one page.

    Params:
        slug: Page slug ("" for the section or site index)
        section: Section slug (optional, root when omitted)
    """
    page = site.get_page(_optional(params, "slug") or "", _optional(params, "section"))
    return {"page": to_jsonable(page)}

def tool_section(site: Site, params: dict[str, Any]) -> dict[str, Any]:
    return {"section": to_jsonable(site.get_section(_required(params, "name")))}

def tool_post(site: Site, params: dict[str, Any]) -> dict[str, Any]:
    """Get a blog post by slug; `post` is null when there is none."""
    post = site.get_post(_required(params, "slug"), _optional(params, "blog"))
    return {"post": to_jsonable(post)}

def tool_tagged(site: Site, params: dict[str, Any]) -> dict[str, Any]:
    posts = site.get_posts_by_tag(_required(params, "tag"), _optional(params, "blog"))
    return {"posts": to_jsonable(posts)}

def tool_pages(site: Site, params: dict[str, Any]) -> dict[str, Any]:
    return {"pages": to_jsonable(site.get_all_pages())}

def tool_tags(site: Site, params: dict[str, Any]) -> dict[str, Any]:
    return {"tags": to_jsonable(site.get_all_tags(_optional(params, "blog")))}

def tool_tag(site: Site, params: dict[str, Any]) -> dict[str, Any]:
    return {"tag": to_jsonable(site.get_tag(_required(params, "slug")))}

def tool_stats(site: Site, params: dict[str, Any]) -> dict[str, Any]:
    return {"stats": to_jsonable(site.get_global_stats(_optional(params, "blog")))}

def tool_links(site: Site, params: dict[str, Any]) -> dict[str, Any]:
    return {"links": to_jsonable(site.get_all_links())}
