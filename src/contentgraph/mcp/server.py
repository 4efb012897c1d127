from __future__ import annotations

import json
import logging
import sys
from typing import Any, TextIO

from ..config import SiteConfig
from ..errors import ContentError, NotFoundError
from ..retrieval.site import Site
from .tools import (
    tool_links,
    tool_page,
    tool_pages,
    tool_post,
    tool_section,
    tool_stats,
    tool_tag,
    tool_tagged,
    tool_tags,
)

logger = logging.getLogger(__name__)

TOOL_MAP = {
    "site.page": tool_page,
    "site.section": tool_section,
    "site.post": tool_post,
    "site.tagged": tool_tagged,
    "site.pages": tool_pages,
    "site.tags": tool_tags,
    "site.tag": tool_tag,
    "site.stats": tool_stats,
    "site.links": tool_links,
}

METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
NOT_FOUND = -32004
CONTENT_ERROR = -32000

def _error(rid: Any, code: int, message: str) -> dict[str, Any]:
    return {"jsonrpc": "2.0", "id": rid, "error": {"code": code, "message": message}}

def handle_request(site: Site, line: str) -> dict[str, Any]:
    """Answer one JSON-RPC-ish request line."""
    try:
        req = json.loads(line)
    except json.JSONDecodeError as e:
        return _error(None, INVALID_PARAMS, f"Invalid JSON: {e}")
    if not isinstance(req, dict):
        return _error(None, INVALID_PARAMS, "Request must be a JSON object")

    rid = req.get("id")
    method = req.get("method")
    params = req.get("params") or {}
    if method not in TOOL_MAP:
        return _error(rid, METHOD_NOT_FOUND, "Method not found")
    if not isinstance(params, dict):
        return _error(rid, INVALID_PARAMS, "params must be an object")
    try:
        result = TOOL_MAP[method](site, params)
    except NotFoundError as e:
        return _error(rid, NOT_FOUND, str(e))
    except ContentError as e:
        logger.warning(f"{method} failed: {e}")
        return _error(rid, CONTENT_ERROR, str(e))
    except ValueError as e:
        return _error(rid, INVALID_PARAMS, str(e))
    except Exception as e:
        logger.exception(f"{method} failed unexpectedly")
        return _error(rid, CONTENT_ERROR, str(e))
    return {"jsonrpc": "2.0", "id": rid, "result": result}

def run_stdio_server(cfg: SiteConfig, stdin: TextIO = sys.stdin, stdout: TextIO = sys.stdout) -> None:
    """Line-delimited JSON-RPC server over stdio exposing the site queries."""
    site = Site(cfg)
    for line in stdin:
        line = line.strip()
        if not line:
            continue
        resp = handle_request(site, line)
        stdout.write(json.dumps(resp, ensure_ascii=False) + "\n")
        stdout.flush()
