"""Inspectable page discovery through the proxy's ``/json`` listing.

A debugging proxy answers ``GET /json`` with one object per page::

    [{
      "devtoolsFrontendUrl": "/devtools/devtools.html?host=localhost:9222&page=7",
      "faviconUrl": "",
      "thumbnailUrl": "/thumb/http://www.google.com/",
      "title": "Google",
      "url": "http://www.google.com/",
      "webSocketDebuggerUrl": "ws://localhost:9222/devtools/page/7"
    }]
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Sequence

import requests
from tabulate import tabulate

from .endpoint import Endpoint, page_from_url

logger = logging.getLogger(__name__)


class PageListError(RuntimeError):
    """Raised when the page listing cannot be fetched or decoded."""


@dataclass
class PageInfo:
    title: str = ""
    url: str = ""
    websocket_debugger_url: str = ""
    devtools_frontend_url: str = ""
    favicon_url: str = ""
    thumbnail_url: str = ""

    @property
    def page(self) -> Optional[int]:
        return page_from_url(self.websocket_debugger_url)

    @classmethod
    def from_json(cls, entry: Mapping[str, Any]) -> "PageInfo":
        return cls(
            title=str(entry.get("title") or ""),
            url=str(entry.get("url") or ""),
            websocket_debugger_url=str(entry.get("webSocketDebuggerUrl") or ""),
            devtools_frontend_url=str(entry.get("devtoolsFrontendUrl") or ""),
            favicon_url=str(entry.get("faviconUrl") or ""),
            thumbnail_url=str(entry.get("thumbnailUrl") or ""),
        )


def fetch_pages(
    endpoint: Endpoint,
    *,
    session: Optional[requests.Session] = None,
    timeout: float = 5.0,
) -> List[PageInfo]:
    """Fetch and parse the page listing, sorted by page number."""
    http = session or requests.Session()
    logger.debug("GET %s", endpoint.list_url)
    try:
        response = http.get(endpoint.list_url, timeout=timeout)
        response.raise_for_status()
        entries = response.json()
    except requests.RequestException as exc:
        raise PageListError(f"{endpoint.list_url}: {exc}") from exc
    except ValueError as exc:
        raise PageListError(f"{endpoint.list_url}: invalid JSON: {exc}") from exc
    if not isinstance(entries, list):
        raise PageListError(f"{endpoint.list_url}: expected a JSON list, got {type(entries).__name__}")
    pages = [PageInfo.from_json(entry) for entry in entries if isinstance(entry, Mapping)]
    pages.sort(key=lambda info: (info.page is None, info.page or 0))
    return pages


def render_page_table(pages: Sequence[PageInfo]) -> str:
    if not pages:
        return "(no inspectable pages)"
    rows = [
        [info.page if info.page is not None else "-", info.title, info.url, info.websocket_debugger_url]
        for info in pages
    ]
    return tabulate(rows, headers=["page", "title", "url", "websocket"], tablefmt="github")
