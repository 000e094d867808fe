"""Remote debugging endpoint addressing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .config import DEFAULT_HOST, DEFAULT_PAGE, DEFAULT_PORT, ClientConfig

PAGE_PATH = "/devtools/page/"


@dataclass(frozen=True)
class Endpoint:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    page: int = DEFAULT_PAGE

    @classmethod
    def from_config(cls, config: ClientConfig) -> "Endpoint":
        return cls(host=config.host, port=config.port, page=config.page)

    @property
    def url(self) -> str:
        """Websocket address of the page's debugging session."""
        return f"ws://{self.host}:{self.port}{PAGE_PATH}{self.page}"

    @property
    def list_url(self) -> str:
        """HTTP address of the proxy's page listing."""
        return f"http://{self.host}:{self.port}/json"


def page_from_url(url: str) -> Optional[int]:
    """Extract the page number from a ``ws://.../devtools/page/<n>`` URL."""
    _, sep, tail = url.rpartition(PAGE_PATH)
    if not sep or not tail.isdigit():
        return None
    return int(tail)
