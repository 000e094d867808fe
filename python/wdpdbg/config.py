"""Client configuration for wdpdbg."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 9222
DEFAULT_PAGE = 1
DEFAULT_URL = "http://www.google.com"
LOG_ENV = "WDP_CLIENT_LOG"


def default_log_level() -> str:
    return os.environ.get(LOG_ENV, "INFO")


@dataclass(frozen=True)
class ClientConfig:
    """Values read once at startup and passed into the runner."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    page: int = DEFAULT_PAGE
    url: str = DEFAULT_URL
    navigate: bool = True
    commands: List[str] = field(default_factory=list)
    log_level: str = field(default_factory=default_log_level)
    trace: bool = False
