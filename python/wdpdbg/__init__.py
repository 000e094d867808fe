"""
wdpdbg - Minimal remote debugging protocol client.

Opens one websocket to a ``/devtools/page/<n>`` endpoint, sends a fixed
queue of JSON commands one at a time and logs everything it sends and
receives:

    config.py     → startup configuration
    endpoint.py   → endpoint addressing
    commands.py   → command payloads and the ordered queue
    messages.py   → inbound message classification
    transport.py  → websocket channel
    runner.py     → request/reply state machine
    pages.py      → ``/json`` page listing
"""

from .config import ClientConfig  # noqa: F401
from .endpoint import Endpoint  # noqa: F401
from .commands import CommandQueue, build_command, navigate, parse_call  # noqa: F401
from .messages import InboundMessage, parse_message  # noqa: F401
from .transport import Transport, TransportConfig, TransportError, WebSocketTransport  # noqa: F401
from .runner import CommandRunner, RunnerState  # noqa: F401
from .pages import PageInfo, PageListError, fetch_pages, render_page_table  # noqa: F401

__all__ = [
    "ClientConfig",
    "Endpoint",
    "CommandQueue",
    "build_command",
    "navigate",
    "parse_call",
    "InboundMessage",
    "parse_message",
    "Transport",
    "TransportConfig",
    "TransportError",
    "WebSocketTransport",
    "CommandRunner",
    "RunnerState",
    "PageInfo",
    "PageListError",
    "fetch_pages",
    "render_page_table",
]

__version__ = "0.1.0"
