"""
Transport layer for wdpdbg.

Responsibilities:
    * Own the single websocket connection to a debugging endpoint.
    * Deliver ``open``, ``message`` and ``close`` notifications to callers.
    * Surface connection failures as ``TransportError``.

The websocket itself is handled by ``websocket-client``; its blocking
``run_forever`` loop is the event loop the runner reacts to.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Protocol

import websocket

logger = logging.getLogger(__name__)


class TransportError(RuntimeError):
    """Raised when the transport cannot complete an operation."""


class Transport(Protocol):
    """Minimal message channel the runner depends on."""

    url: str

    def connect(self) -> None: ...

    def send(self, text: str) -> None: ...

    def close(self) -> None: ...

    def register_on_open(self, callback: Callable[[], None]) -> None: ...

    def register_on_message(self, callback: Callable[[str], None]) -> None: ...

    def register_on_close(self, callback: Callable[[], None]) -> None: ...


@dataclass
class TransportConfig:
    suppress_origin: bool = True
    trace: bool = False
    header: Dict[str, str] = field(default_factory=dict)


@dataclass
class WebSocketTransport:
    """Websocket channel driven by ``websocket.WebSocketApp``."""

    url: str
    config: TransportConfig = field(default_factory=TransportConfig)

    _app: Optional[websocket.WebSocketApp] = field(init=False, default=None, repr=False)
    _state_lock: threading.Lock = field(init=False, default_factory=threading.Lock, repr=False)
    _state: str = field(init=False, default="disconnected")
    _error: Optional[BaseException] = field(init=False, default=None, repr=False)
    _on_open: List[Callable[[], None]] = field(init=False, default_factory=list, repr=False)
    _on_message: List[Callable[[str], None]] = field(init=False, default_factory=list, repr=False)
    _on_close: List[Callable[[], None]] = field(init=False, default_factory=list, repr=False)

    #
    # Connection lifecycle helpers
    #
    @property
    def state(self) -> str:
        with self._state_lock:
            return self._state

    def register_on_open(self, callback: Callable[[], None]) -> None:
        self._on_open.append(callback)

    def register_on_message(self, callback: Callable[[str], None]) -> None:
        self._on_message.append(callback)

    def register_on_close(self, callback: Callable[[], None]) -> None:
        self._on_close.append(callback)

    def connect(self) -> None:
        """Open the websocket and block until the connection is closed."""
        if self.state != "disconnected":
            raise TransportError(f"transport {self.state}")
        if self.config.trace:
            websocket.enableTrace(True)
        self._set_state("connecting")
        self._app = websocket.WebSocketApp(
            self.url,
            header=dict(self.config.header) or None,
            on_open=self._handle_open,
            on_message=self._handle_message,
            on_error=self._handle_error,
            on_close=self._handle_close,
        )
        self._app.run_forever(suppress_origin=self.config.suppress_origin, reconnect=0)
        self._set_state("closed")
        error = self._error
        if error is not None:
            raise TransportError(f"{self.url}: {error}") from error

    def send(self, text: str) -> None:
        app = self._app
        if app is None or self.state != "connected":
            raise TransportError("transport not connected")
        try:
            app.send(text)
        except (websocket.WebSocketException, OSError) as exc:
            raise TransportError(f"send failed: {exc}") from exc

    def close(self) -> None:
        app = self._app
        if app is None or self.state == "closed":
            return
        self._set_state("closing")
        app.close()

    #
    # Internal helpers
    #
    def _set_state(self, new_state: str) -> None:
        with self._state_lock:
            self._state = new_state

    def _handle_open(self, _app: websocket.WebSocketApp) -> None:
        self._set_state("connected")
        for callback in list(self._on_open):
            callback()

    def _handle_message(self, _app: websocket.WebSocketApp, message: str) -> None:
        if isinstance(message, bytes):
            message = message.decode("utf-8", errors="replace")
        for callback in list(self._on_message):
            callback(message)

    def _handle_error(self, app: websocket.WebSocketApp, error: BaseException) -> None:
        if not isinstance(error, Exception):
            return
        logger.debug("transport error on %s: %r", self.url, error)
        if self._error is None:
            self._error = error
        app.close()

    def _handle_close(self, _app: websocket.WebSocketApp, status_code=None, reason=None) -> None:
        logger.debug("websocket closed status=%s reason=%s", status_code, reason)
        self._set_state("closed")
        for callback in list(self._on_close):
            callback()
