"""
Pytest configuration and fixtures for wdpdbg tests.
"""
from typing import Callable, List

import pytest


class FakeTransport:
    """Records sends/closes; tests drive the open/message/close notifications."""

    def __init__(self, url: str = "ws://localhost:9222/devtools/page/1") -> None:
        self.url = url
        self.sent: List[str] = []
        self.connect_calls = 0
        self.close_calls = 0
        self.events: List[str] = []
        self._on_open: List[Callable[[], None]] = []
        self._on_message: List[Callable[[str], None]] = []
        self._on_close: List[Callable[[], None]] = []

    def register_on_open(self, callback):
        self._on_open.append(callback)

    def register_on_message(self, callback):
        self._on_message.append(callback)

    def register_on_close(self, callback):
        self._on_close.append(callback)

    def connect(self) -> None:
        self.connect_calls += 1
        self.events.append("connect")

    def send(self, text: str) -> None:
        self.sent.append(text)
        self.events.append(f"send:{text}")

    def close(self) -> None:
        self.close_calls += 1
        self.events.append("close")

    def fire_open(self) -> None:
        for callback in list(self._on_open):
            callback()

    def fire_message(self, text: str) -> None:
        self.events.append(f"recv:{text}")
        for callback in list(self._on_message):
            callback(text)

    def fire_close(self) -> None:
        for callback in list(self._on_close):
            callback()


@pytest.fixture
def fake_transport():
    return FakeTransport()
