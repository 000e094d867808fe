"""Command runner: strict request/reply ping-pong over one transport."""

from __future__ import annotations

import logging
from enum import Enum
from typing import List

from .commands import CommandQueue
from .messages import ERROR, InboundMessage, parse_message
from .transport import Transport

logger = logging.getLogger(__name__)


class RunnerState(str, Enum):
    DISCONNECTED = "disconnected"
    CONNECTED = "connected"
    DRAINING = "draining"
    CLOSED = "closed"


class CommandRunner:
    """Send queued commands one at a time, each after the previous reply.

    Replies are not matched to request ids and error replies advance the
    queue like any other inbound message.
    """

    def __init__(self, transport: Transport, queue: CommandQueue) -> None:
        self.transport = transport
        self.queue = queue
        self.state = RunnerState.DISCONNECTED
        self.sent: List[str] = []
        self.replies: List[InboundMessage] = []
        self._close_logged = False
        transport.register_on_open(self.on_open)
        transport.register_on_message(self.on_message)
        transport.register_on_close(self.on_close)

    def run(self) -> List[InboundMessage]:
        """Connect and block until the transport loop ends."""
        logger.info("open %s", self.transport.url)
        self.transport.connect()
        return list(self.replies)

    # ------------------------------------------------------------------
    # Transport notifications
    # ------------------------------------------------------------------

    def on_open(self) -> None:
        if self.state is RunnerState.CLOSED:
            return
        logger.info("connected")
        self.state = RunnerState.CONNECTED
        self._send_next()

    def on_message(self, text: str) -> None:
        if self.state is RunnerState.CLOSED:
            logger.debug("ignoring message after close: %s", text)
            return
        logger.info("recv %s", text)
        message = parse_message(text)
        if message.kind == ERROR:
            logger.debug("reply %s carries error %s", message.id, message.error)
        self.replies.append(message)
        if not self._send_next():
            self.state = RunnerState.CLOSED
            self.transport.close()

    def on_close(self) -> None:
        if not self._close_logged:
            self._close_logged = True
            logger.info("disconnected")
        self.state = RunnerState.CLOSED
        self.transport.close()

    def _send_next(self) -> bool:
        payload = self.queue.pop_next()
        if payload is None:
            return False
        logger.info("send %s", payload)
        self.transport.send(payload)
        self.sent.append(payload)
        self.state = RunnerState.DRAINING
        return True
