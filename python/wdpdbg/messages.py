"""Classification of inbound protocol messages."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional

REPLY = "reply"
ERROR = "error"
EVENT = "event"
UNPARSED = "unparsed"


def _to_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    try:
        if value is None:
            return None
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass
class InboundMessage:
    kind: str
    raw: str
    id: Optional[int] = None
    method: Optional[str] = None
    payload: Optional[Dict[str, Any]] = None

    @property
    def error(self) -> Optional[Dict[str, Any]]:
        if self.kind != ERROR or not self.payload:
            return None
        error = self.payload.get("error")
        return error if isinstance(error, dict) else {"message": str(error)}


def parse_message(text: str) -> InboundMessage:
    """Convert raw inbound text into an ``InboundMessage``; never raises."""

    try:
        payload = json.loads(text)
    except (TypeError, ValueError):
        return InboundMessage(kind=UNPARSED, raw=text)
    if not isinstance(payload, dict):
        return InboundMessage(kind=UNPARSED, raw=text)

    msg_id = _to_int(payload.get("id"))
    method = payload.get("method")
    if not isinstance(method, str):
        method = None
    if msg_id is not None and "error" in payload:
        kind = ERROR
    elif msg_id is not None:
        kind = REPLY
    elif method:
        kind = EVENT
    else:
        kind = UNPARSED
    return InboundMessage(kind=kind, raw=text, id=msg_id, method=method, payload=payload)
