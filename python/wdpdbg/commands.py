"""Command payload builders and the ordered command queue."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

METHOD_RE = re.compile(r"^[A-Za-z][A-Za-z0-9]*\.[A-Za-z][A-Za-z0-9]*$")

Call = Tuple[str, Optional[Dict[str, Any]]]


def build_command(command_id: int, method: str, params: Optional[Dict[str, Any]] = None) -> str:
    """Serialize one ``{"id", "method", "params"}`` request."""
    return json.dumps({"id": int(command_id), "method": method, "params": dict(params or {})})


def navigate(url: str, command_id: int = 1) -> str:
    return build_command(command_id, "Page.navigate", {"url": url})


def parse_call(text: str) -> Call:
    """Parse ``Namespace.Method [JSON-object]`` as typed on the command line."""
    method, _, rest = text.strip().partition(" ")
    if not METHOD_RE.match(method):
        raise ValueError(f"invalid method name: {method!r}")
    rest = rest.strip()
    if not rest:
        return method, None
    try:
        params = json.loads(rest)
    except json.JSONDecodeError as exc:
        raise ValueError(f"invalid params for {method}: {exc}") from exc
    if not isinstance(params, dict):
        raise ValueError(f"params for {method} must be a JSON object")
    return method, params


@dataclass
class CommandQueue:
    """Pre-serialized payloads consumed strictly in order through one cursor."""

    commands: Tuple[str, ...] = ()
    cursor: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self.commands = tuple(self.commands)

    @classmethod
    def from_calls(cls, calls: Iterable[Call], *, first_id: int = 1) -> "CommandQueue":
        payloads: List[str] = []
        for offset, (method, params) in enumerate(calls):
            payloads.append(build_command(first_id + offset, method, params))
        return cls(tuple(payloads))

    def __len__(self) -> int:
        return len(self.commands)

    @property
    def remaining(self) -> int:
        return len(self.commands) - self.cursor

    @property
    def exhausted(self) -> bool:
        return self.cursor >= len(self.commands)

    def pop_next(self) -> Optional[str]:
        if self.exhausted:
            return None
        payload = self.commands[self.cursor]
        self.cursor += 1
        return payload
