from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class Answer:
    """Server response envelope. Every field is optional on the wire."""

    code: int | None = None
    payload: Any = None
    error: dict[str, Any] | None = None
    raw: Any = None

    @classmethod
    def from_body(cls, body: Any) -> Answer:
        if not isinstance(body, dict):
            return cls(raw=body)
        code = body.get("code")
        if isinstance(code, str) and code.isdigit():
            code = int(code)
        error = body.get("error")
        return cls(
            code=code if isinstance(code, int) else None,
            payload=body.get("payload"),
            error=error if isinstance(error, dict) else None,
            raw=body,
        )

    @property
    def has_payload(self) -> bool:
        # empty containers count as a payload, scalar zero/false/"" do not
        payload = self.payload
        if payload is None or payload is False or payload == "":
            return False
        if isinstance(payload, (int, float)) and not isinstance(payload, bool):
            return payload == payload and payload != 0
        return True

    @property
    def ok(self) -> bool:
        return self.code == 200
