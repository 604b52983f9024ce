"""Host-side router errors.

Each error knows its HTTP status and renders as
``{"type": <kind>, "message": <text>}``.
"""

from __future__ import annotations

from typing import Any


class RouterError(Exception):
    """Base class for errors reported back to the caller as a response."""

    kind = "RouterError"
    status_code = 500
    prefix = "router error"

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"{self.prefix}: {detail}")

    @property
    def message(self) -> str:
        return str(self)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind, "message": self.message}


class CommandNotFound(RouterError):
    kind = "CommandNotFound"
    status_code = 404
    prefix = "command not found"


class InvalidArgs(RouterError):
    kind = "InvalidArgs"
    status_code = 400
    prefix = "invalid arguments"


class DeserializationError(RouterError):
    kind = "DeserializationError"
    status_code = 400
    prefix = "deserialization error"


class SerializationError(RouterError):
    kind = "SerializationError"
    status_code = 500
    prefix = "serialization error"
