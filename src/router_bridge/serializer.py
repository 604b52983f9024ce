"""Argument serialization for command invocations.

Turns the positional arguments of a call into a ``(content-type, body)``
pair. Two shapes exist on the wire:

- ``application/octet-stream``: the single argument is sent as the raw body
- ``application/json``: all arguments are sent as one JSON array, in order

Values are made JSON-friendly by `to_wire_value`, which is applied top-down
the way a JSON replacer is: each value is substituted first and the result
is then walked recursively. Pydantic models and dataclass instances are
sent as JSON objects of their fields.
"""

from __future__ import annotations

import json
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, fields, is_dataclass
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel

OCTET_STREAM = "application/octet-stream"
APPLICATION_JSON = "application/json"

# Shapes of the *argument collection* that select the binary path.
# Matches against the collection, not its first element.
_BINARY_COLLECTIONS = (bytes, bytearray, memoryview, list, tuple)


@runtime_checkable
class TransportSerializable(Protocol):
    """An object that supplies its own wire representation."""

    def to_transport_value(self) -> Any:
        """Return a JSON-compatible value to send in place of this object."""
        ...


@dataclass(frozen=True)
class SerializedPayload:
    """Request body together with its declared content type."""

    content_type: str
    body: Any

    @property
    def is_binary(self) -> bool:
        return self.content_type == OCTET_STREAM


def to_wire_value(value: Any) -> Any:
    """Transform a value into something `json.dumps` can encode."""
    value = _substitute(value)

    if isinstance(value, dict):
        return {key: to_wire_value(item) for key, item in value.items()}
    if isinstance(value, list | tuple):
        return [to_wire_value(item) for item in value]
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def _substitute(value: Any) -> Any:
    # dict is already a plain keyed object; other mappings get flattened
    if isinstance(value, Mapping) and not isinstance(value, dict):
        return dict(value.items())
    if isinstance(value, bytearray):
        return list(value)
    if isinstance(value, bytes | memoryview):
        return list(bytes(value))
    if isinstance(value, TransportSerializable) and not isinstance(value, type):
        # The hook may return another special value, so substitute again
        return _substitute(value.to_transport_value())
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: getattr(value, f.name) for f in fields(value)}
    return value


def serialize(args: Sequence[Any]) -> SerializedPayload:
    """Serialize call arguments into a payload.

    A single argument inside an array-like collection is sent as the raw
    body, exactly as given. Every other argument list becomes a JSON array.
    """
    if len(args) == 1 and isinstance(args, _BINARY_COLLECTIONS):
        return SerializedPayload(content_type=OCTET_STREAM, body=args[0])

    data = json.dumps(
        [to_wire_value(arg) for arg in args],
        separators=(",", ":"),
        ensure_ascii=False,
    )
    return SerializedPayload(content_type=APPLICATION_JSON, body=data)
