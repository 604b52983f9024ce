"""Per-call command context."""

from __future__ import annotations

import json
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from starlette.requests import Request

from .errors import DeserializationError, InvalidArgs


@dataclass
class CommandContext:
    """Context for one command execution.

    Holds the request and its body, and hands out JSON arguments one at a
    time. The body is parsed as a JSON array on first use only.
    """

    command: str
    request: Request
    body: bytes
    _json_args: Iterator[Any] | None = field(default=None, repr=False)

    def take_json_arg(self) -> Any:
        """Take the next JSON argument from the request body.

        Raises:
            DeserializationError: If the body is not a JSON array
            InvalidArgs: If all arguments have been taken
        """
        if self._json_args is None:
            try:
                values = json.loads(self.body)
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                raise DeserializationError(f"Failed to parse request body: {e}") from e
            if not isinstance(values, list):
                raise DeserializationError(
                    "Failed to parse request body: expected a JSON array, "
                    f"got {type(values).__name__}"
                )
            self._json_args = iter(values)

        try:
            return next(self._json_args)
        except StopIteration:
            raise InvalidArgs("no more arguments available") from None
