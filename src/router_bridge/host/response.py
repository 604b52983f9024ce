"""Conversion of handler return values into HTTP responses."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import TypeAdapter
from pydantic_core import PydanticSerializationError
from starlette.responses import Response

from .errors import RouterError, SerializationError

logger = logging.getLogger(__name__)

_any_adapter: TypeAdapter[Any] = TypeAdapter(Any)


class Bytes(bytes):
    """Raw bytes: the request body as an argument, octet-stream as a result."""


class Text(str):
    """A result sent as ``text/plain`` instead of a JSON string."""


def binary_response(data: bytes | bytearray | memoryview) -> Response:
    return Response(content=bytes(data), media_type="application/octet-stream")


def text_response(text: str) -> Response:
    # Set the header directly so Starlette does not append "; charset=utf-8";
    # clients match the content type exactly.
    return Response(content=text.encode("utf-8"), headers={"content-type": "text/plain"})


def json_response(value: Any, status_code: int = 200) -> Response:
    return Response(
        content=_any_adapter.dump_json(value),
        status_code=status_code,
        headers={"content-type": "application/json"},
    )


def error_response(error: RouterError) -> Response:
    """Render a router error as its JSON response."""
    logger.debug(f"{error.kind}: {error.detail}")
    return json_response(error.to_dict(), status_code=error.status_code)


def into_response(value: Any) -> Response:
    """Convert a handler result into a response.

    - `Response` instances pass through untouched
    - bytes-like values become ``application/octet-stream``
    - `Text` becomes ``text/plain``
    - everything else, including plain ``str`` and ``None``, is JSON
    """
    if isinstance(value, Response):
        return value
    if isinstance(value, bytes | bytearray | memoryview):
        return binary_response(value)
    if isinstance(value, Text):
        return text_response(value)

    try:
        return json_response(value)
    except PydanticSerializationError as e:
        return error_response(SerializationError(f"Failed to serialize response: {e}"))
