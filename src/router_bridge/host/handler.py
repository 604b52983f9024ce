"""Command handlers: plain functions with parameters filled from the request.

Parameters are matched by annotation:

- `Bytes` receives the raw request body
- `starlette.requests.Request` receives the request
- `starlette.datastructures.Headers` receives the request headers
- `CommandContext` receives the per-call context
- anything else receives the next element of the JSON-array body,
  validated against the annotation with pydantic

Handlers may be sync or async, and may raise a `RouterError` to answer with
that error. Sync handlers run in the threadpool.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, get_type_hints

from pydantic import TypeAdapter, ValidationError
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import Headers
from starlette.requests import Request
from starlette.responses import Response

from .context import CommandContext
from .errors import DeserializationError, InvalidArgs, RouterError
from .response import Bytes, error_response, into_response


@dataclass(frozen=True)
class Parameter:
    """How one handler parameter gets its value."""

    name: str
    source: str  # "body" | "request" | "headers" | "context" | "json"
    adapter: TypeAdapter[Any] | None = None
    default: Any = inspect.Parameter.empty

    def extract(self, ctx: CommandContext) -> Any:
        if self.source == "body":
            return Bytes(ctx.body)
        if self.source == "request":
            return ctx.request
        if self.source == "headers":
            return ctx.request.headers
        if self.source == "context":
            return ctx

        try:
            raw = ctx.take_json_arg()
        except InvalidArgs:
            if self.default is inspect.Parameter.empty:
                raise
            return self.default

        if self.adapter is None:
            return raw
        try:
            return self.adapter.validate_python(raw)
        except ValidationError as e:
            raise DeserializationError(f"JSON deserialization error: {e}") from e


_SOURCES: dict[Any, str] = {
    Bytes: "body",
    Request: "request",
    Headers: "headers",
    CommandContext: "context",
}


def _parameters(func: Callable[..., Any]) -> list[Parameter]:
    signature = inspect.signature(func)
    try:
        hints = get_type_hints(func)
    except (NameError, TypeError):
        hints = {}

    params = []
    for name, param in signature.parameters.items():
        if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
            raise TypeError(f"Command handler {func.__name__} cannot take *{name}")

        annotation = hints.get(name, param.annotation)
        source = _SOURCES.get(annotation, "json")

        adapter = None
        # Unresolvable string annotations are treated as untyped
        if source == "json" and annotation is not param.empty and not isinstance(annotation, str):
            adapter = TypeAdapter(annotation)

        params.append(Parameter(name=name, source=source, adapter=adapter, default=param.default))
    return params


class CommandHandler:
    """A registered command function with its parameter plan."""

    def __init__(self, func: Callable[..., Any]):
        self.func = func
        self.parameters = _parameters(func)

    async def call(self, ctx: CommandContext) -> Response:
        """Run the handler for one request and build its response."""
        try:
            kwargs = {param.name: param.extract(ctx) for param in self.parameters}
            if inspect.iscoroutinefunction(self.func):
                result = await self.func(**kwargs)
            else:
                result = await run_in_threadpool(self.func, **kwargs)
                if inspect.isawaitable(result):
                    result = await result
        except RouterError as e:
            return error_response(e)

        return into_response(result)
