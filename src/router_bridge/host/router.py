"""Command router: holds handlers and dispatches requests to them."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, overload

from starlette.requests import Request
from starlette.responses import Response

from .context import CommandContext
from .errors import CommandNotFound
from .handler import CommandHandler
from .response import error_response

logger = logging.getLogger(__name__)

Handler = Callable[..., Any]


class Router:
    """Registry of named commands.

    Example:
        def greet(name: str) -> str:
            return f"Hello, {name}!"

        router = Router().command("greet", greet)

        @router.command("add")
        async def add(a: int, b: int) -> int:
            return a + b
    """

    def __init__(self) -> None:
        self.commands: dict[str, CommandHandler] = {}

    @overload
    def command(self, name: str, handler: Handler) -> Router: ...

    @overload
    def command(self, name: str, handler: None = None) -> Callable[[Handler], Handler]: ...

    def command(
        self, name: str, handler: Handler | None = None
    ) -> Router | Callable[[Handler], Handler]:
        """Register a handler under a command name.

        With a handler, registers it and returns the router for chaining.
        Without one, returns a decorator that registers the decorated
        function and returns it unchanged.
        """
        if handler is None:

            def decorator(func: Handler) -> Handler:
                self.commands[name] = CommandHandler(func)
                return func

            return decorator

        self.commands[name] = CommandHandler(handler)
        return self

    def __contains__(self, name: object) -> bool:
        return name in self.commands

    async def handle_request(self, request: Request) -> Response:
        """Dispatch a request to the command named by its path."""
        command_name = request.path_params.get("command") or request.scope["path"].lstrip("/")
        body = await request.body()

        handler = self.commands.get(command_name)
        if handler is None:
            return error_response(CommandNotFound(command_name))

        logger.debug(f"Dispatching {command_name} ({len(body)} bytes)")
        ctx = CommandContext(command=command_name, request=request, body=body)
        return await handler.call(ctx)
