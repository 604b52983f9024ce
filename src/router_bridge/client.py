"""Invocation client - calls named commands on the host.

Each call resolves the command to its endpoint, serializes the arguments,
POSTs them, and decodes the response according to the content type the
host reports:

- ``application/json`` -> parsed JSON value
- ``text/plain`` -> ``str``
- anything else, including a missing header -> ``bytes``

Errors are not translated. Connection failures raise `httpx.TransportError`,
non-2xx responses raise `httpx.HTTPStatusError`, and a malformed JSON body
raises `json.JSONDecodeError`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from .config import BridgeConfig
from .resolver import URLResolver, resolver_for
from .serializer import APPLICATION_JSON, serialize

logger = logging.getLogger(__name__)

TEXT_PLAIN = "text/plain"


def response_media_type(response: httpx.Response) -> str:
    """Return the significant part of the response content type.

    Some hosts deliver the header twice, which arrives comma-joined, so only
    the segment before the first comma counts. No case folding or trimming.
    """
    return (response.headers.get("content-type") or "").split(",")[0]


def decode_response(response: httpx.Response) -> Any:
    """Decode a fully-read response body by its declared content type."""
    media_type = response_media_type(response)
    if media_type == APPLICATION_JSON:
        return response.json()
    if media_type == TEXT_PLAIN:
        return response.text
    return response.content


def request_content(body: Any) -> bytes:
    """Wire bytes for a raw (octet-stream) request body.

    Buffers go out unchanged and strings as UTF-8. None is an empty body,
    booleans are lowercase ``true``/``false`` and integral floats drop the
    fraction (``1.0`` -> ``1``). Any other value is sent as ``str(value)``.
    """
    if isinstance(body, bytes | bytearray | memoryview):
        return bytes(body)
    if isinstance(body, str):
        return body.encode("utf-8")
    if body is None:
        return b""
    if isinstance(body, bool):
        return b"true" if body else b"false"
    # From 1e21 up the exponent form is kept
    if isinstance(body, float) and body.is_integer() and abs(body) < 1e21:
        return str(int(body)).encode("utf-8")
    return str(body).encode("utf-8")


@dataclass
class RouterClient:
    """Client for invoking commands on a router host.

    Usage:
        async with RouterClient() as client:
            greeting = await client.invoke("greet", "world", 3)

    A single client may run many `invoke` calls concurrently; each call owns
    its own request and response.
    """

    config: BridgeConfig = field(default_factory=BridgeConfig)
    resolver: URLResolver | None = None
    transport: httpx.AsyncBaseTransport | None = field(default=None, repr=False)
    _http_client: httpx.AsyncClient | None = field(default=None, repr=False)
    _owns_client: bool = field(default=False, init=False, repr=False)

    def resolve(self, command: str) -> str:
        """Resolve a command name to its endpoint URL."""
        resolver = self.resolver or resolver_for(self.config)
        return resolver(command, self.config.channel)

    def _client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                transport=self.transport,
                timeout=httpx.Timeout(self.config.timeout),
            )
            self._owns_client = True
        return self._http_client

    async def invoke(self, command: str, *args: Any) -> Any:
        """Invoke a command and return its decoded result.

        Args:
            command: Name of the command registered on the host
            *args: Positional arguments for the command

        Returns:
            Parsed JSON value, text, or raw bytes, depending on the
            content type of the response.
        """
        url = self.resolve(command)
        payload = serialize(args)

        if payload.is_binary:
            content = request_content(payload.body)
        else:
            content = payload.body.encode("utf-8")

        headers = {**self.config.headers, "Content-Type": payload.content_type}
        logger.debug(f"invoke {command} -> {url} ({payload.content_type}, {len(content)} bytes)")

        # Non-streaming request: the body is read in full and the connection
        # released before we look at status or headers.
        response = await self._client().post(url, headers=headers, content=content)
        response.raise_for_status()

        media_type = response_media_type(response)
        logger.debug(f"{command} responded {response.status_code} ({media_type!r})")
        return decode_response(response)

    async def close(self) -> None:
        """Close the underlying HTTP client if this client created it."""
        if self._http_client is not None and self._owns_client:
            await self._http_client.aclose()
            self._http_client = None
            self._owns_client = False

    async def __aenter__(self) -> RouterClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()


async def invoke(command: str, *args: Any, config: BridgeConfig | None = None) -> Any:
    """Invoke a command with a one-shot client.

    Example:
        result = await invoke("add", 3, 5)
    """
    async with RouterClient(config=config or BridgeConfig()) as client:
        return await client.invoke(command, *args)


def create_client(
    base_url: str | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> RouterClient:
    """Create a client, optionally pinned to a base URL or custom transport.

    Args:
        base_url: Serve commands from this URL (e.g. http://127.0.0.1:4096)
        transport: httpx transport to send requests through, such as
            `httpx.ASGITransport` for an in-process host

    Returns:
        RouterClient configured accordingly
    """
    return RouterClient(config=BridgeConfig(base_url=base_url), transport=transport)
