"""End-to-end tests: RouterClient invoking commands on an in-process host.

The client talks to the Starlette app through `httpx.ASGITransport`, so the
real serializer, resolver, host router and response decoding all run.
"""

import asyncio
from types import MappingProxyType

import httpx
import pytest
from pydantic import BaseModel

from router_bridge import RouterClient


class Basket:
    def __init__(self, *items: str):
        self.items = items

    def to_transport_value(self):
        return {"content": ", ".join(self.items)}


class Note(BaseModel):
    content: str


class TestJsonCommands:
    @pytest.mark.asyncio
    async def test_multiple_arguments(self, bridge: RouterClient):
        async with bridge:
            assert await bridge.invoke("add", 3, 5) == 8
            assert await bridge.invoke("greet", "Tauri", "?") == "Hello, Tauri?"
            assert await bridge.invoke("calc", 10.0, 4.0, "Subtract") == 6.0

    @pytest.mark.asyncio
    async def test_no_arguments(self, bridge: RouterClient):
        async with bridge:
            assert await bridge.invoke("no_args") == "Hello from no args!"

    @pytest.mark.asyncio
    async def test_async_commands(self, bridge: RouterClient):
        async with bridge:
            assert await bridge.invoke("async_greet", "World", ".") == "Hello async, World."
            assert await bridge.invoke("async_with_result", 4, 3) == 12

    @pytest.mark.asyncio
    async def test_null_result(self, bridge: RouterClient):
        async with bridge:
            assert await bridge.invoke("unit_return", 1, "ignored") is None

    @pytest.mark.asyncio
    async def test_transport_serializable_argument(self, bridge: RouterClient):
        """Objects with a transport hook arrive as their wire value."""
        async with bridge:
            result = await bridge.invoke("json_to_raw", Basket("apple", "pear"), "\n")

        assert result == b'{"content":"apple, pear"}\n'

    @pytest.mark.asyncio
    async def test_model_argument(self, bridge: RouterClient):
        async with bridge:
            result = await bridge.invoke("json_to_raw", Note(content="hi"), "")

        assert result == b'{"content":"hi"}'

    @pytest.mark.asyncio
    async def test_mapping_argument(self, bridge: RouterClient):
        async with bridge:
            result = await bridge.invoke("json_to_raw", MappingProxyType({"content": "hi"}), "")

        assert result == b'{"content":"hi"}'


class TestBinaryCommands:
    @pytest.mark.asyncio
    async def test_bytes_in_json_out(self, bridge: RouterClient):
        async with bridge:
            result = await bridge.invoke("raw_to_json", b"hello world")

        assert result == {"content": "Raw to json, received 11 bytes"}

    @pytest.mark.asyncio
    async def test_bytes_echo(self, bridge: RouterClient):
        payload = bytes(range(256))
        async with bridge:
            result = await bridge.invoke("request_response", payload)

        assert result == payload


class TestTextCommands:
    @pytest.mark.asyncio
    async def test_text_result(self, bridge: RouterClient):
        async with bridge:
            result = await bridge.invoke("shout", "ab", 3)

        assert result == "ABABAB"
        assert isinstance(result, str)


class TestFailures:
    @pytest.mark.asyncio
    async def test_unknown_command(self, bridge: RouterClient):
        async with bridge:
            with pytest.raises(httpx.HTTPStatusError) as exc_info:
                await bridge.invoke("missing", 1, 2)

        assert exc_info.value.response.status_code == 404
        assert exc_info.value.response.json()["type"] == "CommandNotFound"

    @pytest.mark.asyncio
    async def test_single_string_argument_is_sent_raw(self, bridge: RouterClient):
        """A lone argument goes out as the raw body, which JSON commands reject."""
        async with bridge:
            with pytest.raises(httpx.HTTPStatusError) as exc_info:
                await bridge.invoke("greet", "Tauri")

        assert exc_info.value.response.status_code == 400
        assert exc_info.value.response.json()["type"] == "DeserializationError"

    @pytest.mark.asyncio
    async def test_handler_error(self, bridge: RouterClient):
        async with bridge:
            with pytest.raises(httpx.HTTPStatusError) as exc_info:
                await bridge.invoke("calc", 1, 0, "Divide")

        assert exc_info.value.response.status_code == 400


class TestConcurrency:
    @pytest.mark.asyncio
    async def test_concurrent_calls(self, bridge: RouterClient):
        async with bridge:
            results = await asyncio.gather(
                bridge.invoke("async_add", 1, 2),
                bridge.invoke("greet", "A", "!"),
                bridge.invoke("raw_to_json", b"xyz"),
                bridge.invoke("shout", "z", 2),
            )

        assert results == [
            3,
            "Hello, A!",
            {"content": "Raw to json, received 3 bytes"},
            "ZZ",
        ]
