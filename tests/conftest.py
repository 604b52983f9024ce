"""Pytest configuration and shared fixtures."""

from enum import Enum

import httpx
import pytest
from pydantic import BaseModel
from starlette.datastructures import Headers
from starlette.requests import Request
from starlette.responses import Response
from starlette.testclient import TestClient

from router_bridge import BridgeConfig, RouterClient
from router_bridge.host import Bytes, CommandContext, InvalidArgs, Router, Text, create_app


# =============================================================================
# Sample commands
# =============================================================================


class Operation(str, Enum):
    ADD = "Add"
    SUBTRACT = "Subtract"
    MULTIPLY = "Multiply"
    DIVIDE = "Divide"


class Message(BaseModel):
    content: str


def greet(name: str, punctuation: str = "!") -> str:
    return f"Hello, {name}{punctuation}"


def add(a: int, b: int) -> int:
    return a + b


def calc(a: float, b: float, operation: Operation) -> float:
    if operation is Operation.ADD:
        return a + b
    if operation is Operation.SUBTRACT:
        return a - b
    if operation is Operation.MULTIPLY:
        return a * b
    if b == 0:
        raise InvalidArgs("Division by zero")
    return a / b


def no_args() -> str:
    return "Hello from no args!"


def unit_return(x: int) -> None:
    return None


def raw_to_json(body: Bytes) -> Message:
    return Message(content=f"Raw to json, received {len(body)} bytes")


def json_to_raw(message: Message, suffix: str = "") -> Bytes:
    return Bytes((message.model_dump_json() + suffix).encode("utf-8"))


def request_response(request: Request, body: Bytes) -> Response:
    return Response(content=bytes(body), headers={"content-type": "application/octet-stream"})


def shout(text: str, times: int) -> Text:
    return Text(text.upper() * times)


def echo_header(headers: Headers, name: str, fallback: str) -> str:
    return headers.get(name, fallback)


def whoami(ctx: CommandContext) -> str:
    return ctx.command


def unserializable() -> object:
    return object()


async def async_greet(name: str, punctuation: str = "!") -> str:
    return f"Hello async, {name}{punctuation}"


async def async_add(a: int, b: int) -> int:
    return a + b


async def async_with_result(value: int, scale: int = 2) -> int:
    if value < 0:
        raise InvalidArgs("Negative value not allowed")
    return value * scale


def build_router() -> Router:
    return (
        Router()
        .command("greet", greet)
        .command("add", add)
        .command("calc", calc)
        .command("no_args", no_args)
        .command("unit_return", unit_return)
        .command("raw_to_json", raw_to_json)
        .command("json_to_raw", json_to_raw)
        .command("request_response", request_response)
        .command("shout", shout)
        .command("echo_header", echo_header)
        .command("whoami", whoami)
        .command("unserializable", unserializable)
        .command("async_greet", async_greet)
        .command("async_add", async_add)
        .command("async_with_result", async_with_result)
    )


@pytest.fixture
def router() -> Router:
    return build_router()


@pytest.fixture
def app(router: Router):
    return create_app(router)


@pytest.fixture
def http_client(app) -> TestClient:
    """Starlette test client talking to the host app directly."""
    return TestClient(app)


@pytest.fixture
def bridge(app) -> RouterClient:
    """RouterClient wired to the host app in-process."""
    return RouterClient(config=BridgeConfig(), transport=httpx.ASGITransport(app=app))
