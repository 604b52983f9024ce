"""Host side of the bridge: a command router served over HTTP.

Register plain functions as commands and serve them with `create_app`.
"""

from .app import create_app
from .context import CommandContext
from .errors import (
    CommandNotFound,
    DeserializationError,
    InvalidArgs,
    RouterError,
    SerializationError,
)
from .handler import CommandHandler
from .response import Bytes, Text, into_response
from .router import Router

__all__ = [
    "create_app",
    "Router",
    "CommandHandler",
    "CommandContext",
    # Response helpers
    "Bytes",
    "Text",
    "into_response",
    # Errors
    "RouterError",
    "CommandNotFound",
    "InvalidArgs",
    "DeserializationError",
    "SerializationError",
]
