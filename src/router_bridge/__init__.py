"""router-bridge - invoke named host commands over HTTP framing.

Client side:
- invoke / RouterClient: call a command and decode its result
- serialize: turn call arguments into a typed request body

Host side lives in `router_bridge.host`.
"""

from .client import RouterClient, create_client, decode_response, invoke, response_media_type
from .config import BridgeConfig
from .resolver import URLResolver, base_url_resolver, convert_file_src, resolver_for
from .serializer import (
    APPLICATION_JSON,
    OCTET_STREAM,
    SerializedPayload,
    TransportSerializable,
    serialize,
    to_wire_value,
)

__all__ = [
    # Invocation
    "invoke",
    "RouterClient",
    "create_client",
    "decode_response",
    "response_media_type",
    # Configuration
    "BridgeConfig",
    # Resolution
    "URLResolver",
    "convert_file_src",
    "base_url_resolver",
    "resolver_for",
    # Serialization
    "serialize",
    "to_wire_value",
    "SerializedPayload",
    "TransportSerializable",
    "OCTET_STREAM",
    "APPLICATION_JSON",
]
