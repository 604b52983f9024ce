"""Command name to endpoint URL resolution.

A resolver maps ``(name, channel)`` to the URL the command is served at.
Resolvers must be deterministic and must not block.
"""

from __future__ import annotations

from collections.abc import Callable
from urllib.parse import quote

from .config import URL_STYLE_SCHEME, BridgeConfig

URLResolver = Callable[[str, str], str]

# Characters encodeURIComponent leaves alone besides alphanumerics
_URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_component(name: str) -> str:
    """Percent-encode a command name as a single path segment."""
    return quote(name, safe=_URI_COMPONENT_SAFE)


def convert_file_src(name: str, channel: str, style: str = "localhost") -> str:
    """Build the locally-addressed URL for a command.

    Args:
        name: Command name (encoded as one path segment)
        channel: Channel identifier, used as host label or URL scheme
        style: "localhost" for http://<channel>.localhost/<name>,
               "scheme" for <channel>://localhost/<name>
    """
    path = encode_component(name)
    if style == URL_STYLE_SCHEME:
        return f"{channel}://localhost/{path}"
    return f"http://{channel}.localhost/{path}"


def base_url_resolver(base_url: str) -> URLResolver:
    """Resolver serving every command from under a fixed base URL.

    The channel is ignored: the base URL already identifies the host.
    """
    root = base_url.rstrip("/")

    def resolve(name: str, channel: str) -> str:
        return f"{root}/{encode_component(name)}"

    return resolve


def resolver_for(config: BridgeConfig) -> URLResolver:
    """Pick the resolver described by a config."""
    if config.base_url:
        return base_url_resolver(config.base_url)

    def resolve(name: str, channel: str) -> str:
        return convert_file_src(name, channel, config.url_style)

    return resolve
