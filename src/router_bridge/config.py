"""Bridge configuration.

Plain dataclass settings for the invocation client. The core never reads the
environment itself; `BridgeConfig.from_env()` exists for the CLI and for
applications that want environment-driven setup.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

DEFAULT_CHANNEL = "router"

URL_STYLE_LOCALHOST = "localhost"  # http://router.localhost/<command>
URL_STYLE_SCHEME = "scheme"  # router://localhost/<command>
URL_STYLES = (URL_STYLE_LOCALHOST, URL_STYLE_SCHEME)

ENV_PREFIX = "ROUTER_BRIDGE_"


@dataclass
class BridgeConfig:
    """Configuration for `RouterClient`."""

    # Endpoint resolution
    channel: str = DEFAULT_CHANNEL
    url_style: str = URL_STYLE_LOCALHOST
    base_url: str | None = None  # overrides url_style when set

    # HTTP settings. None means no timeout; callers wrap calls themselves.
    timeout: float | None = None
    headers: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.url_style not in URL_STYLES:
            raise ValueError(
                f"Unknown url_style {self.url_style!r}, expected one of {', '.join(URL_STYLES)}"
            )
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> BridgeConfig:
        """Build a config from ROUTER_BRIDGE_* environment variables.

        Recognized variables:
            ROUTER_BRIDGE_CHANNEL: channel identifier passed to the resolver
            ROUTER_BRIDGE_URL_STYLE: "localhost" or "scheme"
            ROUTER_BRIDGE_BASE_URL: serve commands from this URL instead
            ROUTER_BRIDGE_TIMEOUT: request timeout in seconds
        """
        env = os.environ if environ is None else environ

        timeout: float | None = None
        if raw_timeout := env.get(f"{ENV_PREFIX}TIMEOUT"):
            try:
                timeout = float(raw_timeout)
            except ValueError as e:
                raise ValueError(f"Invalid {ENV_PREFIX}TIMEOUT: {raw_timeout!r}") from e

        return cls(
            channel=env.get(f"{ENV_PREFIX}CHANNEL") or DEFAULT_CHANNEL,
            url_style=env.get(f"{ENV_PREFIX}URL_STYLE") or URL_STYLE_LOCALHOST,
            base_url=env.get(f"{ENV_PREFIX}BASE_URL") or None,
            timeout=timeout,
        )
