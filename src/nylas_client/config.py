# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for the Nylas client core."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_BASE_URL = "https://api.nylas.com"
DEFAULT_USER_AGENT = f"NylasClientCore/{__version__}"
DEFAULT_TIMEOUT = 60.0

HTTP_1_1 = "HTTP/1.1"
HTTP_2 = "HTTP/2"
SUPPORTED_PROTOCOLS = (HTTP_1_1, HTTP_2)


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _protocol_env(name: str, default: str) -> str:
    value = (os.getenv(name) or "").strip().upper()
    if value in {"HTTP/2", "HTTP2", "H2"}:
        return HTTP_2
    if value in {"HTTP/1.1", "HTTP1.1", "HTTP/1", "HTTP1"}:
        return HTTP_1_1
    return default


@dataclass
class ClientSettings:
    """Transport defaults used when building a TransportConfig."""

    base_url: str = DEFAULT_BASE_URL
    connect_timeout: float = DEFAULT_TIMEOUT
    read_timeout: float = DEFAULT_TIMEOUT
    write_timeout: float = DEFAULT_TIMEOUT
    # HTTP/2 stays opt-in: multiplexed connections have to be shut down by the application.
    protocol_version: str = HTTP_1_1
    user_agent: str = DEFAULT_USER_AGENT
    log_headers: bool = False
    verify_ssl: bool = True

    @classmethod
    def from_env(cls) -> "ClientSettings":
        """Create settings from environment variables (evaluated at call time)."""
        return cls(
            base_url=os.getenv("NYLAS_BASE_URL", cls.base_url),
            connect_timeout=_float_env("NYLAS_HTTP_CONNECT_TIMEOUT", cls.connect_timeout),
            read_timeout=_float_env("NYLAS_HTTP_READ_TIMEOUT", cls.read_timeout),
            write_timeout=_float_env("NYLAS_HTTP_WRITE_TIMEOUT", cls.write_timeout),
            protocol_version=_protocol_env("NYLAS_HTTP_PROTOCOL", cls.protocol_version),
            user_agent=os.getenv("NYLAS_USER_AGENT", cls.user_agent),
            log_headers=_bool_env("NYLAS_HTTP_LOG_HEADERS", cls.log_headers),
            verify_ssl=_bool_env("NYLAS_HTTP_VERIFY_SSL", cls.verify_ssl),
        )


def load_client_settings() -> ClientSettings:
    """Load client settings from environment with sensible defaults."""
    return ClientSettings.from_env()
