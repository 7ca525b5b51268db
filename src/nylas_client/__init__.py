# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Nylas client core package entrypoint.

This package provides the request-execution engine shared by every resource
accessor: URL and auth construction, dispatch over a shared httpx client, failure
classification, JSON encoding/decoding into typed results, and streamed downloads.
"""

from .config import ClientSettings, load_client_settings
from .errors import (
    DecodingError,
    EncodingError,
    ErrorCategory,
    NylasClientError,
    RequestFailedError,
    TransportError,
)
from .http import (
    NO_RESULT,
    RAW_TEXT,
    DownloadResponse,
    HttpMethod,
    RequestExecutor,
    TransportConfig,
    TransportConfigBuilder,
    UrlBuilder,
    create_default_transport,
)
from .log import setup_logging
from .runtime import NylasClient
from .version import __version__

__all__ = [
    "NO_RESULT",
    "RAW_TEXT",
    "ClientSettings",
    "DecodingError",
    "DownloadResponse",
    "EncodingError",
    "ErrorCategory",
    "HttpMethod",
    "NylasClient",
    "NylasClientError",
    "RequestExecutor",
    "RequestFailedError",
    "TransportConfig",
    "TransportConfigBuilder",
    "TransportError",
    "UrlBuilder",
    "create_default_transport",
    "load_client_settings",
    "setup_logging",
    "__version__",
]
