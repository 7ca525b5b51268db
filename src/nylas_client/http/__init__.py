# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP engine exports."""

from .auth import attach_auth, basic_auth_header
from .client import TransportConfig, TransportConfigBuilder, create_default_transport
from .codec import NO_RESULT, RAW_TEXT, decode, encode
from .executor import RequestExecutor
from .headers import header_value, normalize_headers, redact_headers
from .hooks import HttpLoggingHook, VersionHeadersHook
from .models import Headers, HttpMethod, OutgoingRequest, build_request
from .stream import DownloadResponse
from .url import UrlBuilder

__all__ = [
    "NO_RESULT",
    "RAW_TEXT",
    "DownloadResponse",
    "Headers",
    "HttpLoggingHook",
    "HttpMethod",
    "OutgoingRequest",
    "RequestExecutor",
    "TransportConfig",
    "TransportConfigBuilder",
    "UrlBuilder",
    "VersionHeadersHook",
    "attach_auth",
    "basic_auth_header",
    "build_request",
    "create_default_transport",
    "decode",
    "encode",
    "header_value",
    "normalize_headers",
    "redact_headers",
]
