# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy, exception helpers and the HTTP failure classifier."""

from __future__ import annotations

import socket
import ssl as ssl_module
from enum import Enum

import httpx


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    PROTOCOL_ERROR = "PROTOCOL_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class NylasClientError(Exception):
    """Base class for every error raised by the request engine."""


class TransportError(NylasClientError):
    """The exchange failed below the HTTP status level (connect, TLS, timeout, redirects, body transfer)."""

    def __init__(self, message: str, category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR):
        super().__init__(message)
        self.category = category

    @classmethod
    def from_exception(cls, exc: BaseException) -> TransportError:
        category = categorize_exception(exc)
        detail = str(exc) or type(exc).__name__
        return cls(f"{error_category_to_reason(category)}: {detail}", category)


class RequestFailedError(NylasClientError):
    """The server answered with a non-success status code."""

    def __init__(self, status_code: int, body_text: str):
        super().__init__(f"Request failed with status {status_code}: {body_text}")
        self.status_code = status_code
        self.body_text = body_text

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.status_code < 500

    @property
    def is_server_error(self) -> bool:
        return 500 <= self.status_code < 600

    def __repr__(self) -> str:
        return f"RequestFailedError(status_code={self.status_code!r}, body_text={self.body_text!r})"


class EncodingError(NylasClientError, ValueError):
    """A request parameter could not be serialized to JSON."""


class DecodingError(NylasClientError, ValueError):
    """A response body could not be parsed into the requested result shape."""


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    cause = exc.__cause__ or exc.__context__
    if isinstance(cause, (ssl_module.SSLError, ssl_module.CertificateError)) or isinstance(
        exc, (ssl_module.SSLError, ssl_module.CertificateError)
    ):
        return ErrorCategory.SSL_ERROR

    if isinstance(cause, (socket.gaierror, socket.herror)) or isinstance(exc, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(
        exc,
        (
            httpx.RemoteProtocolError,
            httpx.LocalProtocolError,
            httpx.UnsupportedProtocol,
            httpx.TooManyRedirects,
            httpx.DecodingError,
        ),
    ):
        return ErrorCategory.PROTOCOL_ERROR

    if isinstance(exc, (httpx.ConnectError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


def error_category_to_reason(category: ErrorCategory | None) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.TIMEOUT: "Network timeout",
        ErrorCategory.SSL_ERROR: "TLS/certificate issue",
        ErrorCategory.CONNECTION_ERROR: "Network connectivity issue",
        ErrorCategory.DNS_ERROR: "DNS resolution failure",
        ErrorCategory.PROTOCOL_ERROR: "HTTP protocol error",
        ErrorCategory.UNKNOWN_ERROR: "Network error",
    }
    return mapping.get(category, "Network error")


def response_text(response: httpx.Response) -> str:
    """Decode an already-read response body, tolerating bogus charsets."""
    content = response.content
    encoding = response.charset_encoding or "utf-8"
    try:
        return content.decode(encoding, errors="replace")
    except LookupError:
        return content.decode("utf-8", errors="replace")


def classify(response: httpx.Response) -> RequestFailedError:
    """
    Capture a non-success response as a RequestFailedError.

    The whole body is read so the connection can be released, and the response is
    closed even when reading fails. A read or content-decoding failure surfaces as
    a TransportError.
    """
    try:
        response.read()
    except httpx.RequestError as exc:
        raise TransportError.from_exception(exc) from exc
    finally:
        response.close()
    return RequestFailedError(response.status_code, response_text(response))


__all__ = [
    "DecodingError",
    "EncodingError",
    "ErrorCategory",
    "NylasClientError",
    "RequestFailedError",
    "TransportError",
    "categorize_exception",
    "classify",
    "error_category_to_reason",
    "response_text",
]
