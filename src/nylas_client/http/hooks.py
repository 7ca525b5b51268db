# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx event hooks installed on every transport."""

from __future__ import annotations

import logging
import platform
from collections.abc import Callable

import httpx

from ..config import DEFAULT_USER_AGENT
from ..version import __version__
from .headers import redact_headers

RequestHook = Callable[[httpx.Request], None]
ResponseHook = Callable[[httpx.Response], None]

WRAPPER_HEADER = "X-Nylas-API-Wrapper"
WRAPPER_NAME = "python"

logger = logging.getLogger("nylas_client.http")


class VersionHeadersHook:
    """Stamps SDK identification headers onto every outgoing request."""

    def __init__(self, user_agent: str = DEFAULT_USER_AGENT):
        self.user_agent = user_agent

    def __call__(self, request: httpx.Request) -> None:
        request.headers["User-Agent"] = self.user_agent
        request.headers[WRAPPER_HEADER] = WRAPPER_NAME
        request.headers["X-Nylas-Client-Version"] = f"{__version__} (python {platform.python_version()})"


class HttpLoggingHook:
    """
    Debug logging of request and response lines.

    Bodies are never logged since they are streamed; Authorization and cookies are
    always masked when headers are logged.
    """

    def __init__(self, log_headers: bool = False, log: logging.Logger | None = None):
        self.log_headers = log_headers
        self.log = log or logger

    def on_request(self, request: httpx.Request) -> None:
        if not self.log.isEnabledFor(logging.DEBUG):
            return
        self.log.debug("--> %s %s", request.method, request.url)
        if self.log_headers:
            self.log.debug("--> headers %s", redact_headers(request.headers))

    def on_response(self, response: httpx.Response) -> None:
        if not self.log.isEnabledFor(logging.DEBUG):
            return
        request = response.request
        self.log.debug(
            "<-- %s %s %s (%s)",
            response.status_code,
            request.method,
            request.url,
            response.http_version,
        )
        if self.log_headers:
            self.log.debug("<-- headers %s", redact_headers(response.headers))


__all__ = ["HttpLoggingHook", "RequestHook", "ResponseHook", "VersionHeadersHook"]
