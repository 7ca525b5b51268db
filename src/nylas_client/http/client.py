# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport configuration: base URL plus a configured httpx client, and its builder."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any

import httpx

from ..config import HTTP_2, SUPPORTED_PROTOCOLS, ClientSettings, load_client_settings
from .hooks import HttpLoggingHook, RequestHook, ResponseHook, VersionHeadersHook
from .url import UrlBuilder, is_absolute_url, resolve_against_base

ClientCustomizer = Callable[[dict[str, Any]], None]


@dataclass(frozen=True)
class TransportConfig:
    """
    Immutable pairing of the service base URL and the httpx client used to reach it.

    One instance is meant to be built at startup and shared by every caller and thread;
    it carries no per-call state.
    """

    base_url: str
    http_client: httpx.Client

    def __post_init__(self) -> None:
        if not is_absolute_url(self.base_url):
            raise ValueError(f"base_url must be an absolute URL, got {self.base_url!r}")

    @classmethod
    def builder(cls, settings: ClientSettings | None = None) -> TransportConfigBuilder:
        return TransportConfigBuilder(settings)

    def new_url_builder(self) -> UrlBuilder:
        return UrlBuilder.from_url(self.base_url)

    def resolve_url(self, target: UrlBuilder | str) -> str:
        if isinstance(target, UrlBuilder):
            return target.build()
        return resolve_against_base(self.base_url, target)

    def close(self) -> None:
        self.http_client.close()


class TransportConfigBuilder:
    """
    Fluent builder for TransportConfig.

    Defaults: 60 second connect/read/write timeouts, HTTP/1.1 only, a debug logging
    hook and the SDK identification headers hook. HTTP/2 can be enabled with
    ``protocol_version("HTTP/2")`` (requires the ``h2`` package); applications doing so
    should close the transport themselves on shutdown.
    """

    def __init__(self, settings: ClientSettings | None = None):
        self.settings = replace(settings or load_client_settings())
        self._interceptors: list[RequestHook] = []
        self._response_hooks: list[ResponseHook] = []
        self._customizers: list[ClientCustomizer] = []
        self._transport: httpx.BaseTransport | None = None

    def base_url(self, base_url: str) -> TransportConfigBuilder:
        self.settings.base_url = base_url
        return self

    def connect_timeout(self, seconds: float) -> TransportConfigBuilder:
        self.settings.connect_timeout = seconds
        return self

    def read_timeout(self, seconds: float) -> TransportConfigBuilder:
        self.settings.read_timeout = seconds
        return self

    def write_timeout(self, seconds: float) -> TransportConfigBuilder:
        self.settings.write_timeout = seconds
        return self

    def timeout(self, seconds: float) -> TransportConfigBuilder:
        return self.connect_timeout(seconds).read_timeout(seconds).write_timeout(seconds)

    def protocol_version(self, version: str) -> TransportConfigBuilder:
        self.settings.protocol_version = version
        return self

    def add_interceptor(self, hook: RequestHook) -> TransportConfigBuilder:
        """Register a request hook; it runs before the SDK headers and logging hooks."""
        self._interceptors.append(hook)
        return self

    def add_response_hook(self, hook: ResponseHook) -> TransportConfigBuilder:
        self._response_hooks.append(hook)
        return self

    def transport(self, transport: httpx.BaseTransport) -> TransportConfigBuilder:
        self._transport = transport
        return self

    def http_client_customizer(self, customizer: ClientCustomizer) -> TransportConfigBuilder:
        """Register a callback that may edit the ``httpx.Client`` keyword arguments before construction."""
        self._customizers.append(customizer)
        return self

    def client_options(self) -> dict[str, Any]:
        settings = self.settings
        if settings.protocol_version not in SUPPORTED_PROTOCOLS:
            raise ValueError(
                f"Unsupported protocol_version {settings.protocol_version!r}; expected one of {SUPPORTED_PROTOCOLS}"
            )
        logging_hook = HttpLoggingHook(log_headers=settings.log_headers)
        options: dict[str, Any] = {
            "timeout": httpx.Timeout(
                connect=settings.connect_timeout,
                read=settings.read_timeout,
                write=settings.write_timeout,
                pool=settings.connect_timeout,
            ),
            "http1": True,
            "http2": settings.protocol_version == HTTP_2,
            "verify": settings.verify_ssl,
            "follow_redirects": True,
            "event_hooks": {
                "request": [*self._interceptors, VersionHeadersHook(settings.user_agent), logging_hook.on_request],
                "response": [logging_hook.on_response, *self._response_hooks],
            },
        }
        if self._transport is not None:
            options["transport"] = self._transport
        for customizer in self._customizers:
            customizer(options)
        return options

    def build(self) -> TransportConfig:
        http_client = httpx.Client(**self.client_options())
        try:
            return TransportConfig(base_url=self.settings.base_url, http_client=http_client)
        except ValueError:
            http_client.close()
            raise


def create_default_transport(settings: ClientSettings | None = None) -> TransportConfig:
    """Factory for the default httpx-backed transport."""
    return TransportConfigBuilder(settings).build()


__all__ = ["ClientCustomizer", "TransportConfig", "TransportConfigBuilder", "create_default_transport"]
