# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level facade wiring one shared transport into the request executor."""

from __future__ import annotations

from contextlib import suppress
from typing import TypeVar

from .config import ClientSettings
from .http.client import TransportConfig, create_default_transport
from .http.executor import Params, RequestExecutor, Target
from .http.stream import DownloadResponse
from .http.url import UrlBuilder

T = TypeVar("T")


class NylasClient:
    """
    Convenience wrapper owning a TransportConfig and the executor bound to it.

    Resource accessors take a NylasClient and call the verb helpers with their own
    credential, URL and result shape. Instances are safe to share across threads.
    """

    def __init__(self, config: TransportConfig | None = None, *, settings: ClientSettings | None = None):
        self.config = config or create_default_transport(settings)
        self.executor = RequestExecutor(self.config)

    @property
    def base_url(self) -> str:
        return self.config.base_url

    def new_url_builder(self) -> UrlBuilder:
        return self.config.new_url_builder()

    def get(self, credential: str | None, url: Target, result_type: type[T] | None = None) -> T | None:
        return self.executor.get(credential, url, result_type)

    def put(
        self,
        credential: str | None,
        url: Target,
        params: Params | None,
        result_type: type[T] | None = None,
    ) -> T | None:
        return self.executor.put(credential, url, params, result_type)

    def post(
        self,
        credential: str | None,
        url: Target,
        params: Params | None = None,
        result_type: type[T] | None = None,
    ) -> T | None:
        return self.executor.post(credential, url, params, result_type)

    def delete(self, credential: str | None, url: Target, result_type: type[T] | None = None) -> T | None:
        return self.executor.delete(credential, url, result_type)

    def download(self, credential: str | None, url: Target) -> DownloadResponse:
        return self.executor.download(credential, url)

    def close(self) -> None:
        with suppress(Exception):
            self.config.close()

    def __enter__(self) -> NylasClient:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()
