# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Request execution: build, dispatch, classify, decode."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, TypeVar

import httpx

from ..errors import RequestFailedError, TransportError, classify
from .client import TransportConfig
from .codec import NO_RESULT, decode, encode
from .models import HttpMethod, OutgoingRequest, build_request
from .stream import DownloadResponse
from .url import UrlBuilder

T = TypeVar("T")
Target = UrlBuilder | str
Params = Mapping[str, Any]

logger = logging.getLogger(__name__)


class RequestExecutor:
    """
    Runs one request at a time on the calling thread over a shared TransportConfig.

    Every response is closed before ``execute`` returns or raises; only ``download``
    hands an open response over to the caller.
    """

    def __init__(self, config: TransportConfig):
        self.config = config

    def get(self, credential: str | None, url: Target, result_type: type[T] | None = None) -> T | None:
        return self.execute(credential, url, HttpMethod.GET, None, result_type)

    def put(
        self,
        credential: str | None,
        url: Target,
        params: Params | None,
        result_type: type[T] | None = None,
    ) -> T | None:
        return self.execute(credential, url, HttpMethod.PUT, params, result_type)

    def post(
        self,
        credential: str | None,
        url: Target,
        params: Params | None = None,
        result_type: type[T] | None = None,
    ) -> T | None:
        return self.execute(credential, url, HttpMethod.POST, params, result_type)

    def delete(self, credential: str | None, url: Target, result_type: type[T] | None = None) -> T | None:
        return self.execute(credential, url, HttpMethod.DELETE, None, result_type)

    def execute(
        self,
        credential: str | None,
        url: Target,
        method: HttpMethod | str,
        params: Params | None = None,
        result_type: type[T] | None = None,
    ) -> T | None:
        request = self.prepare(credential, url, method, params)
        response = self._dispatch(request)
        try:
            if not response.is_success:
                raise self._failure(request, response)
            if result_type is NO_RESULT:
                return None
            content = self._read(response)
            return decode(content, result_type, encoding=response.charset_encoding or "utf-8")
        finally:
            response.close()

    def download(self, credential: str | None, url: Target) -> DownloadResponse:
        """
        GET ``url`` and return the still-open response on success.

        The caller owns the returned handle and must close it.
        """
        request = self.prepare(credential, url, HttpMethod.GET)
        response = self._dispatch(request)
        if not response.is_success:
            raise self._failure(request, response)
        return DownloadResponse(response)

    def prepare(
        self,
        credential: str | None,
        url: Target,
        method: HttpMethod | str,
        params: Params | None = None,
    ) -> OutgoingRequest:
        """Encode parameters and assemble the request without touching the network."""
        method = HttpMethod.coerce(method)
        body: bytes | None = None
        if params is not None:
            if not method.carries_body:
                raise ValueError(f"{method.value} requests do not accept parameters")
            body = encode(params)
        return build_request(credential, self.config.resolve_url(url), method, body)

    def _dispatch(self, request: OutgoingRequest) -> httpx.Response:
        client = self.config.http_client
        outgoing = client.build_request(
            request.method.value,
            request.url,
            headers=dict(request.headers),
            content=request.body,
        )
        try:
            return client.send(outgoing, stream=True)
        except httpx.RequestError as exc:
            logger.debug("%s %s transport failure: %s", request.method.value, request.url, exc)
            raise TransportError.from_exception(exc) from exc

    @staticmethod
    def _read(response: httpx.Response) -> bytes:
        try:
            return response.read()
        except httpx.RequestError as exc:
            raise TransportError.from_exception(exc) from exc

    @staticmethod
    def _failure(request: OutgoingRequest, response: httpx.Response) -> RequestFailedError:
        failure = classify(response)
        logger.debug("%s %s failed with status %s", request.method.value, request.url, failure.status_code)
        return failure


__all__ = ["RequestExecutor"]
