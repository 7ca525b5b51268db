# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

from collections.abc import Callable

import httpx
import pytest

from nylas_client.config import ClientSettings
from nylas_client.http.client import TransportConfig
from nylas_client.http.executor import RequestExecutor

BASE_URL = "https://api.example.test"


class CountingStream(httpx.SyncByteStream):
    """Response body that records how often it was iterated and closed."""

    def __init__(self, chunks):
        self._chunks = list(chunks)
        self.iterations = 0
        self.close_calls = 0

    def __iter__(self):
        self.iterations += 1
        yield from self._chunks

    def close(self) -> None:
        self.close_calls += 1


class FakeServer:
    """Canned responses served through httpx.MockTransport, with request/stream bookkeeping."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.streams: list[CountingStream] = []
        self.status = 200
        self.body: bytes | list[bytes] = b""
        self.headers: dict[str, str] = {}
        self.handler: Callable[[httpx.Request], httpx.Response] | None = None

    def respond(self, status: int = 200, body: bytes | list[bytes] = b"", headers: dict[str, str] | None = None) -> None:
        self.status = status
        self.body = body
        self.headers = dict(headers or {})

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.handler is not None:
            return self.handler(request)
        chunks = self.body if isinstance(self.body, list) else [self.body]
        stream = CountingStream(chunks)
        self.streams.append(stream)
        return httpx.Response(self.status, headers=self.headers, stream=stream)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    @property
    def open_streams(self) -> list[CountingStream]:
        return [stream for stream in self.streams if stream.close_calls == 0]


@pytest.fixture
def server() -> FakeServer:
    return FakeServer()


@pytest.fixture
def transport_config(server):
    config = TransportConfig.builder(ClientSettings(base_url=BASE_URL)).transport(httpx.MockTransport(server)).build()
    yield config
    config.close()


@pytest.fixture
def executor(transport_config) -> RequestExecutor:
    return RequestExecutor(transport_config)
