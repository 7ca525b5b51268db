# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Caller-owned handle for streamed downloads."""

from __future__ import annotations

from collections.abc import Iterator

import httpx

from ..errors import TransportError
from .headers import header_value, normalize_headers


class DownloadResponse:
    """
    Open, read-once response returned by ``RequestExecutor.download``.

    The handle holds a live connection until closed. Use it as a context manager or
    call ``close()``; closing more than once is harmless.
    """

    def __init__(self, response: httpx.Response):
        self._response = response
        self.status_code = response.status_code
        self.headers = normalize_headers(response.headers)

    @property
    def content_type(self) -> str | None:
        return header_value(self.headers, "content-type") or None

    @property
    def content_length(self) -> int | None:
        raw = header_value(self.headers, "content-length")
        try:
            return int(raw) if raw else None
        except ValueError:
            return None

    @property
    def closed(self) -> bool:
        return self._response.is_closed

    def iter_bytes(self, chunk_size: int | None = None) -> Iterator[bytes]:
        try:
            yield from self._response.iter_bytes(chunk_size)
        except httpx.RequestError as exc:
            self.close()
            raise TransportError.from_exception(exc) from exc

    def read(self) -> bytes:
        """Read the remaining body; the connection is released once the stream is exhausted."""
        try:
            return self._response.read()
        except httpx.RequestError as exc:
            self.close()
            raise TransportError.from_exception(exc) from exc

    def close(self) -> None:
        self._response.close()

    def __enter__(self) -> DownloadResponse:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()

    def __repr__(self) -> str:
        return f"<DownloadResponse [{self.status_code}] {self.content_type or '-'}>"


__all__ = ["DownloadResponse"]
