# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request data models and the request builder."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from .auth import attach_auth

Headers = dict[str, str]

JSON_CONTENT_TYPE = "application/json; charset=utf-8"


class HttpMethod(str, Enum):
    GET = "GET"
    PUT = "PUT"
    POST = "POST"
    DELETE = "DELETE"

    @property
    def carries_body(self) -> bool:
        return self in (HttpMethod.PUT, HttpMethod.POST)

    @classmethod
    def coerce(cls, value: HttpMethod | str) -> HttpMethod:
        if isinstance(value, cls):
            return value
        return cls(str(value).upper())


@dataclass(frozen=True)
class OutgoingRequest:
    """Fully assembled request, handed to the transport exactly once."""

    url: str
    method: HttpMethod = HttpMethod.GET
    headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    body: bytes | None = None


def build_request(
    credential: str | None,
    url: str,
    method: HttpMethod | str,
    body: bytes | None = None,
) -> OutgoingRequest:
    """
    Assemble an OutgoingRequest.

    GET and DELETE never carry a body. PUT and POST always do: a missing body is sent
    as an explicit zero-length one, since some endpoints require the body marker.
    """
    method = HttpMethod.coerce(method)
    headers: Headers = {}
    if method.carries_body:
        if body is None:
            body = b""
        elif body:
            headers["Content-Type"] = JSON_CONTENT_TYPE
    elif body is not None:
        raise ValueError(f"{method.value} requests cannot carry a body")

    headers = attach_auth(headers, credential)
    return OutgoingRequest(url=url, method=method, headers=MappingProxyType(headers), body=body)


__all__ = ["Headers", "HttpMethod", "JSON_CONTENT_TYPE", "OutgoingRequest", "build_request"]
