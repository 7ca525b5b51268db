# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Per-call authentication: HTTP Basic with the credential as username and an empty password."""

from __future__ import annotations

import base64
from collections.abc import Mapping

AUTHORIZATION_HEADER = "Authorization"


def basic_auth_header(credential: str) -> str:
    token = base64.b64encode(f"{credential}:".encode()).decode("ascii")
    return f"Basic {token}"


def attach_auth(headers: Mapping[str, str] | None, credential: str | None) -> dict[str, str]:
    """Return a copy of `headers`, with Authorization set when a credential is given."""
    out = dict(headers or {})
    if credential is not None:
        out[AUTHORIZATION_HEADER] = basic_auth_header(credential)
    return out


__all__ = ["AUTHORIZATION_HEADER", "attach_auth", "basic_auth_header"]
