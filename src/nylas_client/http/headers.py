# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header normalization utilities.

HTTP header field names are case-insensitive (RFC 9110). Headers leave this package as
plain dicts, so they are lower-cased on the way out and read case-insensitively.
"""

from __future__ import annotations

from collections.abc import Mapping

REDACTED = "[redacted]"
SENSITIVE_HEADERS = frozenset({"authorization", "proxy-authorization", "cookie", "set-cookie"})


def normalize_headers(headers: Mapping[str, str] | None) -> dict[str, str]:
    """Return a lowercase-keyed copy of a header mapping."""
    if not headers:
        return {}
    out: dict[str, str] = {}
    for key, value in headers.items():
        if key is None:
            continue
        name = str(key).strip().lower()
        if not name:
            continue
        out[name] = "" if value is None else str(value)
    return out


def header_value(headers: Mapping[str, str] | None, name: str, default: str = "") -> str:
    """Return a header value using case-insensitive key matching."""
    if not headers or not name:
        return default
    lower = name.lower()
    for key, value in headers.items():
        if key is not None and str(key).lower() == lower:
            return default if value is None else str(value).strip()
    return default


def redact_headers(headers: Mapping[str, str] | None) -> dict[str, str]:
    """Lower-cased copy with credential-bearing headers masked, for logging."""
    return {
        name: REDACTED if name in SENSITIVE_HEADERS else value
        for name, value in normalize_headers(headers).items()
    }


__all__ = ["header_value", "normalize_headers", "redact_headers"]
