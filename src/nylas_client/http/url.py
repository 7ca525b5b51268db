# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""URL helpers shared by the transport and resource accessors."""

from __future__ import annotations

from dataclasses import dataclass, replace
from urllib.parse import parse_qsl, quote, unquote, urlencode, urljoin, urlparse


def is_absolute_url(url: str) -> bool:
    parsed = urlparse(str(url or ""))
    return bool(parsed.scheme and parsed.netloc)


def build_base_dir_url(base_url: str) -> str:
    """
    Convert a base URL into a "directory" URL suitable for relative `urljoin()` calls.

    Example:
      https://host/v3 -> https://host/v3/
    """
    parsed = urlparse(str(base_url or ""))
    path = parsed.path.rstrip("/") + "/"
    return parsed._replace(path=path, params="", query="", fragment="").geturl()


def resolve_against_base(base_url: str, target: str) -> str:
    """Join a relative target under the base URL's path; absolute targets pass through."""
    if is_absolute_url(target):
        return target
    return urljoin(build_base_dir_url(base_url), str(target).lstrip("/"))


@dataclass(frozen=True)
class UrlBuilder:
    """
    Immutable URL builder seeded from the service base URL.

    Every mutator returns a new builder so a seeded builder can be shared freely.
    """

    scheme: str
    netloc: str
    path_segments: tuple[str, ...] = ()
    query: tuple[tuple[str, str], ...] = ()

    @classmethod
    def from_url(cls, url: str) -> UrlBuilder:
        if not is_absolute_url(url):
            raise ValueError(f"Expected an absolute URL, got {url!r}")
        parsed = urlparse(url)
        segments = tuple(unquote(segment) for segment in parsed.path.split("/") if segment)
        query = tuple(parse_qsl(parsed.query, keep_blank_values=True))
        return cls(scheme=parsed.scheme, netloc=parsed.netloc, path_segments=segments, query=query)

    def add_path_segment(self, segment: str) -> UrlBuilder:
        """Append one path segment; it is percent-encoded, so '/' stays literal."""
        return replace(self, path_segments=(*self.path_segments, str(segment)))

    def add_path_segments(self, path: str) -> UrlBuilder:
        """Append a slash-separated path such as 'a/b/c'."""
        segments = tuple(segment for segment in str(path).split("/") if segment)
        return replace(self, path_segments=(*self.path_segments, *segments))

    def add_query_parameter(self, name: str, value: object) -> UrlBuilder:
        if value is None:
            return self
        if isinstance(value, bool):
            value = "true" if value else "false"
        return replace(self, query=(*self.query, (str(name), str(value))))

    def set_query_parameter(self, name: str, value: object) -> UrlBuilder:
        stripped = replace(self, query=tuple(pair for pair in self.query if pair[0] != name))
        return stripped.add_query_parameter(name, value)

    def build(self) -> str:
        path = "/" + "/".join(quote(segment, safe="") for segment in self.path_segments)
        url = f"{self.scheme}://{self.netloc}{path}"
        if self.query:
            url = f"{url}?{urlencode(self.query)}"
        return url

    def __str__(self) -> str:
        return self.build()


__all__ = ["UrlBuilder", "build_base_dir_url", "is_absolute_url", "resolve_against_base"]
