# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""URL composition helpers for request building."""

from __future__ import annotations

from collections.abc import Iterable
from urllib.parse import quote, urlsplit, urlunsplit

from ..errors import InvalidURLError
from .models import QueryItem

# RFC 3986 query characters minus the ones that delimit pairs.
_QUERY_SAFE = "-._~!$'()*,;:@/?"
# RFC 3986 path characters; "%" is kept so pre-escaped paths are not escaped twice.
_PATH_SAFE = "/-._~!$&'()*+,;=:@%"


def _split_url(url: str):
    try:
        parts = urlsplit(str(url or ""))
        # Accessing .port validates it; urlsplit is otherwise lazy about it.
        _ = parts.port
    except ValueError as exc:
        raise InvalidURLError(f"Invalid URL {url!r}: {exc}", url=url) from exc
    if not parts.scheme or not parts.netloc:
        raise InvalidURLError(f"Invalid URL {url!r}: missing scheme or host", url=url)
    return parts


def append_path_component(base_url: str, path: str) -> str:
    """
    Append `path` to the path of `base_url` with exactly one separating slash.

    Characters that would delimit a query or fragment ("?", "#") are percent-escaped.

    Example:
      http://api.test.com + /users -> http://api.test.com/users
      http://api.test.com/v1/ + users -> http://api.test.com/v1/users
    """
    parts = _split_url(base_url)
    if not path:
        return urlunsplit(parts)
    component = quote(str(path).lstrip("/"), safe=_PATH_SAFE)
    joined = parts.path.rstrip("/") + "/" + component
    return urlunsplit(parts._replace(path=joined))


def encode_query_items(query_items: Iterable[QueryItem]) -> str:
    """Serialize query items in order; items without a value render as a bare name."""
    pairs: list[str] = []
    for item in query_items:
        name = quote(str(item.name), safe=_QUERY_SAFE)
        if item.value is None:
            pairs.append(name)
        else:
            pairs.append(f"{name}={quote(str(item.value), safe=_QUERY_SAFE)}")
    return "&".join(pairs)


def with_query_items(url: str, query_items: Iterable[QueryItem]) -> str:
    """Replace the query of `url` with `query_items`, preserving their order."""
    parts = _split_url(url)
    return urlunsplit(parts._replace(query=encode_query_items(query_items)))


def append_query(url: str, query: str) -> str:
    """Append an already-encoded query string to any query present on `url`."""
    if not query:
        return url
    parts = _split_url(url)
    combined = f"{parts.query}&{query}" if parts.query else query
    return urlunsplit(parts._replace(query=combined))


def build_url(base_url: str, path: str, query_items: Iterable[QueryItem] = ()) -> str:
    """Compose base URL, path and ordered query items into the final request URL."""
    url = append_path_component(base_url, path)
    items = list(query_items)
    if not items:
        return url
    return with_query_items(url, items)


__all__ = [
    "append_path_component",
    "append_query",
    "build_url",
    "encode_query_items",
    "with_query_items",
]
