# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Typed header keys and header lookup utilities.

HTTP header field names are case-insensitive (RFC 9110). Request headers are kept as plain
dicts so they can be handed to any Sender as-is; lookups go through `header_value` so
responses from differing client stacks are read consistently.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, Union


class RequestHeaderKey(str, Enum):
    """Standard request header field names."""

    ACCEPT = "Accept"
    ACCEPT_CHARSET = "Accept-Charset"
    ACCEPT_ENCODING = "Accept-Encoding"
    ACCEPT_LANGUAGE = "Accept-Language"
    ACCEPT_DATETIME = "Accept-Datetime"
    ALLOW = "Allow"
    AUTHORIZATION = "Authorization"
    CACHE_CONTROL = "Cache-Control"
    CONNECTION = "Connection"
    COOKIE = "Cookie"
    CONTENT_LENGTH = "Content-Length"
    CONTENT_MD5 = "Content-MD5"
    CONTENT_TYPE = "Content-Type"
    DATE = "Date"
    EXPECT = "Expect"
    FORWARDED = "Forwarded"
    FROM = "From"
    HOST = "Host"
    IF_MATCH = "If-Match"
    IF_MODIFIED_SINCE = "If-Modified-Since"
    IF_NONE_MATCH = "If-None-Match"
    IF_RANGE = "If-Range"
    IF_UNMODIFIED_SINCE = "If-Unmodified-Since"
    MAX_FORWARDS = "Max-Forwards"
    ORIGIN = "Origin"
    PRAGMA = "Pragma"
    PROXY_AUTHORIZATION = "Proxy-Authorization"
    RANGE = "Range"
    REFERER = "Referer"
    TE = "TE"
    USER_AGENT = "User-Agent"
    UPGRADE = "Upgrade"
    VIA = "Via"
    WARNING = "Warning"

    def __str__(self) -> str:
        return self.value


class ResponseHeaderKey(str, Enum):
    """Standard response header field names."""

    ACCESS_CONTROL_ALLOW_ORIGIN = "Access-Control-Allow-Origin"
    ACCEPT_PATCH = "Accept-Patch"
    ACCEPT_RANGES = "Accept-Ranges"
    AGE = "Age"
    ALLOW = "Allow"
    ALT_SVC = "Alt-Svc"
    CACHE_CONTROL = "Cache-Control"
    CONNECTION = "Connection"
    CONTENT_DISPOSITION = "Content-Disposition"
    CONTENT_ENCODING = "Content-Encoding"
    CONTENT_LANGUAGE = "Content-Language"
    CONTENT_LENGTH = "Content-Length"
    CONTENT_LOCATION = "Content-Location"
    CONTENT_MD5 = "Content-MD5"
    CONTENT_RANGE = "Content-Range"
    CONTENT_TYPE = "Content-Type"
    DATE = "Date"
    E_TAG = "ETag"
    EXPIRES = "Expires"
    LAST_MODIFIED = "Last-Modified"
    LINK = "Link"
    LOCATION = "Location"
    P3P = "P3P"
    PRAGMA = "Pragma"
    PROXY_AUTHENTICATE = "Proxy-Authenticate"
    PUBLIC_KEY_PINS = "Public-Key-Pins"
    RETRY_AFTER = "Retry-After"
    SERVER = "Server"
    SET_COOKIE = "Set-Cookie"
    STRICT_TRANSPORT_SECURITY = "Strict-Transport-Security"
    TRAILER = "Trailer"
    TRANSFER_ENCODING = "Transfer-Encoding"
    TK = "Tk"
    UPGRADE = "Upgrade"
    VARY = "Vary"
    VIA = "Via"
    WARNING = "Warning"
    WWW_AUTHENTICATE = "WWW-Authenticate"
    X_FRAME_OPTIONS = "X-Frame-Options"

    def __str__(self) -> str:
        return self.value


HeaderKey = Union[RequestHeaderKey, ResponseHeaderKey]


def header_name(key: HeaderKey | str) -> str:
    """Return the canonical string form of a typed or plain header key."""
    if isinstance(key, Enum):
        return str(key.value)
    return str(key)


def _coerce_headers_mapping(headers: Any) -> Mapping[object, object] | None:
    """
    Best-effort coercion of "dict-like" header containers into a Mapping.

    Accepts plain dicts, httpx.Headers, objects exposing `.items()` and iterables of pairs.
    """
    if not headers:
        return None
    if isinstance(headers, Mapping):
        return headers

    items = getattr(headers, "items", None)
    if callable(items):
        try:
            return dict(items())
        except (TypeError, ValueError):
            pass

    try:
        return dict(headers)
    except (TypeError, ValueError):
        return None


def normalize_headers(headers: Any) -> dict[str, str]:
    """Return a lowercase-keyed copy of a header mapping."""
    coerced = _coerce_headers_mapping(headers)
    if not coerced:
        return {}
    out: dict[str, str] = {}
    for key, value in coerced.items():
        if key is None:
            continue
        name = header_name(key).strip().lower()  # type: ignore[arg-type]
        if not name:
            continue
        out[name] = "" if value is None else str(value)
    return out


def header_value(headers: Any, key: HeaderKey | str, default: str | None = None) -> str | None:
    """
    Return a header value using case-insensitive key matching.

    Missing headers yield `default` rather than raising.
    """
    name = header_name(key) if key else ""
    if not headers or not name:
        return default

    coerced = _coerce_headers_mapping(headers)
    if not coerced:
        return default

    lower = name.lower()
    for candidate in (name, lower, lower.title()):
        try:
            if candidate in coerced:
                value = coerced.get(candidate)
                return default if value is None else str(value).strip()
        except TypeError:
            # Some Mapping implementations reject non-string keys; fall back to scan.
            break

    for existing, value in coerced.items():
        if existing is None:
            continue
        if header_name(existing).lower() == lower:  # type: ignore[arg-type]
            return default if value is None else str(value).strip()

    return default


def merge_headers(base: Mapping[str, str] | None, key: HeaderKey | str, value: str) -> dict[str, str]:
    """Return a copy of `base` with `key` set, replacing any entry that differs only in case."""
    name = header_name(key)
    lower = name.lower()
    merged = {k: v for k, v in (base or {}).items() if k.lower() != lower}
    merged[name] = value
    return merged


__all__ = [
    "HeaderKey",
    "RequestHeaderKey",
    "ResponseHeaderKey",
    "header_name",
    "header_value",
    "merge_headers",
    "normalize_headers",
]
