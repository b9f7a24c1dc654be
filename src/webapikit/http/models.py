# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models handed between builders and senders."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .headers import HeaderKey, header_value

Headers = dict[str, str]


class HTTPMethod(str, Enum):
    OPTIONS = "OPTIONS"
    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    TRACE = "TRACE"
    CONNECT = "CONNECT"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class QueryItem:
    """A single `name=value` pair of a URL query; `value=None` renders as a bare name."""

    name: str
    value: str | None = None


@dataclass
class HttpRequest:
    """Fully resolved request representation consumed by Sender implementations."""

    url: str
    method: str = "GET"
    headers: Headers | None = None
    body: bytes | None = None
    timeout: float | None = None
    allow_redirects: bool = True


@dataclass
class HttpResponse:
    """Normalized HTTP response produced by senders."""

    ok: bool
    status_code: int | None = None
    headers: Headers = field(default_factory=dict)
    text: str = ""
    content: bytes = b""
    url: str | None = None
    error_message: str | None = None
    error_type: str | None = None
    meta: dict[str, Any] = field(default_factory=dict)

    def header(self, key: HeaderKey | str) -> str | None:
        """Return a response header by typed or plain key, or None when absent."""
        return header_value(self.headers, key)

