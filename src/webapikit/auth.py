# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Authentication descriptors applied to resolved requests."""

from __future__ import annotations

import base64
from dataclasses import dataclass, replace
from typing import Protocol

from .http.headers import HeaderKey, RequestHeaderKey, merge_headers
from .http.models import HttpRequest


class Authentication(Protocol):
    """Credential descriptor able to sign a transport request."""

    def authenticate(self, request: HttpRequest) -> HttpRequest: ...


@dataclass(frozen=True)
class HeaderAuthentication:
    """Sets a single header, e.g. an API key."""

    name: HeaderKey | str
    value: str

    def authenticate(self, request: HttpRequest) -> HttpRequest:
        return replace(request, headers=merge_headers(request.headers, self.name, self.value))


@dataclass(frozen=True)
class BearerAuthentication:
    token: str

    def authenticate(self, request: HttpRequest) -> HttpRequest:
        return replace(
            request,
            headers=merge_headers(request.headers, RequestHeaderKey.AUTHORIZATION, f"Bearer {self.token}"),
        )


@dataclass(frozen=True)
class BasicAuthentication:
    username: str
    password: str

    def authenticate(self, request: HttpRequest) -> HttpRequest:
        credentials = base64.b64encode(f"{self.username}:{self.password}".encode()).decode("ascii")
        return replace(
            request,
            headers=merge_headers(request.headers, RequestHeaderKey.AUTHORIZATION, f"Basic {credentials}"),
        )


__all__ = [
    "Authentication",
    "BasicAuthentication",
    "BearerAuthentication",
    "HeaderAuthentication",
]
