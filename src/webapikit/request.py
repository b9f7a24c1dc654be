# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Declarative request builder.

A WebAPIRequest is an immutable builder: every `set_*`/`add_*` call returns a new request with
one field changed, so a partially configured request can be reused as a template. `build()`
resolves the configuration into an HttpRequest and raises on failure; `send()` builds and
dispatches but never raises for build failures, returning an inert CancelBlock instead.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, TypeVar, Union

from .auth import Authentication
from .context import get_default_sender
from .errors import EncodingError, TransformError, WebAPIError
from .http.encoding import ParameterEncoding, default_encoding
from .http.headers import HeaderKey, merge_headers
from .http.models import HTTPMethod, HttpRequest, QueryItem
from .http.sender import Cancelable, CancelBlock, Sender
from .http.url import build_url
from .provider import Provider

logger = logging.getLogger(__name__)

R = TypeVar("R", bound="WebAPIRequest")
QueryItemLike = Union[QueryItem, tuple[str, Union[str, None]]]

_T = TypeVar("_T")


def first_non_none(*candidates: _T | None) -> _T | None:
    """Return the first candidate that is not None."""
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return None


def _coerce_query_item(item: QueryItemLike) -> QueryItem:
    if isinstance(item, QueryItem):
        return item
    name, value = item
    return QueryItem(str(name), None if value is None else str(value))


def _method_name(method: HTTPMethod | str) -> str:
    if isinstance(method, Enum):
        return str(method.value)
    return str(method).upper()


@dataclass(frozen=True)
class WebAPIRequest:
    """One pending call against a Provider."""

    provider: Provider
    path: str
    method: HTTPMethod | str = HTTPMethod.GET

    require_authentication: bool | None = None
    authentication: Authentication | None = None
    sender: Sender | None = None

    query_items: tuple[QueryItem, ...] = ()
    headers: Mapping[str, str] = field(default_factory=dict)

    # Ignored when http_body is set.
    parameters: Mapping[str, Any] = field(default_factory=dict)
    parameter_encoding: ParameterEncoding | None = None
    http_body: bytes | None = None

    def __post_init__(self) -> None:
        # Read-only copies, so derived requests never share a mutable mapping with their template.
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))
        object.__setattr__(self, "parameters", MappingProxyType(dict(self.parameters)))

    # sender

    def set_sender(self: R, sender: Sender) -> R:
        return replace(self, sender=sender)

    # authentication

    def set_require_authentication(self: R, require_authentication: bool) -> R:
        return replace(self, require_authentication=require_authentication)

    def set_authentication(self: R, authentication: Authentication) -> R:
        return replace(self, authentication=authentication)

    # query items

    def set_query_items(self: R, query_items: Iterable[QueryItemLike]) -> R:
        return replace(self, query_items=tuple(_coerce_query_item(item) for item in query_items))

    def add_query_item(self: R, name: str, value: str | None) -> R:
        return replace(self, query_items=(*self.query_items, QueryItem(name, value)))

    # headers

    def set_headers(self: R, headers: Mapping[HeaderKey | str, str]) -> R:
        """Replace all headers; keys may be RequestHeaderKey members or plain strings."""
        resolved: dict[str, str] = {}
        for key, value in headers.items():
            resolved = merge_headers(resolved, key, value)
        return replace(self, headers=resolved)

    def add_header(self: R, key: HeaderKey | str, value: str) -> R:
        return replace(self, headers=merge_headers(self.headers, key, value))

    # parameters & body

    def set_parameters(self: R, parameters: Mapping[str, Any]) -> R:
        return replace(self, parameters=dict(parameters))

    def add_parameter(self: R, key: str, value: Any) -> R:
        return replace(self, parameters={**self.parameters, key: value})

    def set_parameter_encoding(self: R, parameter_encoding: ParameterEncoding) -> R:
        return replace(self, parameter_encoding=parameter_encoding)

    def set_http_body(self: R, http_body: bytes | bytearray | str) -> R:
        if isinstance(http_body, str):
            http_body = http_body.encode("utf-8")
        return replace(self, http_body=bytes(http_body))

    # resolution

    def resolve_parameter_encoding(self) -> ParameterEncoding:
        encoding = first_non_none(self.parameter_encoding, self.provider.parameter_encoding)
        return encoding if encoding is not None else default_encoding()

    def resolve_require_authentication(self) -> bool:
        return bool(first_non_none(self.require_authentication, self.provider.require_authentication))

    def resolve_authentication(self) -> Authentication | None:
        return first_non_none(self.authentication, self.provider.authentication)

    def resolve_sender(self, sender: Sender | None = None) -> Sender:
        resolved = first_non_none(sender, self.sender, self.provider.sender)
        return resolved if resolved is not None else get_default_sender()

    def make_url(self) -> str:
        """Provider base URL + path, plus the query items in their stored order."""
        return build_url(self.provider.base_url, self.path, self.query_items)

    def make_http_request(self, url: str) -> HttpRequest:
        request = HttpRequest(url=url, method=_method_name(self.method))
        if self.headers:
            request.headers = dict(self.headers)

        if self.http_body is not None:
            request.body = self.http_body
        elif self.parameters:
            encoding = self.resolve_parameter_encoding()
            try:
                return encoding.encode(request, self.parameters)
            except WebAPIError:
                raise
            except Exception as exc:
                raise EncodingError(f"Failed to encode parameters: {exc}") from exc

        return request

    def process_request(self, request: HttpRequest) -> HttpRequest:
        """Hook for subclasses to transform the built request; identity by default."""
        return request

    def build(self) -> HttpRequest:
        """Resolve URL, headers and body into the final request; raises WebAPIError."""
        url = self.make_url()
        request = self.make_http_request(url)
        try:
            return self.process_request(request)
        except WebAPIError:
            raise
        except Exception as exc:
            raise TransformError(f"Failed to process request: {exc}") from exc

    def dispatch(self, sender: Sender | None = None) -> Cancelable:
        """Build and send, letting WebAPIError propagate to the caller."""
        request = self.build()
        resolved = self.resolve_sender(sender)
        logger.debug("Dispatching %s %s", request.method, request.url)
        return resolved.send(request)

    def send(self, sender: Sender | None = None) -> Cancelable:
        """Build and send; build failures are logged and yield an inert CancelBlock."""
        try:
            request = self.build()
        except WebAPIError as exc:
            logger.warning("Request %s %s not sent: %s", _method_name(self.method), self.path, exc)
            return CancelBlock()
        except Exception:  # noqa: BLE001
            logger.exception("Request %s %s not sent", _method_name(self.method), self.path)
            return CancelBlock()

        resolved = self.resolve_sender(sender)
        logger.debug("Dispatching %s %s", request.method, request.url)
        return resolved.send(request)


class AuthenticatedRequest(WebAPIRequest):
    """WebAPIRequest that signs the built request when authentication is required."""

    def process_request(self, request: HttpRequest) -> HttpRequest:
        if not self.resolve_require_authentication():
            return request
        authentication = self.resolve_authentication()
        if authentication is None:
            raise TransformError("Authentication required but no authentication configured")
        return authentication.authenticate(request)


__all__ = [
    "AuthenticatedRequest",
    "QueryItemLike",
    "WebAPIRequest",
    "first_non_none",
]
