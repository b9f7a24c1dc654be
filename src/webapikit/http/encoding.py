# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Parameter encoding strategies.

An encoding turns a parameter mapping into either a query string or a request body (plus the
matching Content-Type). Strategies are stateless and safe to share between providers.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from enum import Enum
from numbers import Number
from typing import Any, Protocol
from urllib.parse import quote

from ..errors import EncodingError
from .headers import RequestHeaderKey, header_value, merge_headers
from .models import HTTPMethod, HttpRequest
from .url import append_query

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded; charset=utf-8"
JSON_CONTENT_TYPE = "application/json"

# RFC 3986 unreserved characters plus "?" and "/" stay literal.
_FORM_SAFE = "-._~/?"
_QUERY_METHODS = {HTTPMethod.GET.value, HTTPMethod.HEAD.value, HTTPMethod.DELETE.value}


class ParameterEncoding(Protocol):
    """Strategy for serializing a parameter mapping into a request."""

    def encode(self, request: HttpRequest, parameters: Mapping[str, Any]) -> HttpRequest: ...


class Destination(str, Enum):
    METHOD_DEPENDENT = "method_dependent"
    QUERY_STRING = "query_string"
    HTTP_BODY = "http_body"


def _escape(value: str) -> str:
    return quote(value, safe=_FORM_SAFE)


def _scalar(key: str, value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (str, Number)):
        return str(value)
    raise EncodingError(f"Parameter {key!r} has unencodable value of type {type(value).__name__}")


def query_components(key: str, value: Any) -> list[tuple[str, str]]:
    """
    Flatten one parameter into escaped `(key, value)` pairs.

    Nested mappings become `key[sub]`, sequences become `key[]`.
    """
    components: list[tuple[str, str]] = []
    if isinstance(value, Mapping):
        for nested_key in sorted(value, key=str):
            components.extend(query_components(f"{key}[{nested_key}]", value[nested_key]))
    elif isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        for item in value:
            components.extend(query_components(f"{key}[]", item))
    else:
        components.append((_escape(key), _escape(_scalar(key, value))))
    return components


def form_query(parameters: Mapping[str, Any]) -> str:
    """Encode parameters as a sorted `a=1&b=2` string."""
    components: list[tuple[str, str]] = []
    for key in sorted(parameters, key=str):
        components.extend(query_components(str(key), parameters[key]))
    return "&".join(f"{k}={v}" for k, v in components)


@dataclass(frozen=True)
class URLEncoding:
    """Form/query-string style encoding."""

    destination: Destination = Destination.METHOD_DEPENDENT

    def _encodes_in_url(self, method: str) -> bool:
        if self.destination is Destination.QUERY_STRING:
            return True
        if self.destination is Destination.HTTP_BODY:
            return False
        return str(method).upper() in _QUERY_METHODS

    def encode(self, request: HttpRequest, parameters: Mapping[str, Any]) -> HttpRequest:
        if not parameters:
            return request

        query = form_query(parameters)
        if self._encodes_in_url(request.method):
            return replace(request, url=append_query(request.url, query))

        headers = dict(request.headers or {})
        if header_value(headers, RequestHeaderKey.CONTENT_TYPE) is None:
            headers = merge_headers(headers, RequestHeaderKey.CONTENT_TYPE, FORM_CONTENT_TYPE)
        return replace(request, headers=headers, body=query.encode("utf-8"))


URL_ENCODING = URLEncoding()
QUERY_STRING_ENCODING = URLEncoding(Destination.QUERY_STRING)
HTTP_BODY_ENCODING = URLEncoding(Destination.HTTP_BODY)


@dataclass(frozen=True)
class JSONEncoding:
    """Encodes parameters as a JSON request body."""

    sort_keys: bool = False

    def encode(self, request: HttpRequest, parameters: Mapping[str, Any]) -> HttpRequest:
        if not parameters:
            return request
        try:
            body = json.dumps(dict(parameters), sort_keys=self.sort_keys, allow_nan=False).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise EncodingError(f"Parameters are not JSON serializable: {exc}") from exc

        headers = dict(request.headers or {})
        if header_value(headers, RequestHeaderKey.CONTENT_TYPE) is None:
            headers = merge_headers(headers, RequestHeaderKey.CONTENT_TYPE, JSON_CONTENT_TYPE)
        return replace(request, headers=headers, body=body)


JSON_ENCODING = JSONEncoding()


def default_encoding() -> ParameterEncoding:
    return URL_ENCODING


__all__ = [
    "Destination",
    "FORM_CONTENT_TYPE",
    "HTTP_BODY_ENCODING",
    "JSONEncoding",
    "JSON_CONTENT_TYPE",
    "JSON_ENCODING",
    "ParameterEncoding",
    "QUERY_STRING_ENCODING",
    "URLEncoding",
    "URL_ENCODING",
    "default_encoding",
    "form_query",
    "query_components",
]
