# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP transport exports."""

from .adapters import StubSender
from .encoding import (
    HTTP_BODY_ENCODING,
    JSON_ENCODING,
    QUERY_STRING_ENCODING,
    URL_ENCODING,
    Destination,
    JSONEncoding,
    ParameterEncoding,
    URLEncoding,
)
from .headers import (
    HeaderKey,
    RequestHeaderKey,
    ResponseHeaderKey,
    header_value,
    normalize_headers,
)
from .httpx_sender import HttpxSender
from .models import Headers, HTTPMethod, HttpRequest, HttpResponse, QueryItem
from .sender import Cancelable, CancelBlock, Sender, SendTask, create_default_sender
from .url import build_url

__all__ = [
    "HTTP_BODY_ENCODING",
    "JSON_ENCODING",
    "QUERY_STRING_ENCODING",
    "URL_ENCODING",
    "CancelBlock",
    "Cancelable",
    "Destination",
    "HTTPMethod",
    "HeaderKey",
    "Headers",
    "HttpRequest",
    "HttpResponse",
    "HttpxSender",
    "JSONEncoding",
    "ParameterEncoding",
    "QueryItem",
    "RequestHeaderKey",
    "ResponseHeaderKey",
    "SendTask",
    "Sender",
    "StubSender",
    "URLEncoding",
    "build_url",
    "create_default_sender",
    "header_value",
    "normalize_headers",
]
