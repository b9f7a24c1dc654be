# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
WebAPIKit package entrypoint.

Requests are described declaratively against a Provider (base URL plus defaults) and resolved
into transport requests that an injectable Sender dispatches. Network I/O only ever happens
inside a Sender; the default one is backed by httpx.
"""

from .config import HttpSettings, load_http_settings
from .http import (
    CancelBlock,
    Cancelable,
    HTTPMethod,
    HttpRequest,
    HttpResponse,
    HttpxSender,
    JSONEncoding,
    ParameterEncoding,
    QueryItem,
    RequestHeaderKey,
    ResponseHeaderKey,
    Sender,
    SendTask,
    StubSender,
    URLEncoding,
    create_default_sender,
    header_value,
)
from .auth import Authentication, BasicAuthentication, BearerAuthentication, HeaderAuthentication
from .context import ApiContext, api_context, get_default_sender
from .errors import EncodingError, InvalidURLError, TransformError, WebAPIError
from .log import setup_logging
from .provider import Provider
from .request import AuthenticatedRequest, WebAPIRequest
from .version import __version__

__all__ = [
    "ApiContext",
    "AuthenticatedRequest",
    "Authentication",
    "BasicAuthentication",
    "BearerAuthentication",
    "CancelBlock",
    "Cancelable",
    "EncodingError",
    "HTTPMethod",
    "HeaderAuthentication",
    "HttpRequest",
    "HttpResponse",
    "HttpSettings",
    "HttpxSender",
    "InvalidURLError",
    "JSONEncoding",
    "ParameterEncoding",
    "Provider",
    "QueryItem",
    "RequestHeaderKey",
    "ResponseHeaderKey",
    "SendTask",
    "Sender",
    "StubSender",
    "TransformError",
    "URLEncoding",
    "WebAPIError",
    "WebAPIRequest",
    "api_context",
    "create_default_sender",
    "get_default_sender",
    "header_value",
    "load_http_settings",
    "setup_logging",
    "__version__",
]
