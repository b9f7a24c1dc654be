# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl as ssl_module
from enum import Enum

import httpx


class WebAPIError(Exception):
    """Base class for failures while building a request."""


class InvalidURLError(WebAPIError):
    """Base URL, path and query items cannot be composed into a URL."""

    def __init__(self, message: str, url: str | None = None):
        super().__init__(message)
        self.url = url


class EncodingError(WebAPIError):
    """Parameters cannot be encoded under the selected strategy."""


class TransformError(WebAPIError):
    """The post-processing hook rejected or failed to transform a request."""


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    INVALID_URL = "INVALID_URL"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    NONE = "NONE"


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, (httpx.InvalidURL, httpx.UnsupportedProtocol, InvalidURLError)):
        return ErrorCategory.INVALID_URL

    # ssl/socket failures usually arrive wrapped by httpx; check the cause first.
    cause = exc.__cause__ or exc.__context__
    for candidate in (cause, exc):
        if isinstance(candidate, (ssl_module.SSLError, ssl_module.CertificateError)):
            return ErrorCategory.SSL_ERROR
        if isinstance(candidate, (socket.gaierror, socket.herror)):
            return ErrorCategory.DNS_ERROR

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


__all__ = [
    "EncodingError",
    "ErrorCategory",
    "InvalidURLError",
    "TransformError",
    "WebAPIError",
    "categorize_exception",
]
