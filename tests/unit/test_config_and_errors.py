# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import importlib
import logging
import socket
import ssl

import httpx

from webapikit import config, log
from webapikit.config import DEFAULT_USER_AGENT
from webapikit.errors import (
    EncodingError,
    ErrorCategory,
    InvalidURLError,
    TransformError,
    WebAPIError,
    categorize_exception,
)


def test_http_settings_env_overrides(monkeypatch):
    monkeypatch.setenv("WEBAPIKIT_HTTP_TIMEOUT", "5.5")
    monkeypatch.setenv("WEBAPIKIT_USER_AGENT", "CustomAgent/1.0")
    monkeypatch.setenv("WEBAPIKIT_HTTP_REDIRECTS", "false")
    monkeypatch.setenv("WEBAPIKIT_HTTP_VERIFY_SSL", "0")
    monkeypatch.setenv("WEBAPIKIT_HTTP_MAX_BODY_BYTES", "1024")
    monkeypatch.setenv("WEBAPIKIT_SENDER_WORKERS", "8")

    importlib.reload(config)
    settings = config.load_http_settings()

    assert settings.timeout == 5.5
    assert settings.user_agent == "CustomAgent/1.0"
    assert settings.allow_redirects is False
    assert settings.verify_ssl is False
    assert settings.max_body_bytes == 1024
    assert settings.max_workers == 8


def test_http_settings_invalid_env_fall_back(monkeypatch):
    monkeypatch.setenv("WEBAPIKIT_HTTP_TIMEOUT", "not-a-number")
    monkeypatch.setenv("WEBAPIKIT_HTTP_MAX_BODY_BYTES", "-5")
    monkeypatch.setenv("WEBAPIKIT_SENDER_WORKERS", "zero")

    importlib.reload(config)
    settings = config.load_http_settings()

    assert settings.timeout == config.HttpSettings.timeout
    assert settings.max_body_bytes == config.HttpSettings.max_body_bytes
    assert settings.max_workers == config.HttpSettings.max_workers
    assert DEFAULT_USER_AGENT in settings.user_agent


def test_http_settings_redirects_truthy_variants(monkeypatch):
    monkeypatch.setenv("WEBAPIKIT_HTTP_REDIRECTS", "1")
    assert config.load_http_settings().allow_redirects is True

    monkeypatch.setenv("WEBAPIKIT_HTTP_REDIRECTS", "on")
    assert config.load_http_settings().allow_redirects is True

    monkeypatch.setenv("WEBAPIKIT_HTTP_REDIRECTS", "nope")
    assert config.load_http_settings().allow_redirects is False


def test_load_http_settings_reads_env_at_call_time(monkeypatch):
    monkeypatch.setenv("WEBAPIKIT_HTTP_TIMEOUT", "7.7")
    assert config.load_http_settings().timeout == 7.7
    monkeypatch.setenv("WEBAPIKIT_HTTP_TIMEOUT", "8.8")
    assert config.load_http_settings().timeout == 8.8


def test_setup_logging_uses_requested_level(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    library_logger = logging.getLogger(log.LIBRARY_LOGGER)
    previous = library_logger.level
    try:
        log.setup_logging("debug")
        assert library_logger.level == logging.DEBUG
        log.setup_logging("not-a-level")
    finally:
        library_logger.setLevel(previous)

    assert calls[0]["level"] == logging.DEBUG
    assert calls[1]["level"] == logging.WARNING


def test_log_level_falls_back_to_environment(monkeypatch):
    monkeypatch.setenv("WEBAPIKIT_LOG_LEVEL", "info")
    assert log.resolve_log_level() == logging.INFO
    assert log.resolve_log_level("error") == logging.ERROR
    assert log.resolve_log_level(logging.DEBUG) == logging.DEBUG


def test_library_logger_has_null_handler():
    handlers = logging.getLogger(log.LIBRARY_LOGGER).handlers
    assert any(isinstance(handler, logging.NullHandler) for handler in handlers)


def test_error_hierarchy():
    assert issubclass(InvalidURLError, WebAPIError)
    assert issubclass(EncodingError, WebAPIError)
    assert issubclass(TransformError, WebAPIError)
    err = InvalidURLError("bad", url="http://[x")
    assert err.url == "http://[x"
    assert str(err) == "bad"


def test_categorize_exception_maps_transport_failures():
    assert categorize_exception(httpx.ReadTimeout("slow")) is ErrorCategory.TIMEOUT
    assert categorize_exception(httpx.ConnectError("refused")) is ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(httpx.InvalidURL("bad")) is ErrorCategory.INVALID_URL
    assert categorize_exception(ssl.SSLError("handshake")) is ErrorCategory.SSL_ERROR
    assert categorize_exception(socket.gaierror("dns")) is ErrorCategory.DNS_ERROR
    assert categorize_exception(ConnectionResetError()) is ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(RuntimeError("boom")) is ErrorCategory.UNKNOWN_ERROR


def test_categorize_exception_inspects_wrapped_cause():
    try:
        try:
            raise socket.gaierror("no such host")
        except socket.gaierror as inner:
            raise httpx.ConnectError("connect failed") from inner
    except httpx.ConnectError as exc:
        assert categorize_exception(exc) is ErrorCategory.DNS_ERROR
