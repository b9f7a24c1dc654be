# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import logging

import pytest

from webapikit.context import api_context
from webapikit.errors import InvalidURLError
from webapikit.http.adapters import StubSender
from webapikit.http.models import HTTPMethod, HttpRequest, HttpResponse
from webapikit.http.sender import CancelBlock, SendTask
from webapikit.provider import Provider
from webapikit.request import WebAPIRequest


def test_send_dispatches_built_request_through_provider_sender():
    stub = StubSender({"http://api.test.com/users?page=2": HttpResponse(ok=True, status_code=200, text="[]")})
    provider = Provider(base_url="http://api.test.com", sender=stub)

    task = WebAPIRequest(provider, "/users").add_query_item("page", "2").send()

    assert isinstance(task, SendTask)
    assert task.result().text == "[]"
    assert stub.last_request == HttpRequest(url="http://api.test.com/users?page=2", method="GET")


def test_send_prefers_explicit_sender():
    provider_sender, explicit = StubSender(), StubSender()
    provider = Provider(base_url="http://api.test.com", sender=provider_sender)

    WebAPIRequest(provider, "/p", HTTPMethod.DELETE).send(explicit)

    assert provider_sender.requests == []
    assert explicit.last_request.method == "DELETE"


def test_send_falls_back_to_context_sender():
    ambient = StubSender()
    with api_context(sender=ambient):
        WebAPIRequest(Provider(base_url="http://api.test.com"), "/p").send()
    assert ambient.last_request.url == "http://api.test.com/p"


def test_send_with_invalid_url_returns_inert_handle(caplog):
    stub = StubSender()
    provider = Provider(base_url="not a url", sender=stub)

    with caplog.at_level(logging.WARNING, logger="webapikit.request"):
        handle = WebAPIRequest(provider, "/users").send()

    assert isinstance(handle, CancelBlock)
    handle.cancel()
    handle.cancel()
    assert handle.cancelled is True
    assert stub.requests == []
    assert "not sent" in caplog.text


def test_send_swallows_encoding_and_unexpected_failures(caplog):
    stub = StubSender()
    provider = Provider(base_url="http://api.test.com", sender=stub)

    class ExplodingRequest(WebAPIRequest):
        def make_url(self) -> str:
            raise KeyError("unexpected")

    with caplog.at_level(logging.WARNING, logger="webapikit.request"):
        encoding_failure = WebAPIRequest(provider, "/p", HTTPMethod.POST).add_parameter("obj", object()).send()
        unexpected_failure = ExplodingRequest(provider, "/p").send()

    assert isinstance(encoding_failure, CancelBlock)
    assert isinstance(unexpected_failure, CancelBlock)
    assert stub.requests == []


def test_dispatch_raises_build_failures():
    with pytest.raises(InvalidURLError):
        WebAPIRequest(Provider(base_url="http://[invalid", sender=StubSender()), "/p").dispatch()


def test_dispatch_sends_when_build_succeeds():
    stub = StubSender()
    task = WebAPIRequest(Provider(base_url="http://api.test.com"), "/p").dispatch(stub)
    assert task.result().ok is False
    assert stub.last_request.url == "http://api.test.com/p"
