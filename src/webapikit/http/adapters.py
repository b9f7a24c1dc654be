# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-process Sender implementations."""

from __future__ import annotations

from .models import HttpRequest, HttpResponse
from .sender import Sender, SendTask


class StubSender(Sender):
    """Deterministic, programmable Sender for tests."""

    def __init__(self, responses: dict[str, HttpResponse] | None = None):
        self._responses = responses or {}
        self.requests: list[HttpRequest] = []

    def add(self, url: str, response: HttpResponse) -> None:
        self._responses[url] = response

    def send(self, request: HttpRequest) -> SendTask:
        self.requests.append(request)
        if request.url in self._responses:
            return SendTask.resolved(request, self._responses[request.url])
        return SendTask.resolved(
            request,
            HttpResponse(ok=False, status_code=None, url=request.url, error_message="No stubbed response configured"),
        )

    @property
    def last_request(self) -> HttpRequest | None:
        return self.requests[-1] if self.requests else None

    def close(self) -> None:
        return None
