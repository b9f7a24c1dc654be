# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Sender abstraction, cancellation handles and factory."""

from __future__ import annotations

import threading
from collections.abc import Callable
from concurrent.futures import CancelledError, Future
from typing import Protocol

from ..config import HttpSettings
from .models import HttpRequest, HttpResponse


class Cancelable(Protocol):
    """Handle allowing cancellation of an in-flight operation."""

    def cancel(self) -> None: ...


class Sender(Protocol):
    """Performs transport for a fully resolved request and returns immediately."""

    def send(self, request: HttpRequest) -> Cancelable: ...


class CancelBlock:
    """Cancelable that runs `block` on the first `cancel()`; without a block it does nothing."""

    def __init__(self, block: Callable[[], None] | None = None):
        self._block = block
        self._lock = threading.Lock()
        self.cancelled = False

    def cancel(self) -> None:
        with self._lock:
            if self.cancelled:
                return
            self.cancelled = True
            block = self._block
        if block is not None:
            block()


def cancelled_response(request: HttpRequest | None = None) -> HttpResponse:
    return HttpResponse(
        ok=False,
        url=request.url if request is not None else None,
        error_message="Request cancelled",
        error_type="Cancelled",
    )


class SendTask:
    """Cancelable handle over a Future producing an HttpResponse."""

    def __init__(self, request: HttpRequest, future: Future[HttpResponse] | None = None):
        self.request = request
        self.future: Future[HttpResponse] = future if future is not None else Future()
        self._cancel_event = threading.Event()

    @classmethod
    def resolved(cls, request: HttpRequest, response: HttpResponse) -> SendTask:
        """Build a task whose response is already available."""
        task = cls(request)
        task.future.set_result(response)
        return task

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def cancel(self) -> None:
        # A running future cannot be cancelled; the flag makes the worker discard its result.
        self._cancel_event.set()
        self.future.cancel()

    def done(self) -> bool:
        return self.future.done()

    def result(self, timeout: float | None = None) -> HttpResponse:
        """Wait for the response; cancelled tasks yield a failed `Cancelled` response."""
        if self.cancelled:
            return cancelled_response(self.request)
        try:
            return self.future.result(timeout=timeout)
        except CancelledError:
            return cancelled_response(self.request)


def create_default_sender(settings: HttpSettings | None = None) -> Sender:
    """Factory for the default httpx-backed sender; without settings it follows the ambient context."""
    from .httpx_sender import HttpxSender

    return HttpxSender(settings)


__all__ = [
    "CancelBlock",
    "Cancelable",
    "SendTask",
    "Sender",
    "cancelled_response",
    "create_default_sender",
]
