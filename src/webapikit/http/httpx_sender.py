# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed Sender implementation."""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor

import httpx

from ..config import HttpSettings
from ..context import get_http_settings
from ..errors import categorize_exception
from .headers import RequestHeaderKey, header_value
from .models import HttpRequest, HttpResponse
from .sender import Sender, SendTask, cancelled_response

logger = logging.getLogger(__name__)

ResponseCallback = Callable[[HttpResponse], None]


class HttpxSender(Sender):
    """
    Dispatches requests on a worker pool through a shared httpx client.

    `send` returns a SendTask immediately; completion is delivered through `SendTask.result()`
    and, when given, the `on_response` callback (invoked on the worker thread).
    """

    def __init__(
        self,
        settings: HttpSettings | None = None,
        client: httpx.Client | None = None,
        on_response: ResponseCallback | None = None,
        executor: ThreadPoolExecutor | None = None,
    ):
        self._settings = settings
        self.on_response = on_response
        initial = self.settings
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client(
            follow_redirects=initial.allow_redirects,
            timeout=initial.timeout,
            verify=initial.verify_ssl,
        )
        self._owns_executor = executor is None
        self._executor = executor if executor is not None else ThreadPoolExecutor(
            max_workers=initial.max_workers,
            thread_name_prefix="webapikit-sender",
        )

    @property
    def settings(self) -> HttpSettings:
        """Pinned settings, or the ambient context settings when none were given."""
        if self._settings is not None:
            return self._settings
        return get_http_settings()

    def send(self, request: HttpRequest) -> SendTask:
        task = SendTask(request)
        # Worker threads do not inherit the caller's context, so settings are resolved here.
        settings = self.settings
        future: Future[HttpResponse] = self._executor.submit(self._perform, task, settings)
        task.future = future
        if self.on_response is not None:
            future.add_done_callback(lambda _: self._deliver(task))
        return task

    def _deliver(self, task: SendTask) -> None:
        if task.cancelled or self.on_response is None:
            return
        self.on_response(task.result())

    def _perform(self, task: SendTask, settings: HttpSettings) -> HttpResponse:
        request = task.request
        if task.cancelled:
            return cancelled_response(request)

        headers = dict(request.headers or {})
        if header_value(headers, RequestHeaderKey.USER_AGENT) is None:
            headers[RequestHeaderKey.USER_AGENT.value] = settings.user_agent

        max_body_bytes = settings.max_body_bytes
        if max_body_bytes <= 0:
            max_body_bytes = 16 * 1024 * 1024
        timeout = request.timeout if request.timeout is not None else settings.timeout

        logger.debug("Sending %s %s", request.method, request.url)
        try:
            with self._client.stream(
                request.method,
                request.url,
                headers=headers,
                content=request.body,
                timeout=timeout,
                follow_redirects=request.allow_redirects,
            ) as resp:
                content = bytearray()
                truncated = False
                for chunk in resp.iter_bytes():
                    if task.cancelled:
                        return cancelled_response(request)
                    if not chunk:
                        continue
                    remaining = max_body_bytes - len(content)
                    if remaining <= 0:
                        truncated = True
                        break
                    if len(chunk) > remaining:
                        content.extend(chunk[:remaining])
                        truncated = True
                        break
                    content.extend(chunk)

                encoding = resp.encoding or "utf-8"
                try:
                    text = bytes(content).decode(encoding, errors="replace")
                except LookupError:
                    text = bytes(content).decode("utf-8", errors="replace")

            return HttpResponse(
                ok=True,
                status_code=resp.status_code,
                headers=dict(resp.headers),
                text=text,
                content=bytes(content),
                url=str(resp.url),
                meta={
                    "body_truncated": truncated,
                    "body_bytes_read": len(content),
                    "body_bytes_limit": max_body_bytes,
                },
            )
        except Exception as exc:  # noqa: BLE001
            category = categorize_exception(exc)
            logger.warning("Request %s %s failed (%s): %s", request.method, request.url, category.value, exc)
            return HttpResponse(
                ok=False,
                url=request.url,
                error_message=str(exc),
                error_type=type(exc).__name__,
                meta={"error_category": category.value},
            )

    def close(self) -> None:
        """Release the pool and client this sender created; injected ones stay open."""
        if self._owns_executor:
            self._executor.shutdown(wait=False, cancel_futures=True)
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> HttpxSender:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()
