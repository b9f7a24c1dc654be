# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Ambient API context.

A ContextVar-backed ApiContext carries the default Sender and HTTP settings used when a
request and its provider configure neither. Wrap application code in `api_context(...)`
to inject them explicitly.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, replace
from functools import lru_cache
from typing import Any

from .config import HttpSettings, load_http_settings
from .http.sender import Sender, create_default_sender


@dataclass(frozen=True)
class ApiContext:
    sender: Sender | None = None
    settings: HttpSettings | None = None


_current_api_context: ContextVar[ApiContext | None] = ContextVar("webapikit_api_context", default=None)


def get_api_context() -> ApiContext:
    """Return the current ambient API context."""
    return _current_api_context.get() or ApiContext()


def get_http_settings() -> HttpSettings:
    """Return HttpSettings from context, falling back to loading defaults."""
    context = get_api_context()
    if context.settings is not None:
        return context.settings
    return load_http_settings()


@lru_cache(maxsize=1)
def _shared_default_sender() -> Sender:
    return create_default_sender()


def get_default_sender() -> Sender:
    """Return the context Sender, or a lazily created process-shared httpx sender."""
    context = get_api_context()
    if context.sender is not None:
        return context.sender
    return _shared_default_sender()


@contextmanager
def api_context(**overrides: Any) -> Iterator[ApiContext]:
    """
    Context manager that layers overrides onto the ambient ApiContext.

    None-valued overrides are ignored to preserve outer context values.
    """
    current = get_api_context()
    filtered = {key: value for key, value in overrides.items() if value is not None}
    new_context = replace(current, **filtered) if filtered else current
    token = _current_api_context.set(new_context)
    try:
        yield new_context
    finally:
        _current_api_context.reset(token)


__all__ = [
    "ApiContext",
    "api_context",
    "get_api_context",
    "get_default_sender",
    "get_http_settings",
]
