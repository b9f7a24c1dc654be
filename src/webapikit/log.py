# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Logging setup.

The library only emits records on loggers under `webapikit`; a NullHandler keeps them silent
until the application configures logging. Scripts can call `setup_logging()` for stderr output.
"""

from __future__ import annotations

import logging
import os

LIBRARY_LOGGER = "webapikit"
LOG_LEVEL_ENV = "WEBAPIKIT_LOG_LEVEL"

logging.getLogger(LIBRARY_LOGGER).addHandler(logging.NullHandler())


def resolve_log_level(level: str | int | None = None) -> int:
    """Map a level name (or `WEBAPIKIT_LOG_LEVEL`) to a logging level; unknown names mean WARNING."""
    if isinstance(level, int):
        return level
    name = (level or os.getenv(LOG_LEVEL_ENV) or "WARNING").strip().upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.WARNING


def setup_logging(level: str | int | None = None) -> None:
    """Send library logs to stderr at the resolved level."""
    resolved = resolve_log_level(level)
    logging.basicConfig(level=resolved, format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger(LIBRARY_LOGGER).setLevel(resolved)


__all__ = ["LIBRARY_LOGGER", "resolve_log_level", "setup_logging"]
