# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""API provider configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .auth import Authentication
from .http.encoding import ParameterEncoding
from .http.models import HTTPMethod
from .http.sender import Sender

if TYPE_CHECKING:
    from .request import WebAPIRequest


@dataclass(frozen=True)
class Provider:
    """
    Which API a request targets: base URL plus defaults shared by all of its requests.

    Providers are never mutated by requests and can be shared freely across threads.
    """

    base_url: str
    sender: Sender | None = None
    parameter_encoding: ParameterEncoding | None = None
    require_authentication: bool | None = None
    authentication: Authentication | None = None

    def request(self, path: str, method: HTTPMethod | str = HTTPMethod.GET) -> WebAPIRequest:
        """Start a request against this provider."""
        from .request import WebAPIRequest

        return WebAPIRequest(self, path, method)
