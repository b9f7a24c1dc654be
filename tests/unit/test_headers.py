# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import httpx

from webapikit.http.headers import (
    RequestHeaderKey,
    ResponseHeaderKey,
    header_name,
    header_value,
    merge_headers,
    normalize_headers,
)
from webapikit.http.models import HttpResponse


def test_header_keys_map_to_canonical_names():
    assert RequestHeaderKey.CONTENT_TYPE == "Content-Type"
    assert RequestHeaderKey.USER_AGENT.value == "User-Agent"
    assert ResponseHeaderKey.E_TAG.value == "ETag"
    assert ResponseHeaderKey.WWW_AUTHENTICATE.value == "WWW-Authenticate"
    assert str(ResponseHeaderKey.ALLOW) == "Allow"
    assert header_name(RequestHeaderKey.ACCEPT) == "Accept"
    assert header_name("X-Custom") == "X-Custom"


def test_response_header_lookup_by_typed_key():
    response = HttpResponse(ok=True, status_code=200, headers={"Allow": "GET"})
    assert response.header(ResponseHeaderKey.ALLOW) == "GET"
    assert response.header(ResponseHeaderKey.E_TAG) is None
    assert response.header("allow") == "GET"


def test_header_value_is_case_insensitive_and_defaults():
    headers = {"content-TYPE": " text/plain "}
    assert header_value(headers, "Content-Type") == "text/plain"
    assert header_value(headers, RequestHeaderKey.CONTENT_TYPE) == "text/plain"
    assert header_value(headers, "ETag") is None
    assert header_value(headers, "ETag", default="") == ""
    assert header_value(None, "Allow") is None
    assert header_value(headers, "") is None


def test_header_value_accepts_other_containers():
    assert header_value(httpx.Headers({"ETag": "abc"}), ResponseHeaderKey.E_TAG) == "abc"
    assert header_value([("Allow", "GET")], "allow") == "GET"
    assert header_value(object(), "allow") is None


def test_normalize_headers_lowercases_keys():
    normalized = normalize_headers({"X-Test": "1", "Empty": None, None: "skip", " ": "blank"})
    assert normalized == {"x-test": "1", "empty": ""}
    assert normalize_headers(None) == {}


def test_merge_headers_replaces_case_variants():
    base = {"content-type": "text/plain", "Accept": "*/*"}
    merged = merge_headers(base, RequestHeaderKey.CONTENT_TYPE, "application/json")
    assert merged == {"Accept": "*/*", "Content-Type": "application/json"}
    assert base["content-type"] == "text/plain"
    assert merge_headers(None, "Allow", "GET") == {"Allow": "GET"}
