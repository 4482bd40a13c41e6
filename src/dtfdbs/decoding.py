# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Decoders for the two JSON envelopes the service answers with.

Token endpoint responses follow the OAuth shape (``access_token`` on success,
``error``/``error_description`` or Okta's ``errorCode``/``errorSummary`` on failure).
Business endpoints answer either with a payload or with a fault body
(``faultcode``/``faultstring`` from the gateway, ``error``/``message`` from the API).
Fault shapes are checked before required fields, so a vendor error that lacks an
expected success field is still reported as the vendor's error.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any

from .errors import ApiError, OktaAuthError, UnsupportedResponse
from .http.headers import header_contains
from .http.models import HttpRequest, HttpResponse


def _has_keys(result: dict[str, Any], *keys: str) -> bool:
    return all(key in result for key in keys)


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)


def load_json_object(request: HttpRequest, response: HttpResponse) -> dict[str, Any]:
    """Content-type, syntax and shape checks shared by both envelopes."""
    if not header_contains(response.headers, "Content-Type", "application/json"):
        content_type = response.header("Content-Type")
        raise UnsupportedResponse(
            request,
            f"Provided response isn't JSON content type. {content_type}",
            response=response,
        )

    try:
        result = json.loads(response.content)
    except ValueError as exc:
        raise UnsupportedResponse(
            request,
            "Cannot parse response body. Malformed JSON",
            response=response,
            cause=exc,
        ) from exc

    if not isinstance(result, dict):
        raise UnsupportedResponse(request, "Invalid response, assoc array expected", response=response)
    return result


def decode_token_result(request: HttpRequest, response: HttpResponse) -> dict[str, Any]:
    result = load_json_object(request, response)

    if _has_keys(result, "error", "error_description"):
        message = f"{result['error']}: {result['error_description']}"
        raise OktaAuthError(request, message, response.status_code, response=response)

    if _has_keys(result, "errorCode", "errorSummary"):
        message = f"{result['errorCode']}: {result['errorSummary']}"
        raise OktaAuthError(request, message, response.status_code, response=response)

    if "access_token" not in result:
        raise UnsupportedResponse(request, 'Body doesn\'t contain "access_token" field', response=response)

    token = result["access_token"]
    if not isinstance(token, str) or not token:
        raise UnsupportedResponse(request, "Invalid response, \"access_token\" must be a non-empty string", response=response)

    return result


def decode_api_result(
    request: HttpRequest,
    response: HttpResponse,
    required_fields: Iterable[str] = (),
) -> dict[str, Any]:
    result = load_json_object(request, response)

    if _has_keys(result, "faultcode", "faultstring"):
        raise ApiError(
            request,
            f"{result['faultcode']}: {result['faultstring']}",
            response.status_code,
            error_code=str(result["faultcode"]),
            response=response,
        )

    if _has_keys(result, "error", "message"):
        raise ApiError(
            request,
            str(result["message"]),
            response.status_code,
            error_code=str(result["error"]),
            timestamp=_optional_str(result.get("timestamp")),
            path=_optional_str(result.get("path")),
            response=response,
        )

    for name in required_fields:
        if name not in result:
            raise UnsupportedResponse(request, f'No required field "{name}" in response body', response=response)

    return result


__all__ = ["decode_api_result", "decode_token_result", "load_json_object"]
