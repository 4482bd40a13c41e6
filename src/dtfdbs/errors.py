# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl
from enum import Enum
from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from .http.models import HttpRequest, HttpResponse


class ErrorKind(str, Enum):
    TRANSPORT = "TRANSPORT"
    UNSUPPORTED_RESPONSE = "UNSUPPORTED_RESPONSE"
    OKTA_AUTH = "OKTA_AUTH"
    API = "API"


class TransportFailure(str, Enum):
    PROTOCOL = "PROTOCOL"
    NETWORK = "NETWORK"
    CLIENT = "CLIENT"
    GENERIC = "GENERIC"


class DtfDbsError(Exception):
    """
    Base class for every error raised by the client.

    ``kind`` identifies the variant so callers can dispatch on it explicitly;
    ``code`` is a status-like number (500 for local failures, the HTTP status otherwise).
    """

    kind: ErrorKind
    default_code = 500
    description = ""

    def __init__(
        self,
        request: HttpRequest,
        message: str = "",
        code: int | None = None,
        *,
        response: HttpResponse | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.request = request
        self.message = message
        self.code = self.default_code if code is None else code
        self.response = response
        self.cause = cause


class TransportError(DtfDbsError):
    kind = ErrorKind.TRANSPORT
    description = "HTTP client raised an exception which cannot be handled by the client."

    def __init__(
        self,
        request: HttpRequest,
        message: str = "",
        code: int | None = None,
        *,
        failure: TransportFailure = TransportFailure.GENERIC,
        response: HttpResponse | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(request, message, code, response=response, cause=cause)
        self.failure = failure


class UnsupportedResponse(DtfDbsError):
    kind = ErrorKind.UNSUPPORTED_RESPONSE
    description = "Received unknown response. Maybe API schema has been changed."


class OktaAuthError(DtfDbsError):
    kind = ErrorKind.OKTA_AUTH
    default_code = 400
    description = "Some error occurred during Okta OAuth authentication."


class ApiError(DtfDbsError):
    kind = ErrorKind.API
    description = "DTF DBS API reported an error."

    def __init__(
        self,
        request: HttpRequest,
        message: str = "",
        code: int | None = None,
        *,
        error_code: str | None = None,
        timestamp: str | None = None,
        path: str | None = None,
        response: HttpResponse | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(request, message, code, response=response, cause=cause)
        self.error_code = error_code
        self.timestamp = timestamp
        self.path = path

    @property
    def http_status(self) -> int:
        return self.code


def categorize_exception(exc: BaseException) -> TransportFailure:
    """
    Map Python/httpx exceptions raised while sending to a TransportFailure.
    """
    if isinstance(exc, (httpx.ProtocolError, httpx.UnsupportedProtocol, httpx.HTTPStatusError, httpx.InvalidURL)):
        return TransportFailure.PROTOCOL

    if isinstance(exc, (httpx.TimeoutException, httpx.NetworkError, httpx.ProxyError)):
        return TransportFailure.NETWORK

    if isinstance(exc, (ssl.SSLError, socket.gaierror, ConnectionError, TimeoutError)):
        return TransportFailure.NETWORK

    if isinstance(exc, httpx.HTTPError):
        return TransportFailure.CLIENT

    return TransportFailure.GENERIC


def transport_failure_message(failure: TransportFailure) -> str:
    """User-facing message for a transport failure category."""
    mapping = {
        TransportFailure.PROTOCOL: "HTTP request failed due non 2xx status code or other standard violations.",
        TransportFailure.NETWORK: "HTTP request failed due network issues, check internet connection.",
        TransportFailure.CLIENT: "HTTP request failed for some unspecified reason.",
        TransportFailure.GENERIC: "General error occurred during HTTP request.",
    }
    return mapping[failure]


__all__ = [
    "ApiError",
    "DtfDbsError",
    "ErrorKind",
    "OktaAuthError",
    "TransportError",
    "TransportFailure",
    "UnsupportedResponse",
    "categorize_exception",
    "transport_failure_message",
]
