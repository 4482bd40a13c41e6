# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
DTF DBS client package entrypoint.

This package talks to the DTF Dealer Business System file service: it obtains OAuth2
access tokens via the client-credentials grant, uploads, lists, downloads and describes
dealer files, and turns the service's JSON envelopes into typed results or errors.
HTTP behavior is abstracted behind an injectable client interface.
"""

from .builder import RequestBuilder
from .config import ClientConfig, Environment, HttpSettings, load_http_settings
from .errors import (
    ApiError,
    DtfDbsError,
    ErrorKind,
    OktaAuthError,
    TransportError,
    TransportFailure,
    UnsupportedResponse,
)
from .files import FilePath, OpenStream, UploadFile
from .http import (
    HttpClient,
    HttpRequest,
    HttpResponse,
    HttpxClient,
    StubHttpClient,
    create_default_http_client,
)
from .log import setup_logging
from .runtime import DtfDbsClient
from .version import __version__

__all__ = [
    "ApiError",
    "ClientConfig",
    "DtfDbsClient",
    "DtfDbsError",
    "Environment",
    "ErrorKind",
    "FilePath",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpSettings",
    "HttpxClient",
    "OktaAuthError",
    "OpenStream",
    "RequestBuilder",
    "StubHttpClient",
    "TransportError",
    "TransportFailure",
    "UnsupportedResponse",
    "UploadFile",
    "create_default_http_client",
    "load_http_settings",
    "setup_logging",
    "__version__",
]
