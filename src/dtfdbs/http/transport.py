# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Send helper that folds every transport failure into TransportError."""

from __future__ import annotations

import logging

from ..errors import TransportError, categorize_exception, transport_failure_message
from .client import HttpClient
from .models import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)


def send_request(client: HttpClient, request: HttpRequest) -> HttpResponse:
    """Send once. The response is returned untouched whatever its status code."""
    try:
        return client.request(request)
    except Exception as exc:  # noqa: BLE001
        failure = categorize_exception(exc)
        logger.debug("%s %s failed (%s): %s", request.method, request.url, failure.value, exc)
        raise TransportError(
            request,
            transport_failure_message(failure),
            failure=failure,
            cause=exc,
        ) from exc


__all__ = ["send_request"]
