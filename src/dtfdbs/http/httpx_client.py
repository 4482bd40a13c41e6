# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation."""

from __future__ import annotations

import httpx

from ..config import HttpSettings, load_http_settings
from .client import HttpClient
from .models import HttpRequest, HttpResponse


class HttpxClient(HttpClient):
    """Synchronous httpx client wrapper. Exceptions from httpx propagate to the caller."""

    def __init__(self, settings: HttpSettings | None = None, client: httpx.Client | None = None):
        self.settings = settings or load_http_settings()
        self._client = client or httpx.Client(
            follow_redirects=self.settings.allow_redirects,
            timeout=self.settings.timeout,
            verify=self.settings.verify_ssl,
        )

    def request(self, request: HttpRequest) -> HttpResponse:
        headers = dict(request.headers)
        headers.setdefault("User-Agent", self.settings.user_agent)
        timeout = request.timeout if request.timeout is not None else self.settings.timeout
        follow_redirects = request.allow_redirects if request.allow_redirects is not None else self.settings.allow_redirects

        with self._client.stream(
            request.method,
            request.url,
            headers=headers,
            content=request.body,
            timeout=timeout,
            follow_redirects=follow_redirects,
        ) as resp:
            content = bytearray()
            for chunk in resp.iter_bytes():
                if chunk:
                    content.extend(chunk)

        return HttpResponse(
            status_code=resp.status_code,
            headers={key.lower(): value for key, value in resp.headers.items()},
            content=bytes(content),
            url=str(resp.url),
        )

    def close(self) -> None:
        self._client.close()
