# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-memory HttpClient for tests and offline use."""

from __future__ import annotations

from collections import deque

from .client import HttpClient
from .models import HttpRequest, HttpResponse


class StubHttpClient(HttpClient):
    """
    Deterministic, programmable HttpClient.

    Responses are queued per ``(method, url)``; each request pops the next one and the
    last queued response is replayed once the queue is down to one. Exceptions may be
    queued in place of responses and are raised when reached.
    """

    def __init__(self) -> None:
        self._responses: dict[tuple[str, str], deque[HttpResponse | Exception]] = {}
        self.requests: list[HttpRequest] = []
        self.closed = False

    def add(self, url: str, *responses: HttpResponse | Exception, method: str = "GET") -> None:
        self._responses.setdefault((method.upper(), url), deque()).extend(responses)

    def calls(self, url: str, method: str | None = None) -> list[HttpRequest]:
        return [r for r in self.requests if r.url.split("?", 1)[0] == url and (method is None or r.method == method.upper())]

    def request(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        queue = self._responses.get((request.method.upper(), request.url.split("?", 1)[0]))
        if not queue:
            raise LookupError(f"No stubbed response configured for {request.method} {request.url}")
        item = queue.popleft() if len(queue) > 1 else queue[0]
        if isinstance(item, Exception):
            raise item
        return item

    def close(self) -> None:
        self.closed = True
