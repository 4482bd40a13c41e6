# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models used across the client."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .headers import header_value, normalize_headers

Headers = dict[str, str]


@dataclass(frozen=True)
class HttpRequest:
    """Immutable request representation consumed by HttpClient implementations."""

    url: str
    method: str = "GET"
    headers: Headers = field(default_factory=dict)
    body: bytes | None = None
    timeout: float | None = None
    allow_redirects: bool | None = None

    def header(self, name: str, default: str = "") -> str:
        return header_value(self.headers, name, default)


@dataclass
class HttpResponse:
    """Normalized HTTP response; decoded exactly once per attempt."""

    status_code: int
    headers: Headers = field(default_factory=dict)
    content: bytes = b""
    url: str | None = None

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")

    def header(self, name: str, default: str = "") -> str:
        return header_value(self.headers, name, default)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> HttpResponse:
        """Helper to normalize dictionary-like responses (stubs, recorded fixtures)."""
        raw_body = data.get("body")
        if isinstance(raw_body, (bytes, bytearray, memoryview)):
            content = bytes(raw_body)
        elif isinstance(raw_body, str):
            content = raw_body.encode("utf-8")
        else:
            content = b""

        raw_headers: Any = data.get("headers") or {}
        if not isinstance(raw_headers, Mapping):
            raw_headers = dict(raw_headers)

        return cls(
            status_code=int(data.get("status_code") or 200),
            headers=normalize_headers(raw_headers),
            content=content,
            url=data.get("url"),
        )
