# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header normalization utilities.

HTTP header field names are case-insensitive (RFC 9110). Responses keep headers as plain
dicts, so lookups go through these helpers rather than indexing directly.
"""

from __future__ import annotations

from collections.abc import Mapping


def normalize_headers(headers: Mapping[object, object] | None) -> dict[str, str]:
    """Return a lowercase-keyed copy of a header mapping."""
    out: dict[str, str] = {}
    for key, value in (headers or {}).items():
        if key is None:
            continue
        name = str(key).strip().lower()
        if name:
            out[name] = "" if value is None else str(value)
    return out


def header_value(headers: Mapping[object, object] | None, name: str, default: str = "") -> str:
    """Return a header value using case-insensitive key matching."""
    if not headers or not name:
        return default
    lower = name.lower()
    for key, value in headers.items():
        if key is not None and str(key).lower() == lower:
            return default if value is None else str(value).strip()
    return default


def header_contains(headers: Mapping[object, object] | None, name: str, needle: str) -> bool:
    """True when the header is present and contains ``needle`` (case-insensitive)."""
    return needle.lower() in header_value(headers, name).lower()


__all__ = ["header_contains", "header_value", "normalize_headers"]
