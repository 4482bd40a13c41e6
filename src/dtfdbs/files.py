# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Upload sources.

An upload accepts either a filesystem path or an open binary stream. Both are
resolved into an ``UploadFile`` once per call, so a retried request resends the
same bytes even when the original stream cannot be rewound.
"""

from __future__ import annotations

import mimetypes
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, BinaryIO, Union

DEFAULT_CONTENT_TYPE = "application/octet-stream"
DEFAULT_FILENAME = "file"


@dataclass(frozen=True)
class FilePath:
    path: Path


@dataclass(frozen=True)
class OpenStream:
    stream: BinaryIO


FileSource = Union[FilePath, OpenStream]


@dataclass(frozen=True)
class UploadFile:
    """Resolved multipart payload."""

    filename: str
    content: bytes
    content_type: str = DEFAULT_CONTENT_TYPE

    @classmethod
    def resolve(cls, value: Any) -> UploadFile:
        if isinstance(value, UploadFile):
            return value
        return cls.from_source(as_file_source(value))

    @classmethod
    def from_source(cls, source: FileSource) -> UploadFile:
        if isinstance(source, FilePath):
            filename = source.path.name
            content = source.path.read_bytes()
        else:
            raw_name = getattr(source.stream, "name", None)
            filename = os.path.basename(raw_name) if isinstance(raw_name, str) and raw_name else DEFAULT_FILENAME
            data = source.stream.read()
            content = data.encode("utf-8") if isinstance(data, str) else bytes(data)
        return cls(filename=filename, content=content, content_type=guess_content_type(filename))


def as_file_source(value: Any) -> FileSource:
    """Classify an upload argument; anything but an existing path or a readable stream is rejected."""
    if isinstance(value, (FilePath, OpenStream)):
        return value
    if isinstance(value, (str, os.PathLike)):
        path = Path(value)
        if path.is_file():
            return FilePath(path)
    elif callable(getattr(value, "read", None)):
        return OpenStream(value)
    raise ValueError("file argument must be path to an existing file or a readable binary stream")


def guess_content_type(filename: str) -> str:
    guessed, _ = mimetypes.guess_type(filename)
    return guessed or DEFAULT_CONTENT_TYPE


__all__ = ["FilePath", "FileSource", "OpenStream", "UploadFile", "as_file_source", "guess_content_type"]
