# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Construction of DTF DBS HTTP requests. No network I/O happens here."""

from __future__ import annotations

import base64
import secrets
from typing import Any
from urllib.parse import quote, urlencode

from .config import ClientConfig
from .files import UploadFile
from .http.models import HttpRequest


def _multipart_body(field_name: str, upload: UploadFile, boundary: str) -> bytes:
    filename = upload.filename.replace('"', "%22").replace("\r", "%0D").replace("\n", "%0A")
    head = (
        f"--{boundary}\r\n"
        f'Content-Disposition: form-data; name="{field_name}"; filename="{filename}"\r\n'
        f"Content-Type: {upload.content_type}\r\n"
        "\r\n"
    ).encode("utf-8")
    tail = f"\r\n--{boundary}--\r\n".encode("utf-8")
    return head + upload.content + tail


class RequestBuilder:
    """
    Builds the five DBS requests from a ClientConfig.

    The config is read on every call, so requests rebuilt after a token refresh carry
    the new token.
    """

    def __init__(self, config: ClientConfig):
        self.config = config

    def build_token_request(self) -> HttpRequest:
        credentials = f"{self.config.client_id}:{self.config.client_secret}".encode("utf-8")
        auth = base64.b64encode(credentials).decode("ascii")
        form = {"grant_type": "client_credentials"}
        if self.config.auth_scope is not None:
            form["scope"] = self.config.auth_scope
        return HttpRequest(
            url=self.config.token_url,
            method="POST",
            headers={
                "Content-Type": "application/x-www-form-urlencoded",
                "Authorization": f"Basic {auth}",
            },
            body=urlencode(form).encode("ascii"),
        )

    def build_upload_request(self, file: Any, file_name: str | None = None, overwrite: bool | None = False) -> HttpRequest:
        upload = UploadFile.resolve(file)
        query: dict[str, str] = {}
        if file_name:
            query["fileName"] = file_name
        if overwrite is True:
            query["overWrite"] = "True"

        url = self._files_url()
        if query:
            url = f"{url}?{urlencode(query)}"

        boundary = secrets.token_hex(16)
        return HttpRequest(
            url=url,
            method="PUT",
            headers={
                "Authorization": self._bearer(),
                "Content-Type": f"multipart/form-data; boundary={boundary}",
            },
            body=_multipart_body("file", upload, boundary),
        )

    def build_list_request(self) -> HttpRequest:
        return self._get_json(self._files_url())

    def build_download_request(self, filename: str) -> HttpRequest:
        return self._get_json(self._file_url(filename))

    def build_details_request(self, filename: str) -> HttpRequest:
        return self._get_json(f"{self._file_url(filename)}/details")

    def _bearer(self) -> str:
        return f"Bearer {self.config.access_token or ''}"

    def _files_url(self) -> str:
        return f"{self.config.api_base_url}/dbs/dealer/{self.config.dealer_id}/files"

    def _file_url(self, filename: str) -> str:
        return f"{self._files_url()}/{quote(filename, safe='')}"

    def _get_json(self, url: str) -> HttpRequest:
        return HttpRequest(
            url=url,
            method="GET",
            headers={"Authorization": self._bearer(), "Accept": "application/json"},
        )


__all__ = ["RequestBuilder"]
