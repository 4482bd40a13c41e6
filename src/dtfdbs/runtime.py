# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level DTF DBS client: token lifecycle plus the four file operations."""

from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import suppress
from typing import Any

from .builder import RequestBuilder
from .config import ClientConfig, HttpSettings, load_http_settings
from .decoding import decode_api_result, decode_token_result
from .errors import UnsupportedResponse
from .files import UploadFile
from .http.client import HttpClient, create_default_http_client
from .http.headers import header_contains
from .http.models import HttpRequest, HttpResponse
from .http.transport import send_request

logger = logging.getLogger(__name__)


class DtfDbsClient:
    """
    Client for the DTF DBS file service of one dealer.

    Every operation acquires an access token lazily, and on a 401 refreshes it and
    retries the call exactly once. The token lives on ``config`` and is rewritten
    in place, so one client (or config) must not be used from several threads at once.
    """

    def __init__(
        self,
        config: ClientConfig,
        http_client: HttpClient | None = None,
        *,
        http_settings: HttpSettings | None = None,
    ):
        self.config = config
        self.http_settings = http_settings or load_http_settings()
        self.http_client = http_client or create_default_http_client(self.http_settings)
        self.builder = RequestBuilder(config)

    def upload_file(self, file: Any, file_name: str | None = None, overwrite: bool | None = False) -> bool:
        """
        Upload a file for the dealer.

        ``file`` is a path or a readable binary stream. ``file_name`` overrides the stored
        name; ``overwrite`` replaces an existing file instead of failing with
        ``FileAlreadyExists``. Returns True only when the service answers 204.
        """
        upload = UploadFile.resolve(file)
        request, response = self._call(lambda: self.builder.build_upload_request(upload, file_name, overwrite))
        if response.status_code == 204:
            return True
        decode_api_result(request, response)
        return False

    def list_files(self) -> list[Any]:
        """List the dealer's files. Each entry carries a name and HATEOAS links."""
        request, response = self._call(self.builder.build_list_request)
        result = decode_api_result(request, response, required_fields=("files",))
        return result["files"]

    def download_file(self, filename: str) -> bytes:
        """Return the raw content of a single file."""
        request, response = self._call(lambda: self.builder.build_download_request(filename))
        if response.status_code == 200 and header_contains(response.headers, "Content-Type", "application/octet-stream"):
            return response.content

        decode_api_result(request, response)
        raise UnsupportedResponse(
            request,
            f"Expected file content, got HTTP {response.status_code} {response.header('Content-Type')}".rstrip(),
            response=response,
        )

    def get_file_details(self, filename: str) -> dict[str, Any]:
        request, response = self._call(lambda: self.builder.build_details_request(filename))
        return decode_api_result(request, response)

    def obtain_access_token(self) -> str:
        """Request a new access token via the client-credentials grant (valid for 3600s)."""
        request = self.builder.build_token_request()
        logger.debug("Requesting access token from %s", request.url)
        response = send_request(self.http_client, request)
        result = decode_token_result(request, response)
        return result["access_token"]

    def _call(self, build: Callable[[], HttpRequest]) -> tuple[HttpRequest, HttpResponse]:
        if not self.config.access_token:
            self.config.access_token = self.obtain_access_token()

        request = build()
        response = send_request(self.http_client, request)

        if response.status_code == 401:
            logger.debug("%s %s returned 401; refreshing access token and retrying once", request.method, request.url)
            self.config.access_token = self.obtain_access_token()
            request = build()
            response = send_request(self.http_client, request)

        return request, response

    def close(self) -> None:
        with suppress(Exception):
            if hasattr(self.http_client, "close"):
                self.http_client.close()

    def __enter__(self) -> DtfDbsClient:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()


__all__ = ["DtfDbsClient"]
