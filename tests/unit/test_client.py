# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import io
import json

import httpx
import pytest

from dtfdbs.config import ClientConfig, HttpSettings
from dtfdbs.errors import ApiError, ErrorKind, OktaAuthError, TransportError, TransportFailure, UnsupportedResponse
from dtfdbs.http.adapters import StubHttpClient
from dtfdbs.http.models import HttpResponse
from dtfdbs.runtime import DtfDbsClient

TOKEN_URL = "https://sso-cert.johndeere.com/oauth2/aus97etlxsNTFzHT11t7/v1/token"
FILES_URL = "https://servicesextcert.deere.com/dtfapi/dbs/dealer/test01/files"


def json_response(payload, status_code=200):
    return HttpResponse(
        status_code=status_code,
        headers={"content-type": "application/json"},
        content=json.dumps(payload).encode(),
    )


def token_response(token):
    return json_response({"token_type": "Bearer", "expires_in": 3600, "access_token": token, "scope": "cap"})


UNAUTHORIZED = json_response({"faultcode": "InvalidAccessToken", "faultstring": "Invalid access token"}, status_code=401)


def make_client(stub, access_token=None):
    config = ClientConfig(
        client_id="client",
        client_secret="secret",
        dealer_id="test01",
        environment="cert",
        access_token=access_token,
    )
    return DtfDbsClient(config, http_client=stub, http_settings=HttpSettings())


def test_obtain_access_token_returns_token():
    stub = StubHttpClient()
    stub.add(TOKEN_URL, token_response("abc"), method="POST")
    client = make_client(stub)
    assert client.obtain_access_token() == "abc"
    assert client.config.access_token is None


def test_obtain_access_token_propagates_auth_error():
    stub = StubHttpClient()
    stub.add(
        TOKEN_URL,
        json_response({"error": "invalid_client", "error_description": "Client authentication failed."}, status_code=401),
        method="POST",
    )
    with pytest.raises(OktaAuthError) as excinfo:
        make_client(stub).list_files()
    assert excinfo.value.code == 401
    assert stub.calls(FILES_URL) == []


@pytest.mark.parametrize(
    ("method", "url", "response", "invoke"),
    [
        ("GET", FILES_URL, json_response({"files": []}), lambda client: client.list_files()),
        ("PUT", FILES_URL, HttpResponse(status_code=204), lambda client: client.upload_file(io.BytesIO(b"data"), file_name="order.dat")),
        (
            "GET",
            f"{FILES_URL}/order.dat",
            HttpResponse(status_code=200, headers={"content-type": "application/octet-stream"}, content=b"RAW"),
            lambda client: client.download_file("order.dat"),
        ),
        ("GET", f"{FILES_URL}/order.dat/details", json_response({"name": "order.dat"}), lambda client: client.get_file_details("order.dat")),
    ],
    ids=["list", "upload", "download", "details"],
)
def test_operations_acquire_token_lazily_once(method, url, response, invoke):
    stub = StubHttpClient()
    stub.add(TOKEN_URL, token_response("abc"), method="POST")
    stub.add(url, response, method=method)
    client = make_client(stub)

    assert stub.requests == []
    invoke(client)
    invoke(client)

    assert [r.method for r in stub.requests] == ["POST", method, method]
    assert len(stub.calls(TOKEN_URL)) == 1
    assert client.config.access_token == "abc"
    assert all(r.header("Authorization") == "Bearer abc" for r in stub.calls(url, method=method))


def test_existing_token_skips_acquisition():
    stub = StubHttpClient()
    stub.add(FILES_URL, json_response({"files": []}))
    assert make_client(stub, access_token="held").list_files() == []
    assert stub.calls(TOKEN_URL) == []


def test_unauthorized_triggers_single_refresh_and_retry():
    stub = StubHttpClient()
    stub.add(TOKEN_URL, token_response("fresh"), method="POST")
    stub.add(FILES_URL, UNAUTHORIZED, json_response({"files": []}))
    client = make_client(stub, access_token="expired")

    assert client.list_files() == []
    assert len(stub.calls(TOKEN_URL)) == 1
    business_calls = stub.calls(FILES_URL)
    assert [r.header("Authorization") for r in business_calls] == ["Bearer expired", "Bearer fresh"]
    assert client.config.access_token == "fresh"


def test_second_unauthorized_is_decoded_not_refreshed():
    stub = StubHttpClient()
    stub.add(TOKEN_URL, token_response("fresh"), method="POST")
    stub.add(FILES_URL, UNAUTHORIZED, UNAUTHORIZED)

    with pytest.raises(ApiError) as excinfo:
        make_client(stub, access_token="expired").list_files()

    assert excinfo.value.http_status == 401
    assert excinfo.value.error_code == "InvalidAccessToken"
    assert len(stub.calls(TOKEN_URL)) == 1
    assert len(stub.calls(FILES_URL)) == 2


def test_list_files_without_files_field():
    stub = StubHttpClient()
    stub.add(FILES_URL, json_response({"items": []}))
    with pytest.raises(UnsupportedResponse) as excinfo:
        make_client(stub, access_token="tok").list_files()
    assert excinfo.value.message == 'No required field "files" in response body'


def test_upload_returns_true_on_no_content():
    stub = StubHttpClient()
    stub.add(FILES_URL, HttpResponse(status_code=204), method="PUT")
    assert make_client(stub, access_token="tok").upload_file(io.BytesIO(b"data"), file_name="a.dat") is True
    assert stub.requests[0].url == f"{FILES_URL}?fileName=a.dat"


def test_upload_retry_resends_same_content():
    stub = StubHttpClient()
    stub.add(TOKEN_URL, token_response("fresh"), method="POST")
    stub.add(FILES_URL, UNAUTHORIZED, HttpResponse(status_code=204), method="PUT")

    assert make_client(stub, access_token="expired").upload_file(io.BytesIO(b"PAYLOAD")) is True

    uploads = stub.calls(FILES_URL, method="PUT")
    assert len(uploads) == 2
    assert all(b"PAYLOAD" in r.body for r in uploads)
    assert uploads[1].header("Authorization") == "Bearer fresh"


def test_upload_duplicate_raises_api_error():
    stub = StubHttpClient()
    body = {
        "error": "FileAlreadyExists",
        "message": "The specified foobar.eame already exists",
        "timestamp": "2022-04-27 15:39",
        "path": "/dbs/dealer/test01/files",
        "status": 409,
    }
    stub.add(FILES_URL, json_response(body, status_code=409), method="PUT")

    with pytest.raises(ApiError) as excinfo:
        make_client(stub, access_token="tok").upload_file(io.BytesIO(b"data"), file_name="foobar.eame")

    assert excinfo.value.error_code == "FileAlreadyExists"
    assert excinfo.value.message == "The specified foobar.eame already exists"
    assert excinfo.value.http_status == 409


def test_upload_unexpected_success_status_returns_false():
    stub = StubHttpClient()
    stub.add(FILES_URL, json_response({"name": "a.dat"}, status_code=200), method="PUT")
    assert make_client(stub, access_token="tok").upload_file(io.BytesIO(b"data")) is False


def test_upload_rejects_invalid_source_before_sending():
    stub = StubHttpClient()
    with pytest.raises(ValueError):
        make_client(stub, access_token="tok").upload_file(object())
    assert stub.requests == []


def test_download_returns_raw_bytes():
    stub = StubHttpClient()
    stub.add(
        f"{FILES_URL}/order.dat",
        HttpResponse(status_code=200, headers={"content-type": "Application/Octet-Stream"}, content=b"\x00raw\xff"),
    )
    assert make_client(stub, access_token="tok").download_file("order.dat") == b"\x00raw\xff"


def test_download_error_is_decoded():
    stub = StubHttpClient()
    stub.add(f"{FILES_URL}/missing.dat", json_response({"error": "FileNotFound", "message": "No such file"}, status_code=404))
    with pytest.raises(ApiError) as excinfo:
        make_client(stub, access_token="tok").download_file("missing.dat")
    assert excinfo.value.error_code == "FileNotFound"
    assert excinfo.value.kind is ErrorKind.API


def test_download_json_success_is_not_returned_as_content():
    stub = StubHttpClient()
    stub.add(f"{FILES_URL}/order.dat", json_response({"name": "order.dat"}))
    with pytest.raises(UnsupportedResponse):
        make_client(stub, access_token="tok").download_file("order.dat")


def test_download_wrong_content_type_with_ok_status():
    stub = StubHttpClient()
    stub.add(f"{FILES_URL}/order.dat", HttpResponse(status_code=200, headers={"content-type": "text/plain"}, content=b"x"))
    with pytest.raises(UnsupportedResponse) as excinfo:
        make_client(stub, access_token="tok").download_file("order.dat")
    assert excinfo.value.message == "Provided response isn't JSON content type. text/plain"


def test_get_file_details_returns_mapping():
    details = {"name": "foobar.dat", "size": "0.02KB", "status": "Available", "lastAccessed": "2022-05-03 04:04", "links": []}
    stub = StubHttpClient()
    stub.add(f"{FILES_URL}/foobar.dat/details", json_response(details))
    assert make_client(stub, access_token="tok").get_file_details("foobar.dat") == details


def test_transport_failure_is_not_retried():
    stub = StubHttpClient()
    stub.add(FILES_URL, httpx.ConnectError("connection refused"))
    with pytest.raises(TransportError) as excinfo:
        make_client(stub, access_token="tok").list_files()
    err = excinfo.value
    assert err.failure is TransportFailure.NETWORK
    assert err.code == 500
    assert err.message == "HTTP request failed due network issues, check internet connection."
    assert isinstance(err.cause, httpx.ConnectError)
    assert len(stub.requests) == 1


def test_context_manager_closes_transport():
    stub = StubHttpClient()
    with make_client(stub) as client:
        assert client.http_client is stub
    assert stub.closed is True
