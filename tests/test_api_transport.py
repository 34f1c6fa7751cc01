from unittest.mock import MagicMock, patch

import httpx
import pytest

from ieltsmock.core.exceptions import ApiError, AuthenticationError, ResponseParseError, TransportError
from ieltsmock.transport.http import ApiTransport
from ieltsmock.transport.types import ApiAuth, ApiConnection


def test_request_returns_decoded_json_and_drops_none_params(transport, http_client, make_response):
    http_client.request.return_value = make_response({"success": True, "data": []})

    data = transport.request("GET", "/test-management/get-all", params={"page": 0, "size": 10, "name": None})

    http_client.request.assert_called_once_with(
        "GET", "/test-management/get-all", params={"page": 0, "size": 10}
    )
    assert data == {"success": True, "data": []}


def test_request_attaches_stored_token(transport, http_client, token_store, make_response):
    token_store.store("jwt-token")
    http_client.request.return_value = make_response({"success": True})

    transport.request("POST", "/mock-submission/start-mock", json={"testId": "t1"})

    http_client.request.assert_called_once_with(
        "POST",
        "/mock-submission/start-mock",
        json={"testId": "t1"},
        headers={"Authorization": "Bearer jwt-token"},
    )


def test_request_empty_body_returns_none(transport, http_client, make_response):
    http_client.request.return_value = make_response(None)

    assert transport.request("DELETE", "/test-management/delete/t1") is None


def test_unauthorized_clears_token_and_raises(transport, http_client, token_store, make_error):
    token_store.store("expired", {"username": "amy"})
    http_client.request.return_value = make_error(401, {"success": False, "reason": "Token expired"})

    with pytest.raises(AuthenticationError) as exc:
        transport.request("GET", "/auth/me")

    assert exc.value.status_code == 401
    assert exc.value.reason == "Token expired"
    assert token_store.get_token() is None
    assert token_store.get_user() is None


def test_http_error_carries_status_and_reason(transport, http_client, make_error):
    http_client.request.return_value = make_error(404, {"success": False, "reason": "Test not found"})

    with pytest.raises(ApiError) as exc:
        transport.request("DELETE", "/test-management/delete/missing")

    assert not isinstance(exc.value, AuthenticationError)
    assert exc.value.status_code == 404
    assert exc.value.reason == "Test not found"
    assert "HTTP 404" in str(exc.value)


def test_http_error_without_json_body(transport, http_client, make_error):
    http_client.request.return_value = make_error(502)

    with pytest.raises(ApiError) as exc:
        transport.request("GET", "/auth/me")

    assert exc.value.status_code == 502
    assert exc.value.reason is None


def test_network_failure_raises_transport_error(transport, http_client):
    http_client.request.side_effect = httpx.ConnectError("connection refused")

    with pytest.raises(TransportError):
        transport.request("GET", "/auth/me")


def test_non_json_body_raises_parse_error(transport, http_client, make_response):
    response = make_response(content=b"<html>oops</html>")
    response.json.side_effect = ValueError("not json")
    response.text = "<html>oops</html>"
    response.headers = {"content-type": "text/html"}
    http_client.request.return_value = response

    with pytest.raises(ResponseParseError) as exc:
        transport.request("GET", "/auth/me")

    assert "text/html" in str(exc.value)
    assert "<html>oops</html>" in str(exc.value)


def test_download_returns_raw_bytes(transport, http_client, make_response):
    http_client.request.return_value = make_response(content=b"\x00ID3audio")

    assert transport.download("/file/download/f1") == b"\x00ID3audio"


def test_url_for_joins_base_path():
    conn = ApiConnection(base_url="https://example.test/ielts-mock-main/")
    t = ApiTransport(conn, client=MagicMock(spec=httpx.Client))

    assert t.url_for("/file/download/f1") == "https://example.test/ielts-mock-main/file/download/f1"


def test_transport_builds_client_with_static_auth():
    conn = ApiConnection(
        base_url="https://example.test",
        timeout_seconds=5.0,
        headers={"Accept": "application/json"},
        auth=ApiAuth(kind="bearer", bearer_token="static"),
    )
    client_instance = MagicMock(spec=httpx.Client)

    with patch("httpx.Client", return_value=client_instance) as client_ctor:
        with ApiTransport(conn):
            pass

    _, kwargs = client_ctor.call_args
    assert kwargs["base_url"] == "https://example.test"
    assert kwargs["timeout"] == 5.0
    assert kwargs["headers"] == {"Accept": "application/json", "Authorization": "Bearer static"}
    client_instance.close.assert_called_once()


def test_transport_does_not_close_injected_client(http_client):
    ApiTransport(ApiConnection(base_url="https://example.test"), client=http_client).close()

    http_client.close.assert_not_called()
