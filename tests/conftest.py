import json
from unittest.mock import MagicMock

import httpx
import pytest

from ieltsmock.core.token_store import InMemoryTokenStore
from ieltsmock.transport.http import ApiTransport
from ieltsmock.transport.types import ApiAuth, ApiConnection


def _make_response(payload=None, *, status_code=200, content=None):
    response = MagicMock()
    response.status_code = status_code
    response.raise_for_status.return_value = None
    response.json.return_value = payload
    if content is None:
        content = b"" if payload is None else json.dumps(payload).encode("utf-8")
    response.content = content
    response.headers = {"content-type": "application/json"}
    return response


def _make_error(status_code, payload=None):
    error_response = MagicMock(status_code=status_code)
    if payload is None:
        error_response.json.side_effect = ValueError("no body")
    else:
        error_response.json.return_value = payload

    response = _make_response()
    response.status_code = status_code
    response.raise_for_status.side_effect = httpx.HTTPStatusError(
        "boom",
        request=MagicMock(),
        response=error_response,
    )
    return response


@pytest.fixture
def make_response():
    return _make_response


@pytest.fixture
def make_error():
    return _make_error


@pytest.fixture
def http_client():
    return MagicMock(spec=httpx.Client)


@pytest.fixture
def token_store():
    return InMemoryTokenStore()


@pytest.fixture
def transport(http_client, token_store):
    conn = ApiConnection(
        base_url="https://example.test/ielts-mock-main",
        timeout_seconds=1.0,
        headers={},
        auth=ApiAuth(kind="none"),
    )
    return ApiTransport(conn, token_store=token_store, client=http_client)
