from __future__ import annotations

import uuid
from typing import Any, Dict, Mapping, Optional

import httpx

from ieltsmock.core.exceptions import ApiError, AuthenticationError, ResponseParseError, TransportError
from ieltsmock.core.logger import get_logger, push_request_id, reset_request_id
from ieltsmock.core.token_store import TokenStore
from ieltsmock.transport.auth import build_auth_headers
from ieltsmock.transport.types import ApiConnection, HttpMethod

logger = get_logger(__name__)


class ApiTransport:
    """Thin httpx wrapper shared by all services.

    Static headers and configured auth are attached to the client once. A
    token from ``token_store`` (set by sign-in) is attached per request so
    that signing in or out takes effect immediately.
    """

    def __init__(
        self,
        connection: ApiConnection,
        *,
        token_store: Optional[TokenStore] = None,
        client: Optional[httpx.Client] = None,
    ):
        self.connection = connection
        self.token_store = token_store

        headers = dict(connection.headers)
        headers.update(build_auth_headers(connection.auth))

        self._owns_client = client is None
        self._client = client or httpx.Client(
            base_url=connection.base_url,
            timeout=connection.timeout_seconds,
            headers=headers,
        )

    def __enter__(self) -> "ApiTransport":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def url_for(self, endpoint: str) -> str:
        return f"{self.connection.base_url.rstrip('/')}/{endpoint.lstrip('/')}"

    def _token_headers(self) -> Dict[str, str]:
        token = self.token_store.get_token() if self.token_store is not None else None
        if not token:
            return {}
        return {"Authorization": f"Bearer {token}"}

    def _raise_http_error(self, exc: httpx.HTTPStatusError, method: str, endpoint: str) -> None:
        status = exc.response.status_code
        try:
            payload: Any = exc.response.json()
        except ValueError:
            payload = None
        reason = payload.get("reason") if isinstance(payload, dict) else None

        if status == 401:
            # Token expired or invalid
            if self.token_store is not None:
                self.token_store.clear()
            logger.warning(f"{method} {endpoint} rejected with 401, stored session cleared")
            raise AuthenticationError(
                reason or "Authentication required",
                status_code=status,
                reason=reason,
                payload=payload,
            ) from exc

        logger.warning(f"{method} {endpoint} failed with HTTP {status}: {reason or '-'}")
        message = f"{method} {endpoint} failed with HTTP {status}"
        if reason:
            message += f": {reason}"
        raise ApiError(message, status_code=status, reason=reason, payload=payload) from exc

    def send(
        self,
        method: HttpMethod,
        endpoint: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        json: Any = None,
        files: Any = None,
    ) -> httpx.Response:
        kwargs: Dict[str, Any] = {}
        query = {k: v for k, v in (params or {}).items() if v is not None}
        if query:
            kwargs["params"] = query
        if json is not None:
            kwargs["json"] = json
        if files is not None:
            kwargs["files"] = files
        headers = self._token_headers()
        if headers:
            kwargs["headers"] = headers

        ctx = push_request_id(uuid.uuid4().hex[:8])
        try:
            logger.debug(f"{method} {endpoint} params={query or '-'}")
            try:
                resp = self._client.request(method, endpoint, **kwargs)
            except httpx.RequestError as exc:
                logger.warning(f"{method} {endpoint} could not be sent: {exc}")
                raise TransportError(f"{method} {endpoint} failed: {exc}") from exc

            try:
                resp.raise_for_status()
            except httpx.HTTPStatusError as exc:
                self._raise_http_error(exc, method, endpoint)
            return resp
        finally:
            reset_request_id(ctx)

    def request(
        self,
        method: HttpMethod,
        endpoint: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        json: Any = None,
        files: Any = None,
    ) -> Any:
        """Send a request and return the decoded JSON body (``None`` for an empty body)."""
        resp = self.send(method, endpoint, params=params, json=json, files=files)
        if not resp.content:
            return None

        try:
            return resp.json()
        except ValueError as e:
            response_text = resp.text[:500]
            content_type = resp.headers.get("content-type", "unknown")
            raise ResponseParseError(
                f"Failed to parse API response as JSON. "
                f"Status: {resp.status_code}, Content-Type: {content_type}. "
                f"Response preview: {response_text}"
            ) from e

    def download(self, endpoint: str, *, params: Optional[Mapping[str, Any]] = None) -> bytes:
        return self.send("GET", endpoint, params=params).content
