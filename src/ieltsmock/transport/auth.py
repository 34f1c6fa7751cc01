from __future__ import annotations

import base64
from typing import Dict

from ieltsmock.models.client_config import ApiAuthConfig
from ieltsmock.transport.types import ApiAuth


def build_auth_headers(auth: ApiAuth) -> Dict[str, str]:
    if auth.kind == "none":
        return {}

    if auth.kind == "api_key":
        if not auth.api_key_name or not auth.api_key_value:
            raise ValueError("api_key auth requires api_key_name and api_key_value")
        return {auth.api_key_name: auth.api_key_value}

    if auth.kind == "bearer":
        if not auth.bearer_token:
            raise ValueError("bearer auth requires bearer_token")
        return {"Authorization": f"Bearer {auth.bearer_token}"}

    if auth.kind == "basic":
        if not auth.username or not auth.password:
            raise ValueError("basic auth requires username and password")
        token = base64.b64encode(f"{auth.username}:{auth.password}".encode("utf-8")).decode("ascii")
        return {"Authorization": f"Basic {token}"}

    raise ValueError(f"Unsupported auth kind: {auth.kind!r}")


def auth_from_config(auth: ApiAuthConfig) -> ApiAuth:
    """Translate the pydantic auth config into the transport's frozen ApiAuth."""
    kind = auth.kind

    if kind == "none":
        return ApiAuth(kind="none")

    if kind == "api_key":
        return ApiAuth(kind="api_key", api_key_name=auth.api_key_name, api_key_value=auth.api_key_value)

    if kind == "bearer":
        return ApiAuth(kind="bearer", bearer_token=auth.bearer_token)

    if kind == "basic":
        return ApiAuth(kind="basic", username=auth.username, password=auth.password)

    raise ValueError(f"Unsupported api auth kind: {kind!r}")
