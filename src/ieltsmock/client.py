from __future__ import annotations

from typing import Any, Optional

import httpx

from ieltsmock.core.token_store import FileTokenStore, InMemoryTokenStore, TokenStore
from ieltsmock.models.client_config import ClientConfig
from ieltsmock.services import (
    AuthService,
    FileService,
    ListeningAudioService,
    MockResultService,
    MockSubmissionService,
    TestManagementService,
    UserManagementService,
)
from ieltsmock.transport.auth import auth_from_config
from ieltsmock.transport.http import ApiTransport
from ieltsmock.transport.types import ApiConnection


def build_api_connection(cfg: ClientConfig) -> ApiConnection:
    return ApiConnection(
        base_url=cfg.base_url,
        timeout_seconds=float(cfg.timeout_seconds),
        headers=dict(cfg.headers),
        auth=auth_from_config(cfg.auth),
    )


def build_token_store(cfg: ClientConfig) -> TokenStore:
    if cfg.token_file:
        return FileTokenStore(cfg.token_file)
    return InMemoryTokenStore()


class IeltsMockClient:
    """Entry point bundling one service per API area over a shared transport.

    Example:
        >>> with IeltsMockClient() as api:
        ...     api.auth.sign_in(SignInDto(username="admin", password="secret"))
        ...     tests = api.tests.get_all_tests(page=0, size=20).data
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        token_store: Optional[TokenStore] = None,
        client: Optional[httpx.Client] = None,
    ):
        self.config = config or ClientConfig()
        self.transport = ApiTransport(
            build_api_connection(self.config),
            token_store=token_store or build_token_store(self.config),
            client=client,
        )

        strict = self.config.raise_on_failure
        self.auth = AuthService(self.transport)
        self.tests = TestManagementService(self.transport, raise_on_failure=strict)
        self.audio = ListeningAudioService(self.transport, raise_on_failure=strict)
        self.files = FileService(self.transport, raise_on_failure=strict)
        self.mock_submission = MockSubmissionService(self.transport, raise_on_failure=strict)
        self.mock_results = MockResultService(self.transport, raise_on_failure=strict)
        self.users = UserManagementService(self.transport, raise_on_failure=strict)

    @classmethod
    def from_env(cls, **kwargs: Any) -> "IeltsMockClient":
        return cls(ClientConfig.from_env(), **kwargs)

    def __enter__(self) -> "IeltsMockClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self.transport.close()
