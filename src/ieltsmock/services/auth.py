from __future__ import annotations

from typing import Optional

from ieltsmock.core.auth_parsing import AuthSession, AuthUser, Role, parse_auth_response, parse_me_response
from ieltsmock.core.logger import get_logger
from ieltsmock.core.token_store import InMemoryTokenStore, TokenStore
from ieltsmock.models.api_types import SignInDto, SignUpDto
from ieltsmock.transport.http import ApiTransport

logger = get_logger(__name__)


class AuthService:
    """Sign-up, sign-in and session bookkeeping.

    The session (token + user) lives in the transport's token store, so every
    other service picks up the token automatically.
    """

    def __init__(self, transport: ApiTransport):
        self.transport = transport
        if transport.token_store is None:
            transport.token_store = InMemoryTokenStore()

    @property
    def store(self) -> TokenStore:
        return self.transport.token_store

    def _authenticate(self, endpoint: str, body: dict) -> AuthSession:
        payload = self.transport.request("POST", endpoint, json=body)
        session = parse_auth_response(payload)
        self.store.store(session.token, session.user.to_dict())
        logger.info(f"Authenticated as {session.user.username or '<unknown>'} ({session.user.role})")
        return session

    def sign_up(self, data: SignUpDto) -> AuthSession:
        return self._authenticate("/auth/sign-up", data.to_wire())

    def sign_in(self, data: SignInDto) -> AuthSession:
        return self._authenticate("/auth/sign-in", data.to_wire())

    def get_me(self) -> AuthUser:
        payload = self.transport.request("GET", "/auth/me")
        return parse_me_response(payload)

    def sign_out(self) -> None:
        self.store.clear()

    def is_authenticated(self) -> bool:
        return bool(self.store.get_token())

    def get_token(self) -> Optional[str]:
        return self.store.get_token()

    def get_user(self) -> Optional[AuthUser]:
        user = self.store.get_user()
        return AuthUser.from_dict(user) if user else None

    def has_role(self, role: Role) -> bool:
        user = self.get_user()
        return user is not None and user.role == role

    def is_admin(self) -> bool:
        return self.has_role("ADMIN")
