"""Extract the session token and user from authentication responses.

``/auth/sign-in`` and ``/auth/sign-up`` have returned the token as a bare
string, as ``token``, as ``data`` or as ``data.token``; user details may be
nested, flattened, or only present as JWT claims.
"""

from __future__ import annotations

import base64
import binascii
import json
from dataclasses import asdict, dataclass
from typing import Any, Dict, Literal, Optional

from ieltsmock.core.exceptions import ResponseParseError, TokenNotFoundError, TokenParseError
from ieltsmock.core.json_utils import first_present
from ieltsmock.core.logger import get_logger

logger = get_logger(__name__)

Role = Literal["USER", "ADMIN"]


def normalize_role(role: Any = None, roles: Any = None) -> Role:
    candidates = []
    if isinstance(role, str):
        candidates.append(role)
    if isinstance(roles, (list, tuple)):
        candidates.extend(r for r in roles if isinstance(r, str))
    for candidate in candidates:
        if candidate.upper() == "ADMIN":
            return "ADMIN"
    return "USER"


@dataclass(frozen=True)
class AuthUser:
    id: str = ""
    first_name: str = ""
    last_name: str = ""
    username: str = ""
    role: Role = "USER"

    @property
    def is_admin(self) -> bool:
        return self.role == "ADMIN"

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AuthUser":
        return cls(
            id=str(data.get("id") or ""),
            first_name=data.get("first_name") or "",
            last_name=data.get("last_name") or "",
            username=data.get("username") or "",
            role=normalize_role(data.get("role")),
        )

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> "AuthUser":
        """Build from an API user object (``UserDto``, ``UserMeDto`` or a flat user)."""
        first_name = first_present(data, "firstName", "first_name") or ""
        last_name = first_present(data, "lastName", "last_name") or ""
        full_name = data.get("fullName")
        if full_name and not (first_name or last_name):
            first_name, _, last_name = str(full_name).partition(" ")
        return cls(
            id=str(data.get("id") or ""),
            first_name=first_name,
            last_name=last_name,
            username=data.get("username") or "",
            role=normalize_role(data.get("role"), data.get("roles")),
        )


@dataclass(frozen=True)
class AuthSession:
    token: str
    user: AuthUser


def decode_jwt_claims(token: str) -> Dict[str, Any]:
    """Decode the payload segment of a JWT without verifying the signature."""
    parts = token.split(".")
    if len(parts) < 2 or not parts[1]:
        raise TokenParseError("Token is not a JWT")
    segment = parts[1]
    segment += "=" * (-len(segment) % 4)
    try:
        claims = json.loads(base64.urlsafe_b64decode(segment.encode("ascii")))
    except (binascii.Error, ValueError, UnicodeEncodeError) as exc:
        raise TokenParseError(f"Failed to decode JWT payload: {exc}") from exc
    if not isinstance(claims, dict):
        raise TokenParseError("JWT payload is not an object")
    return claims


def _user_from_claims(claims: Dict[str, Any]) -> AuthUser:
    authorities = claims.get("authorities")
    first_authority = authorities[0] if isinstance(authorities, list) and authorities else None
    if isinstance(first_authority, dict):
        first_authority = first_authority.get("authority")
    return AuthUser(
        id=str(first_present(claims, "sub", "userId", "id") or ""),
        first_name=first_present(claims, "firstName", "first_name") or "",
        last_name=first_present(claims, "lastName", "last_name") or "",
        username=first_present(claims, "username", "sub") or "",
        role=normalize_role(claims.get("role") or first_authority, claims.get("roles")),
    )


def _extract_token(payload: Any) -> Optional[str]:
    if isinstance(payload, str):
        return payload or None
    if not isinstance(payload, dict):
        return None
    if payload.get("token"):
        return payload["token"]
    data = payload.get("data")
    if isinstance(data, str) and data:
        return data
    if isinstance(data, dict) and data.get("token"):
        return data["token"]
    return None


def _extract_user(payload: Any) -> Optional[AuthUser]:
    if not isinstance(payload, dict):
        return None
    data = payload.get("data") if isinstance(payload.get("data"), dict) else {}
    if isinstance(payload.get("user"), dict):
        return AuthUser.from_payload(payload["user"])
    if isinstance(data.get("user"), dict):
        return AuthUser.from_payload(data["user"])
    if payload.get("id"):
        return AuthUser.from_payload(payload)
    if data.get("id"):
        return AuthUser.from_payload(data)
    return None


def parse_auth_response(payload: Any) -> AuthSession:
    token = _extract_token(payload)
    if not token:
        raise TokenNotFoundError("No token found in authentication response")

    user = _extract_user(payload)
    if user is None or not user.id:
        try:
            user = _user_from_claims(decode_jwt_claims(token))
        except TokenParseError as exc:
            logger.warning(f"Could not read user from token: {exc}")
            user = user or AuthUser()

    logger.debug(f"Extracted token {token[:10]}... for user {user.username!r}")
    return AuthSession(token=token, user=user)


def parse_me_response(payload: Any) -> AuthUser:
    if isinstance(payload, dict):
        if isinstance(payload.get("user"), dict):
            return AuthUser.from_payload(payload["user"])
        if isinstance(payload.get("data"), dict):
            return AuthUser.from_payload(payload["data"])
        if payload.get("id"):
            return AuthUser.from_payload(payload)
    raise ResponseParseError("Invalid response from /auth/me")
