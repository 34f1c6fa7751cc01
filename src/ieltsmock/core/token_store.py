from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, Union

from ieltsmock.core.logger import get_logger

logger = get_logger(__name__)


class TokenStore(Protocol):
    def get_token(self) -> Optional[str]:
        ...

    def get_user(self) -> Optional[Dict[str, Any]]:
        ...

    def store(self, token: str, user: Optional[Dict[str, Any]] = None) -> None:
        ...

    def clear(self) -> None:
        ...


class InMemoryTokenStore:
    def __init__(self, token: Optional[str] = None, user: Optional[Dict[str, Any]] = None):
        self._token = token
        self._user = dict(user) if user else None

    def get_token(self) -> Optional[str]:
        return self._token

    def get_user(self) -> Optional[Dict[str, Any]]:
        return dict(self._user) if self._user else None

    def store(self, token: str, user: Optional[Dict[str, Any]] = None) -> None:
        self._token = token
        self._user = dict(user) if user else None

    def clear(self) -> None:
        self._token = None
        self._user = None


class FileTokenStore:
    """Persist the session as ``{"token": ..., "user": {...}}`` in a JSON file.

    Lets separate CLI invocations share one sign-in.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except ValueError:
            logger.warning(f"Ignoring unreadable token file: {self.path}")
            return {}
        return data if isinstance(data, dict) else {}

    def get_token(self) -> Optional[str]:
        return self._read().get("token") or None

    def get_user(self) -> Optional[Dict[str, Any]]:
        user = self._read().get("user")
        return user if isinstance(user, dict) else None

    def store(self, token: str, user: Optional[Dict[str, Any]] = None) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"token": token, "user": user}), encoding="utf-8")

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()
