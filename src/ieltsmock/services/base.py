from __future__ import annotations

from typing import Any, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ieltsmock.core.exceptions import ResponseParseError, UnsuccessfulResponseError
from ieltsmock.core.logger import get_logger
from ieltsmock.transport.http import ApiTransport
from ieltsmock.transport.types import HttpMethod

logger = get_logger(__name__)

M = TypeVar("M", bound=BaseModel)


def as_envelope(payload: Any) -> Any:
    """Wrap payloads that are not ``ResponseDto`` envelopes.

    Some endpoints answer with the bare entity (or nothing at all); those are
    treated as a successful envelope carrying the payload as ``data``.
    """
    if payload is None:
        return {"success": True}
    if isinstance(payload, dict) and "success" in payload:
        return payload
    return {"success": True, "data": payload}


class BaseService:
    def __init__(self, transport: ApiTransport, *, raise_on_failure: bool = True):
        self.transport = transport
        self.raise_on_failure = raise_on_failure

    def _validate(self, model: Type[M], payload: Any, endpoint: str) -> M:
        try:
            result = model.model_validate(payload)
        except ValidationError as exc:
            raise ResponseParseError(f"Unexpected response shape from {endpoint}: {exc}") from exc

        if self.raise_on_failure and getattr(result, "success", True) is False:
            reason = getattr(result, "reason", None)
            raise UnsuccessfulResponseError(
                reason or f"{endpoint} reported failure",
                reason=reason,
                payload=payload,
            )
        return result

    def _call(
        self,
        model: Type[M],
        method: HttpMethod,
        endpoint: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        json: Any = None,
        files: Any = None,
    ) -> M:
        payload = self.transport.request(method, endpoint, params=params, json=json, files=files)
        return self._validate(model, as_envelope(payload), endpoint)
