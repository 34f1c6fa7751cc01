from ieltsmock.transport.auth import build_auth_headers
from ieltsmock.transport.http import ApiTransport
from ieltsmock.transport.types import ApiAuth, ApiConnection

__all__ = ["ApiAuth", "ApiConnection", "ApiTransport", "build_auth_headers"]
