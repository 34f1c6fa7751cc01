"""ieltsmock.

Typed Python client for the IELTS mock testing API.

Request/response models mirror the API's OpenAPI document; services wrap
each API area (auth, test management, listening audio, files, mock
submission, mock results, user management).
"""

from ieltsmock.client import IeltsMockClient
from ieltsmock.models.client_config import ClientConfig, load_config

__version__ = "0.1.0"

__all__ = [
    "ClientConfig",
    "IeltsMockClient",
    "load_config",
]
