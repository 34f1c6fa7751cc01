from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Annotated, Any, Dict, Literal, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, Field, PositiveFloat, ValidationError, model_validator

from ieltsmock.core.exceptions import ConfigError

DEFAULT_BASE_URL = "https://mock.fleetoneld.com/ielts-mock-main"

ENV_BASE_URL = "IELTS_MOCK_BASE_URL"
ENV_TIMEOUT = "IELTS_MOCK_TIMEOUT"
ENV_TOKEN = "IELTS_MOCK_TOKEN"
ENV_TOKEN_FILE = "IELTS_MOCK_TOKEN_FILE"


# -----------------
# Auth
# -----------------


class ApiAuthNoneConfig(BaseModel):
    kind: Literal["none"] = "none"


class ApiAuthBearerConfig(BaseModel):
    """Static bearer token. Tokens obtained via sign-in go to the token store instead."""

    kind: Literal["bearer"] = "bearer"

    bearer_token: str


class ApiAuthBasicConfig(BaseModel):
    kind: Literal["basic"] = "basic"

    username: str
    password: str


class ApiAuthApiKeyConfig(BaseModel):
    kind: Literal["api_key"] = "api_key"

    api_key_name: str
    api_key_value: str


ApiAuthConfig = Annotated[
    Union[
        ApiAuthNoneConfig,
        ApiAuthBearerConfig,
        ApiAuthBasicConfig,
        ApiAuthApiKeyConfig,
    ],
    Field(discriminator="kind"),
]


# -----------------
# Client
# -----------------


class ClientConfig(BaseModel):
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: PositiveFloat = 30.0
    headers: Dict[str, str] = Field(default_factory=lambda: {"Accept": "application/json"})

    auth: ApiAuthConfig = Field(default_factory=ApiAuthNoneConfig)

    # Raise UnsuccessfulResponseError when an envelope reports success=false
    raise_on_failure: bool = True

    # Where sign-in persists the session; None keeps it in memory
    token_file: Optional[str] = None

    @model_validator(mode="after")
    def _validate_base_url(self) -> "ClientConfig":
        if not self.base_url.startswith(("http://", "https://")):
            raise ValueError(f"base_url must be an http(s) URL, got {self.base_url!r}")
        self.base_url = self.base_url.rstrip("/")
        return self

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides: Any) -> "ClientConfig":
        env = os.environ if environ is None else environ
        data: Dict[str, Any] = {}
        if env.get(ENV_BASE_URL):
            data["base_url"] = env[ENV_BASE_URL]
        if env.get(ENV_TIMEOUT):
            data["timeout_seconds"] = env[ENV_TIMEOUT]
        if env.get(ENV_TOKEN):
            data["auth"] = {"kind": "bearer", "bearer_token": env[ENV_TOKEN]}
        if env.get(ENV_TOKEN_FILE):
            data["token_file"] = env[ENV_TOKEN_FILE]
        data.update(overrides)
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(f"Invalid client configuration from environment: {exc}") from exc


def load_config(
    config_path: Optional[Union[str, Path]] = None,
    config_dict: Optional[Dict[str, Any]] = None,
) -> ClientConfig:
    """
    Load client configuration.

    Can be called with either:
    - A config file path (JSON/YAML)
    - A config dictionary (programmatic)
    - Neither, in which case the environment is read

    Raises:
        ConfigError: If the file is missing, unreadable or fails validation
    """
    if config_dict is not None:
        config = config_dict
    elif config_path is not None:
        config_file = Path(config_path)
        if not config_file.exists():
            raise ConfigError(f"Config file not found: {config_path}")

        with open(config_file, "r", encoding="utf-8") as f:
            try:
                if config_file.suffix == ".json":
                    config = json.load(f)
                elif config_file.suffix in (".yaml", ".yml"):
                    config = yaml.safe_load(f)
                else:
                    raise ConfigError(
                        f"Unsupported config format: {config_file.suffix}. Use .json or .yaml"
                    )
            except (ValueError, yaml.YAMLError) as exc:
                raise ConfigError(f"Could not parse config file {config_path}: {exc}") from exc
    else:
        return ClientConfig.from_env()

    if not isinstance(config, dict):
        raise ConfigError("Configuration must be a mapping")

    try:
        return ClientConfig.model_validate(config)
    except ValidationError as exc:
        raise ConfigError(f"Invalid client configuration: {exc}") from exc
