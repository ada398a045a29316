"""Startup configuration: a small JSON document.

Lookup order for the file: explicit path, ``$GRAPHQL_MCP_CONFIG``,
``./config.json``.
"""
from __future__ import annotations

import json
import os
import pathlib
from typing import Annotated, Any, Dict, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    ValidationError,
    ValidationInfo,
    field_validator,
)

from .errors import ConfigInvalid, ConfigMissing

__all__ = ["Config", "load_config", "resolve_config_path", "CONFIG_ENV_VAR"]

CONFIG_ENV_VAR = "GRAPHQL_MCP_CONFIG"
DEFAULT_CONFIG_NAME = "config.json"
DEFAULT_SERVER_NAME = "graphql-mcp-server"
DEFAULT_SERVER_VERSION = "1.0.0"

_EXAMPLE = {
    "endpoint": "https://api.example.com/graphql",
    "operationsDir": "./operations",
    "headers": {"Authorization": "Bearer YOUR_TOKEN"},
}


class Config(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    endpoint: str
    operations_dir: pathlib.Path = Field(alias="operationsDir")
    headers: Dict[str, str] = Field(default_factory=dict)
    name: str = DEFAULT_SERVER_NAME
    version: str = DEFAULT_SERVER_VERSION
    timeout: Optional[Annotated[StrictFloat, Field(gt=0)]] = None
    strict_variables: StrictBool = Field(default=False, alias="strictVariables")

    @field_validator("endpoint")
    @classmethod
    def _non_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v.strip()

    @field_validator("headers", mode="before")
    @classmethod
    def _no_headers(cls, v: Any) -> Any:
        return {} if v is None else v

    @field_validator("name", "version", mode="before")
    @classmethod
    def _default_when_empty(cls, v: Any, info: ValidationInfo) -> Any:
        if v is None or v == "":
            return DEFAULT_SERVER_NAME if info.field_name == "name" else DEFAULT_SERVER_VERSION
        return v

    @field_validator("operations_dir", mode="before")
    @classmethod
    def _dir_not_blank(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            raise ValueError("must not be blank")
        return v

    @field_validator("operations_dir")
    @classmethod
    def _resolve_dir(cls, v: pathlib.Path, info: ValidationInfo) -> pathlib.Path:
        # relative to the config file's directory when one is known
        v = v.expanduser()
        base_dir = (info.context or {}).get("base_dir")
        if not v.is_absolute() and base_dir is not None:
            v = pathlib.Path(base_dir) / v
        return v

    @classmethod
    def from_dict(cls, raw: Any, base_dir: Optional[pathlib.Path] = None) -> "Config":
        """Validate a parsed config document, raising :class:`ConfigInvalid`."""
        if not isinstance(raw, dict):
            raise ConfigInvalid("Configuration must be a JSON object")
        try:
            return cls.model_validate(raw, context={"base_dir": base_dir})
        except ValidationError as exc:
            raise ConfigInvalid(_describe(exc)) from exc


def _describe(exc: ValidationError) -> str:
    lines = []
    for err in exc.errors():
        field = str(err["loc"][0]) if err["loc"] else "config"
        if err["type"] == "missing":
            lines.append(f'Configuration must include "{field}" field')
        else:
            lines.append(f'"{field}": {err["msg"]}')
    return "\n".join(lines)


def resolve_config_path(path: Union[str, pathlib.Path, None] = None) -> pathlib.Path:
    if path:
        return pathlib.Path(path)
    env = os.environ.get(CONFIG_ENV_VAR)
    if env:
        return pathlib.Path(env)
    return pathlib.Path.cwd() / DEFAULT_CONFIG_NAME


def load_config(path: Union[str, pathlib.Path, None] = None) -> Config:
    """Read and validate the configuration file.

    Raises :class:`ConfigMissing` when the file does not exist and
    :class:`ConfigInvalid` for anything wrong with its contents.
    """
    cfg_path = resolve_config_path(path)
    if not cfg_path.is_file():
        raise ConfigMissing(str(cfg_path), json.dumps(_EXAMPLE, indent=2))

    try:
        with open(cfg_path, "r", encoding="utf-8") as fh:
            raw = json.load(fh)
    except json.JSONDecodeError as exc:
        raise ConfigInvalid(f"Configuration file {cfg_path} is not valid JSON: {exc}") from exc
    except (UnicodeDecodeError, OSError) as exc:
        raise ConfigInvalid(f"Cannot read configuration file {cfg_path}: {exc}") from exc

    return Config.from_dict(raw, base_dir=cfg_path.resolve().parent)
