import json

import pytest
from pydantic import ValidationError

from graphql_ops_mcp import Config, ConfigInvalid, ConfigMissing, load_config
from graphql_ops_mcp.config import CONFIG_ENV_VAR, resolve_config_path


def _write_config(directory, data, name="config.json"):
    path = directory / name
    path.write_text(data if isinstance(data, str) else json.dumps(data), encoding="utf-8")
    return path


def test_load_config_full(tmp_path):
    path = _write_config(
        tmp_path,
        {
            "endpoint": "https://api.example.com/graphql",
            "operationsDir": "./operations",
            "headers": {"Authorization": "Bearer t0ken"},
            "name": "spacex",
            "version": "2.1.0",
            "timeout": 30,
            "strictVariables": True,
        },
    )
    cfg = load_config(path)

    assert cfg.endpoint == "https://api.example.com/graphql"
    assert cfg.operations_dir == tmp_path.resolve() / "operations"
    assert cfg.headers == {"Authorization": "Bearer t0ken"}
    assert cfg.name == "spacex"
    assert cfg.version == "2.1.0"
    assert cfg.timeout == 30.0
    assert cfg.strict_variables is True


def test_load_config_defaults(tmp_path):
    ops = tmp_path / "ops"
    path = _write_config(tmp_path, {"endpoint": "http://localhost:4000/", "operationsDir": str(ops)})
    cfg = load_config(path)

    assert cfg.operations_dir == ops
    assert cfg.headers == {}
    assert cfg.name == "graphql-mcp-server"
    assert cfg.version == "1.0.0"
    assert cfg.timeout is None
    assert cfg.strict_variables is False


def test_load_config_from_env(tmp_path, monkeypatch):
    path = _write_config(tmp_path, {"endpoint": "http://x/", "operationsDir": "ops"}, name="custom.json")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
    assert load_config().endpoint == "http://x/"


def test_resolve_config_path_default(tmp_path, monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.chdir(tmp_path)
    assert resolve_config_path() == tmp_path / "config.json"
    assert resolve_config_path("other.json").name == "other.json"


def test_load_config_missing_file_includes_example(tmp_path):
    with pytest.raises(ConfigMissing) as excinfo:
        load_config(tmp_path / "config.json")
    message = str(excinfo.value)
    assert "Configuration file not found" in message
    assert "GRAPHQL_MCP_CONFIG" in message
    assert '"operationsDir": "./operations"' in message


@pytest.mark.parametrize(
    "raw, match",
    [
        ("{not json", "not valid JSON"),
        ("[1, 2]", "JSON object"),
        ({"operationsDir": "ops"}, '"endpoint"'),
        ({"endpoint": "   ", "operationsDir": "ops"}, '"endpoint"'),
        ({"endpoint": "http://x/"}, '"operationsDir"'),
        ({"endpoint": "http://x/", "operationsDir": "ops", "headers": ["Authorization"]}, '"headers"'),
        ({"endpoint": "http://x/", "operationsDir": "ops", "headers": {"X-Retry": 3}}, '"headers"'),
        ({"endpoint": "http://x/", "operationsDir": "ops", "timeout": "10"}, '"timeout"'),
        ({"endpoint": "http://x/", "operationsDir": "ops", "timeout": True}, '"timeout"'),
        ({"endpoint": "http://x/", "operationsDir": "ops", "timeout": 0}, '"timeout"'),
        ({"endpoint": "http://x/", "operationsDir": "ops", "strictVariables": "yes"}, '"strictVariables"'),
        ({"endpoint": "http://x/", "operationsDir": "ops", "name": 7}, '"name"'),
    ],
)
def test_load_config_invalid(tmp_path, raw, match):
    path = _write_config(tmp_path, raw)
    with pytest.raises(ConfigInvalid, match=match):
        load_config(path)


def test_config_from_dict_without_base_dir():
    cfg = Config.from_dict({"endpoint": "http://x/", "operationsDir": "ops"})
    assert str(cfg.operations_dir) == "ops"


def test_load_config_undecodable_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_bytes(b'{"endpoint": "\xff\xfe"}')
    with pytest.raises(ConfigInvalid, match="Cannot read configuration file"):
        load_config(path)


def test_config_model_accepts_field_names_and_aliases(tmp_path):
    by_alias = Config.model_validate(
        {"endpoint": " http://x/ ", "operationsDir": "ops", "strictVariables": True, "headers": None, "name": ""}
    )
    assert by_alias.endpoint == "http://x/"
    assert by_alias.strict_variables is True
    assert by_alias.headers == {}
    assert by_alias.name == "graphql-mcp-server"

    by_name = Config(endpoint="http://x/", operations_dir=tmp_path)
    assert by_name.operations_dir == tmp_path
    with pytest.raises(ValidationError):
        by_name.endpoint = "http://y/"


def test_load_config_reports_every_problem(tmp_path):
    path = _write_config(tmp_path, {"endpoint": "http://x/", "timeout": -1})
    with pytest.raises(ConfigInvalid) as excinfo:
        load_config(path)
    message = str(excinfo.value)
    assert 'Configuration must include "operationsDir" field' in message
    assert '"timeout"' in message
