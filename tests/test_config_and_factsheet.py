"""Tests for AgentConfig loading and the FactSheet record."""

from __future__ import annotations

import json

import pytest

from devagent.core.config import AgentConfig
from devagent.core.errors import ConfigError
from devagent.core.factsheet import FactSheet, ProjectScope, RouteObject


def test_config_defaults() -> None:
    config = AgentConfig()

    assert config.port == 6678
    assert config.base_url == "http://localhost:6678"
    assert config.build_command == ["cargo", "build"]
    assert config.run_command == ["cargo", "run"]
    assert config.warmup_seconds == 5.0
    assert config.probe_timeout == 5.0
    assert config.max_bug_count == 2


def test_config_from_yaml(tmp_path) -> None:
    path = tmp_path / "devagent.yaml"
    path.write_text(
        "project_dir: ./server\n"
        "port: 8080\n"
        "build_command: go build ./...\n"
        "run_command: [go, run, .]\n"
        "warmup_seconds: 2\n"
    )

    config = AgentConfig.from_yaml(str(path))

    assert config.project_dir == "./server"
    assert config.port == 8080
    assert config.build_command == ["go", "build", "./..."]
    assert config.run_command == ["go", "run", "."]
    assert config.warmup_seconds == 2
    assert config.schema_path == AgentConfig().schema_path


def test_empty_yaml_keeps_defaults(tmp_path) -> None:
    path = tmp_path / "devagent.yaml"
    path.write_text("")

    assert AgentConfig.from_yaml(str(path)) == AgentConfig()


@pytest.mark.parametrize(
    "content",
    [
        "prot: 8080\n",
        "- just\n- a list\n",
        "build_command: []\n",
        "port: [unclosed\n",
    ],
)
def test_invalid_config_raises(tmp_path, content: str) -> None:
    path = tmp_path / "devagent.yaml"
    path.write_text(content)

    with pytest.raises(ConfigError):
        AgentConfig.from_yaml(str(path))


def test_missing_config_file(tmp_path) -> None:
    with pytest.raises(ConfigError):
        AgentConfig.from_yaml(str(tmp_path / "nope.yaml"))


def test_factsheet_from_pipeline_json() -> None:
    data = json.loads("""{
        "project_description": "build a website with user login and logout that stores addresses and phone numbers of contacts",
        "project_scope": {
            "is_crud_required": true,
            "is_user_login_and_logout": true,
            "is_external_urls_required": true
        },
        "external_urls": [
            "http://worldtimeapi.org/api/timezone"
        ],
        "backend_code": null,
        "api_endpoint_schema": null
    }""")

    factsheet = FactSheet.from_dict(data)

    assert factsheet.project_scope == ProjectScope(True, True, True)
    assert factsheet.external_urls == ["http://worldtimeapi.org/api/timezone"]
    assert factsheet.backend_code is None
    assert factsheet.api_endpoint_schema is None
    assert factsheet.to_dict() == data


def test_factsheet_save_and_load(tmp_path) -> None:
    factsheet = FactSheet(
        project_description="a todo app",
        backend_code="fn main() {}",
        api_endpoint_schema=[RouteObject("/health", "get", "false")],
    )
    path = tmp_path / "factsheet.json"

    factsheet.save(str(path))
    loaded = FactSheet.load(str(path))

    assert loaded == factsheet
    assert json.loads(path.read_text())["api_endpoint_schema"] == [
        {"route": "/health", "method": "get", "is_route_dynamic": "false"}
    ]
