"""
Agent configuration - file locations, commands, ports and timings
"""

import os
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List

import yaml

from .errors import ConfigError


@dataclass
class AgentConfig:
    """
    Everything the backend developer agent needs to know about the
    web server project it works on.

    Paths are relative to the current directory unless absolute.
    """

    project_dir: str = "./web_template"
    template_path: str = "./web_template/src/code_template.rs"
    output_path: str = "./web_template/src/main.rs"
    schema_path: str = "./schemas/api_schema.json"
    port: int = 6678
    build_command: List[str] = field(default_factory=lambda: ["cargo", "build"])
    run_command: List[str] = field(default_factory=lambda: ["cargo", "run"])
    warmup_seconds: float = 5.0
    probe_timeout: float = 5.0
    build_timeout: float = 600.0
    max_bug_count: int = 2

    @property
    def base_url(self) -> str:
        return f"http://localhost:{self.port}"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AgentConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")

        config = cls(**data)
        for name in ("build_command", "run_command"):
            value = getattr(config, name)
            # Accept "cargo build" as well as ["cargo", "build"]
            if isinstance(value, str):
                setattr(config, name, value.split())
            elif not isinstance(value, list) or not value:
                raise ConfigError(f"{name} must be a command string or a non-empty list")
        return config

    @classmethod
    def from_yaml(cls, path: str) -> "AgentConfig":
        """Load a config file; missing keys keep their defaults"""
        if not os.path.exists(path):
            raise ConfigError(f"Config file not found: {path}")

        with open(path, 'r') as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        return cls.from_dict(data)
