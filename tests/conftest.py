"""Test configuration and fakes for devagent.

The LLM, the build tool and the web server are replaced by small fakes so
the agent's state machine can be driven without network or compilers.
"""

from __future__ import annotations

import json
import pathlib
import sys
from typing import Any, Callable, List, Optional

import pytest

# Ensure src directory is in path
PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from devagent.core.build_runner import BuildResult  # noqa: E402
from devagent.core.config import AgentConfig  # noqa: E402


HEALTH_SCHEMA = json.dumps([
    {"route": "/health", "method": "get", "is_route_dynamic": "false"},
])


class FakeLLM:
    """Answers code prompts with numbered drafts and schema prompts with a fixed schema."""

    def __init__(self, schema: str = HEALTH_SCHEMA):
        self.schema = schema
        self.prompts: List[str] = []
        self.drafts = 0

    def complete(self, prompt: str, system: str) -> str:
        self.prompts.append(prompt)
        if "print_rest_api_endpoints" in prompt:
            return self.schema
        self.drafts += 1
        return f"```rust\nfn main() {{ /* draft {self.drafts} */ }}\n```"

    def functions_called(self) -> List[str]:
        names = [
            "print_backend_webserver_code",
            "print_improved_webserver_code",
            "print_fixed_code",
            "print_rest_api_endpoints",
        ]
        return [next(n for n in names if n in p) for p in self.prompts]


class FakeBuild:
    """Build runner returning scripted outcomes, one per call."""

    def __init__(self, outcomes: List[bool]):
        self.outcomes = list(outcomes)
        self.calls = 0

    def __call__(self, command, project_dir, timeout=None) -> BuildResult:
        success = self.outcomes[self.calls]
        self.calls += 1
        if success:
            return BuildResult(success=True, stdout="Finished", errors="")
        return BuildResult(success=False, stdout="", errors=f"error[E0425]: build {self.calls} failed")


class FakeServer:
    """Stands in for ServerProcess; records kills into a shared event list."""

    def __init__(self, command, project_dir, events: List[str], alive: bool = True):
        self.command = command
        self.project_dir = project_dir
        self.events = events
        self.running = False
        self.alive = alive

    def __enter__(self) -> "FakeServer":
        self.running = self.alive
        self.events.append("start")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.kill()
        self.events.append("exit")

    def is_running(self) -> bool:
        return self.running

    def exit_output(self) -> str:
        return "" if self.running else "STDOUT:\n\nSTDERR:\naddress already in use"

    def kill(self) -> None:
        if self.running:
            self.running = False
            self.events.append("kill")


class ServerFactory:
    def __init__(self, alive: bool = True):
        self.events: List[str] = []
        self.alive = alive
        self.servers: List[FakeServer] = []

    def __call__(self, command, project_dir) -> FakeServer:
        server = FakeServer(command, project_dir, self.events, alive=self.alive)
        self.servers.append(server)
        return server


@pytest.fixture
def agent_config(tmp_path: pathlib.Path) -> AgentConfig:
    template = tmp_path / "web_template" / "src" / "code_template.rs"
    template.parent.mkdir(parents=True)
    template.write_text("// CODE TEMPLATE\nfn main() {}\n")

    return AgentConfig(
        project_dir=str(tmp_path / "web_template"),
        template_path=str(template),
        output_path=str(tmp_path / "web_template" / "src" / "main.rs"),
        schema_path=str(tmp_path / "schemas" / "api_schema.json"),
        port=6678,
        warmup_seconds=0,
        probe_timeout=0.5,
    )


@pytest.fixture
def make_agent(agent_config: AgentConfig) -> Callable[..., Any]:
    """Build a BackendDeveloperAgent wired to fakes."""
    from devagent.agents.backend_developer_agent import BackendDeveloperAgent

    def _make(
        builds: Optional[List[bool]] = None,
        schema: str = HEALTH_SCHEMA,
        confirm: bool = True,
        server_alive: bool = True,
    ):
        llm = FakeLLM(schema=schema)
        build = FakeBuild(builds if builds is not None else [True])
        servers = ServerFactory(alive=server_alive)
        agent = BackendDeveloperAgent(
            llm,
            agent_config,
            confirm=lambda: confirm,
            build_runner=build,
            server_factory=servers,
            sleep=lambda seconds: None,
        )
        return agent, llm, build, servers

    return _make
