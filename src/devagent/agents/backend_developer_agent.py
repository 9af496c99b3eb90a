"""
Backend Developer Agent - writes, builds, runs and probes web server code
"""

import os
import time
from typing import Callable, List, Optional

from ..core.base_agent import AgentState, BaseAgent
from ..core.build_runner import BuildResult, run_build
from ..core.config import AgentConfig
from ..core.console import PrintCommand, confirm_safe_code
from ..core.endpoint_validator import EndpointValidator, ProbeResult
from ..core.errors import BuildLimitExceeded, CodeTemplateMissing, SafetyDeclined
from ..core.factsheet import FactSheet
from ..core.llm_client import ai_task_request_without_markdown
from ..core.process_supervisor import ServerProcess
from ..core.prompts import (
    BugFix,
    Improvement,
    InitialGeneration,
    PromptTask,
    SchemaExtraction,
)
from ..core.route_schema import decode_route_schema, filter_static_get_routes


class BackendDeveloperAgent(BaseAgent):
    """
    Agent that turns a project description into a working web server

    States:
        DISCOVERY     write a first draft from the code template
        WORKING       improve the draft, or fix it after a failed build
        UNIT_TESTING  build, extract the endpoint schema, run the server
                      and probe its static GET routes
        FINISHED      done

    A failed build sends the agent back to WORKING with the compiler
    errors. More than config.max_bug_count failures in a row raises
    BuildLimitExceeded.
    """

    def __init__(
        self,
        llm,
        config: AgentConfig,
        confirm: Callable[[], bool] = confirm_safe_code,
        build_runner: Callable[..., BuildResult] = run_build,
        server_factory: Callable[..., ServerProcess] = ServerProcess,
        validator: Optional[EndpointValidator] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        super().__init__(
            objective="Develops the backend code for webserver and json database",
            position="Backend Developer",
        )
        self.llm = llm
        self.config = config
        self.confirm = confirm
        self.build_runner = build_runner
        self.server_factory = server_factory
        self.validator = validator or EndpointValidator(
            config.base_url,
            timeout=config.probe_timeout,
            agent_position=self.position,
        )
        self.sleep = sleep

        self.bug_errors: Optional[str] = None
        self.bug_count = 0
        self.probe_results: List[ProbeResult] = []

    # ── Durable files ───────────────────────────────────────────────────────

    def _read_code_template(self) -> str:
        try:
            with open(self.config.template_path, 'r') as f:
                return f.read()
        except OSError as e:
            raise CodeTemplateMissing(f"Failed to read code template {self.config.template_path}: {e}") from e

    def _read_backend_code(self) -> str:
        with open(self.config.output_path, 'r') as f:
            return f.read()

    def _write(self, path: str, contents: str):
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(path, 'w') as f:
            f.write(contents)

    # ── Code generation ─────────────────────────────────────────────────────

    def _generate_backend_code(self, task: PromptTask, factsheet: FactSheet):
        code = ai_task_request_without_markdown(self.llm, task, self.position)
        self._write(self.config.output_path, code)
        factsheet.backend_code = code

    def _call_initial_backend_code(self, factsheet: FactSheet):
        task = InitialGeneration(
            code_template=self._read_code_template(),
            project_description=factsheet.project_description,
        )
        self._generate_backend_code(task, factsheet)

    def _call_improved_backend_code(self, factsheet: FactSheet):
        task = Improvement(
            backend_code=factsheet.backend_code,
            factsheet=factsheet.to_dict(),
        )
        self._generate_backend_code(task, factsheet)

    def _call_fix_code_bugs(self, factsheet: FactSheet):
        task = BugFix(
            backend_code=factsheet.backend_code,
            bug_errors=self.bug_errors,
            bug_count=self.bug_count,
        )
        self._generate_backend_code(task, factsheet)

    def _call_extract_api_endpoints(self) -> str:
        task = SchemaExtraction(backend_code=self._read_backend_code())
        return ai_task_request_without_markdown(self.llm, task, self.position)

    # ── Unit testing ────────────────────────────────────────────────────────

    def _build(self) -> bool:
        """Build the project and update the bug counters; True on success"""
        self.say(PrintCommand.UNIT_TEST, "Backend code unit testing: building project...")

        result = self.build_runner(
            self.config.build_command,
            self.config.project_dir,
            timeout=self.config.build_timeout,
        )

        if result.success:
            self.bug_count = 0
            self.bug_errors = None
            self.say(PrintCommand.UNIT_TEST, "Backend code unit testing: build successful...")
            return True

        self.bug_count += 1
        self.bug_errors = result.errors

        if self.bug_count > self.config.max_bug_count:
            self.say(PrintCommand.ISSUE, "Backend code unit testing: too many bugs found in code")
            raise BuildLimitExceeded(self.bug_count, self.bug_errors)

        self.say(
            PrintCommand.ISSUE,
            f"Backend code unit testing: build failed ({self.bug_count}/{self.config.max_bug_count} retries used), sending errors back..."
        )
        return False

    def _test_endpoints(self, factsheet: FactSheet):
        api_endpoints_str = self._call_extract_api_endpoints()
        api_endpoints = decode_route_schema(api_endpoints_str)
        check_endpoints = filter_static_get_routes(api_endpoints)

        factsheet.api_endpoint_schema = check_endpoints

        self.say(PrintCommand.UNIT_TEST, "Backend code unit testing: starting web server...")

        with self.server_factory(self.config.run_command, self.config.project_dir) as server:
            self.say(
                PrintCommand.UNIT_TEST,
                f"Backend code unit testing: launching tests on server in {self.config.warmup_seconds:g}s..."
            )
            self.sleep(self.config.warmup_seconds)

            if not server.is_running():
                self.say(
                    PrintCommand.ISSUE,
                    f"Web server exited before testing started\n{server.exit_output()}"
                )

            self.probe_results = self.validator.check_endpoints(check_endpoints, server)

            self._write(self.config.schema_path, api_endpoints_str)

            self.say(PrintCommand.UNIT_TEST, "Backend testing complete...")

    def _run_unit_tests(self, factsheet: FactSheet) -> AgentState:
        self.say(PrintCommand.UNIT_TEST, "Backend code unit testing: ensuring safe code")
        if not self.confirm():
            raise SafetyDeclined()

        if not self._build():
            return AgentState.WORKING

        self._test_endpoints(factsheet)
        return AgentState.FINISHED

    # ── State machine ───────────────────────────────────────────────────────

    def execute(self, factsheet: FactSheet):
        """
        Run the agent until FINISHED

        Raises:
            AgentError: on any fatal failure (too many bugs, bad endpoint
                        schema, declined safety check, ...)
        """
        while self.state != AgentState.FINISHED:
            if self.state == AgentState.DISCOVERY:
                self._call_initial_backend_code(factsheet)
                self.state = AgentState.WORKING

            elif self.state == AgentState.WORKING:
                if self.bug_count == 0:
                    self._call_improved_backend_code(factsheet)
                else:
                    self._call_fix_code_bugs(factsheet)
                self.state = AgentState.UNIT_TESTING

            elif self.state == AgentState.UNIT_TESTING:
                self.state = self._run_unit_tests(factsheet)

            else:
                self.state = AgentState.FINISHED
