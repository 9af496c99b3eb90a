"""
Error types raised by the backend developer agent
"""

from typing import Optional


class AgentError(Exception):
    """Base class for every fatal agent failure"""


class BuildLimitExceeded(AgentError):
    """The project failed to build too many times in a row"""

    def __init__(self, bug_count: int, last_error: Optional[str] = None):
        self.bug_count = bug_count
        self.last_error = last_error
        super().__init__(f"Too many bugs: build failed {bug_count} times in a row")


class SchemaDecodeFailed(AgentError):
    """The endpoint schema returned by the model is not a list of route objects"""

    def __init__(self, raw_schema: str, reason: str):
        self.raw_schema = raw_schema
        self.reason = reason
        super().__init__(f"Failed to decode API endpoints: {reason}")


class SafetyDeclined(AgentError):
    """The operator refused to let AI-written code run on this machine"""

    def __init__(self):
        super().__init__("Execution of AI generated code was not authorized")


class ProcessKillFailed(AgentError):
    """The supervised web server could not be stopped"""


class BuildInvocationFailed(AgentError):
    """The build tool itself could not be started"""


class OracleRequestFailed(AgentError):
    """The language model could not be reached after a retry"""


class ConfigError(AgentError):
    """The agent configuration is invalid"""


class CodeTemplateMissing(AgentError):
    """The web server code template could not be read"""
