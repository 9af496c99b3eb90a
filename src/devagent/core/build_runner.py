"""
Build Runner - compiles the web server project with its build tool
"""

import subprocess
from dataclasses import dataclass
from typing import List

from .errors import BuildInvocationFailed


@dataclass
class BuildResult:
    success: bool
    stdout: str
    errors: str


def run_build(command: List[str], project_dir: str, timeout: float = 600.0) -> BuildResult:
    """
    Run the build command and wait for it to finish

    Only the exit status decides success. On failure the error stream is
    the diagnostic text handed back to the model.

    Raises:
        BuildInvocationFailed: if the build tool cannot be started at all
    """
    try:
        result = subprocess.run(
            command,
            cwd=project_dir,
            capture_output=True,
            text=True,
            timeout=timeout
        )
    except subprocess.TimeoutExpired as e:
        stdout = e.stdout.decode(errors="replace") if isinstance(e.stdout, bytes) else (e.stdout or "")
        return BuildResult(
            success=False,
            stdout=stdout,
            errors=f"Build command timed out after {timeout:g} seconds"
        )
    except OSError as e:
        raise BuildInvocationFailed(f"Failed to run {' '.join(command)}: {e}") from e

    return BuildResult(
        success=result.returncode == 0,
        stdout=result.stdout,
        errors=result.stderr if result.returncode != 0 else ""
    )
