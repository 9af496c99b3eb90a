"""
Process Supervisor - runs the built web server in the background
"""

import os
import signal
import subprocess
import tempfile
from typing import List, Optional

from .errors import ProcessKillFailed


class ServerProcess:
    """
    Owned handle on the running web server

    Use as a context manager so the server is stopped on every exit path:

        with ServerProcess(["cargo", "run"], project_dir) as server:
            ...  # probe endpoints, server.kill() on failure

    Output goes to temporary files rather than pipes, so a chatty server
    never blocks on a full pipe buffer.
    """

    def __init__(self, command: List[str], project_dir: str):
        self.command = command
        self.project_dir = project_dir
        self.proc: Optional[subprocess.Popen] = None
        self._stdout = None
        self._stderr = None

    def start(self) -> "ServerProcess":
        self._stdout = tempfile.TemporaryFile()
        self._stderr = tempfile.TemporaryFile()
        # New session so the build tool and the server it spawns die together
        self.proc = subprocess.Popen(
            self.command,
            cwd=self.project_dir,
            stdout=self._stdout,
            stderr=self._stderr,
            preexec_fn=os.setsid if hasattr(os, 'setsid') else None
        )
        return self

    @property
    def pid(self) -> Optional[int]:
        return self.proc.pid if self.proc else None

    def is_running(self) -> bool:
        return self.proc is not None and self.proc.poll() is None

    def _read_output(self, stream) -> str:
        if stream is None or stream.closed:
            return ""
        stream.seek(0)
        return stream.read().decode(errors="replace")

    def exit_output(self) -> str:
        """Combined output of a server that already exited, empty otherwise"""
        if self.proc is None or self.is_running():
            return ""
        stdout = self._read_output(self._stdout)
        stderr = self._read_output(self._stderr)
        return f"STDOUT:\n{stdout}\n\nSTDERR:\n{stderr}"

    def kill(self):
        """
        Stop the server; does nothing if it already stopped

        Raises:
            ProcessKillFailed: if the process group cannot be signalled
        """
        if not self.is_running():
            return

        try:
            if hasattr(os, 'killpg'):
                os.killpg(os.getpgid(self.proc.pid), signal.SIGTERM)
            else:
                self.proc.terminate()
            self.proc.wait(timeout=5)
        except subprocess.TimeoutExpired:
            try:
                if hasattr(os, 'killpg'):
                    os.killpg(os.getpgid(self.proc.pid), signal.SIGKILL)
                else:
                    self.proc.kill()
                self.proc.wait(timeout=5)
            except (OSError, subprocess.TimeoutExpired) as e:
                raise ProcessKillFailed(f"Failed to kill web server (pid {self.proc.pid}): {e}") from e
        except ProcessLookupError:
            # Exited between the poll and the signal
            self.proc.wait()
        except OSError as e:
            raise ProcessKillFailed(f"Failed to kill web server (pid {self.proc.pid}): {e}") from e

    def close(self):
        for stream in (self._stdout, self._stderr):
            if stream is not None:
                stream.close()

    def __enter__(self) -> "ServerProcess":
        return self.start()

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            self.kill()
        finally:
            self.close()
