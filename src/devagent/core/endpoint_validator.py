"""
Endpoint Validator - calls the static GET routes of a running web server
"""

from dataclasses import dataclass
from typing import List, Optional

import requests

from .console import PrintCommand
from .factsheet import RouteObject


@dataclass
class ProbeResult:
    route: str
    status_code: Optional[int] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status_code == 200


def check_status_code(session: requests.Session, url: str, timeout: float) -> int:
    """GET a url and return its status code; transport errors propagate"""
    response = session.get(url, timeout=timeout)
    return response.status_code


class EndpointValidator:
    """
    Probes routes one after the other, in order

    A non-200 answer is only a warning. A transport error (refused
    connection, timeout) kills the server and is reported as an issue;
    the remaining routes are still probed and will fail the same way.
    """

    def __init__(self, base_url: str, timeout: float = 5.0, agent_position: str = "Endpoint Validator"):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.agent_position = agent_position

    def check_endpoints(self, routes: List[RouteObject], server=None) -> List[ProbeResult]:
        results = []

        with requests.Session() as session:
            # The server is local; never route probes through a proxy
            session.trust_env = False

            for endpoint in routes:
                PrintCommand.UNIT_TEST.print_agent_message(
                    self.agent_position,
                    f"Testing endpoint '{endpoint.route}'..."
                )

                url = f"{self.base_url}{endpoint.route}"
                try:
                    status_code = check_status_code(session, url, self.timeout)
                except requests.exceptions.InvalidURL as e:
                    # Bad route in the schema; the server itself is fine
                    PrintCommand.ISSUE.print_agent_message(
                        self.agent_position,
                        f"WARNING: Invalid endpoint route '{endpoint.route}': {e}"
                    )
                    results.append(ProbeResult(route=endpoint.route, error=str(e)))
                    continue
                except requests.RequestException as e:
                    if server is not None:
                        server.kill()
                    PrintCommand.ISSUE.print_agent_message(
                        self.agent_position,
                        f"Error checking backend {e}"
                    )
                    results.append(ProbeResult(route=endpoint.route, error=str(e)))
                    continue

                if status_code != 200:
                    PrintCommand.ISSUE.print_agent_message(
                        self.agent_position,
                        f"WARNING: Failed to call backend url endpoint {endpoint.route} (status {status_code})"
                    )
                results.append(ProbeResult(route=endpoint.route, status_code=status_code))

        return results
