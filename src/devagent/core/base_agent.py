"""
Base Agent class with identity and a simple state machine
"""

from enum import Enum

from .console import PrintCommand
from .factsheet import FactSheet


class AgentState(Enum):
    DISCOVERY = "discovery"
    WORKING = "working"
    UNIT_TESTING = "unit_testing"
    FINISHED = "finished"


class BaseAgent:
    """
    Common agent skeleton

    An agent has a fixed objective and position (its role label) and is
    in exactly one AgentState at a time. Subclasses implement execute(),
    which drives the state machine until FINISHED or raises AgentError.
    """

    def __init__(self, objective: str, position: str):
        self._objective = objective
        self._position = position
        self.state = AgentState.DISCOVERY

    @property
    def objective(self) -> str:
        return self._objective

    @property
    def position(self) -> str:
        return self._position

    def say(self, command: PrintCommand, statement: str):
        command.print_agent_message(self._position, statement)

    def execute(self, factsheet: FactSheet):
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(position={self._position!r}, state={self.state.name})"
