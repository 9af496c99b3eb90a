"""
Console output for agents: coloured status lines and the safety prompt
"""

import sys
from enum import Enum
from typing import Callable, Optional


class C:
    """ANSI colour codes (no-op if not a tty)"""

    _tty = sys.stdout.isatty()
    RED = "\033[0;31m" if _tty else ""
    GREEN = "\033[0;32m" if _tty else ""
    BLUE = "\033[0;34m" if _tty else ""
    CYAN = "\033[0;36m" if _tty else ""
    MAGENTA = "\033[0;35m" if _tty else ""
    NC = "\033[0m" if _tty else ""


class PrintCommand(Enum):
    """Kind of agent message, decides the colour of the statement"""

    AI_CALL = "ai_call"
    UNIT_TEST = "unit_test"
    ISSUE = "issue"

    @property
    def color(self) -> str:
        return {
            PrintCommand.AI_CALL: C.CYAN,
            PrintCommand.UNIT_TEST: C.MAGENTA,
            PrintCommand.ISSUE: C.RED,
        }[self]

    def print_agent_message(self, agent_position: str, agent_statement: str):
        print(f"{C.GREEN}Agent: {agent_position}{C.NC} {self.color}{agent_statement}{C.NC}")


PROCEED_TOKENS = {"1", "ok", "y", "yes"}
ABORT_TOKENS = {"2", "no", "n"}

SAFETY_QUESTION = """WARNING: You are about to run code written entirely by AI.
Review your code and confirm you wish to continue.
1. OK, let's continue
2. No, let's stop this project"""


def get_user_response(question: str, read_line: Optional[Callable[[], str]] = None) -> str:
    """Print a question and return the trimmed answer"""
    print(f"\n{C.BLUE}{question}{C.NC}")
    return (read_line or input)().strip()


def confirm_safe_code(read_line: Optional[Callable[[], str]] = None) -> bool:
    """
    Ask the operator whether AI generated code may be executed

    Keeps asking until the answer is one of the proceed or abort tokens.
    """
    while True:
        answer = get_user_response(SAFETY_QUESTION, read_line).lower()
        if answer in PROCEED_TOKENS:
            return True
        if answer in ABORT_TOKENS:
            return False
        print(f"{C.RED}Invalid input. Please select '1' or '2'{C.NC}")
