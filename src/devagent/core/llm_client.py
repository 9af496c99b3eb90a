"""
LLM client wrapper around the Anthropic SDK, plus the request helpers
agents use to turn a prompt task into plain code
"""

import os
import re
from typing import Any, Dict, List, Optional

import anthropic

from .console import PrintCommand
from .errors import OracleRequestFailed
from .prompts import PromptTask, build_prompt

DEFAULT_MODEL = "claude-3-5-sonnet-latest"

# Network hiccups worth one immediate retry
TRANSIENT_ERRORS = (
    anthropic.APIConnectionError,
    anthropic.RateLimitError,
    anthropic.InternalServerError,
)

MARKDOWN_FENCE = re.compile(r"(^```.*(\r\n|\r|\n)|```\s*$)")


class LLMClient:
    """Thin wrapper so agents never touch the SDK directly"""

    def __init__(
        self,
        api_key: str,
        model: Optional[str] = None,
        max_tokens: int = 4096,
    ):
        # ai_task_request owns the retry policy
        self.client = anthropic.Anthropic(api_key=api_key, max_retries=0)
        self.model = model or os.getenv("ANTHROPIC_MODEL", DEFAULT_MODEL)
        self.max_tokens = max_tokens

    def create_message(self, messages: List[Dict[str, Any]], system: str):
        return self.client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            system=system,
            messages=messages,
        )

    def complete(self, prompt: str, system: str) -> str:
        """Single-turn completion, returns the concatenated text blocks"""
        response = self.create_message(
            messages=[{"role": "user", "content": prompt}],
            system=system,
        )
        return "".join(block.text for block in response.content if hasattr(block, "text"))


def strip_markdown(text: str) -> str:
    """Remove a surrounding ``` code fence, if the model added one"""
    return MARKDOWN_FENCE.sub("", text.strip())


def ai_task_request(llm, task: PromptTask, agent_position: str) -> str:
    """
    Send a prompt task to the model

    Transient transport errors are retried once straight away. A second
    failure, or any other API error, is raised as OracleRequestFailed.
    """
    system, prompt = build_prompt(task)

    PrintCommand.AI_CALL.print_agent_message(agent_position, task.operation)

    try:
        return llm.complete(prompt, system)
    except TRANSIENT_ERRORS as first_error:
        print(f"⚠️  LLM call failed ({first_error}), retrying once...")
    except anthropic.APIError as e:
        raise OracleRequestFailed(f"LLM request rejected: {e}") from e

    try:
        return llm.complete(prompt, system)
    except anthropic.APIError as e:
        raise OracleRequestFailed(f"Failed to call LLM: {e}") from e


def ai_task_request_without_markdown(llm, task: PromptTask, agent_position: str) -> str:
    return strip_markdown(ai_task_request(llm, task, agent_position))

