"""
Agents for devagent

Available agents:
- BackendDeveloperAgent: Writes, builds and tests web server code
"""

from .backend_developer_agent import BackendDeveloperAgent

__all__ = [
    'BackendDeveloperAgent',
]
