"""
Remote agent service access.
"""

from .client import AgentService, OpenAIThreadService, get_agent_service
from .schemas import RunResult

__all__ = ["AgentService", "OpenAIThreadService", "RunResult", "get_agent_service"]
