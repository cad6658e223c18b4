"""
Agent service client.

``AgentService`` is the capability set the orchestrator depends on.
``OpenAIThreadService`` implements it on top of the OpenAI Assistants
threads API: a thread is the session handle, a run is one prompt cycle.
"""

from typing import Any, Protocol

import structlog

from ..config import Settings
from ..errors import ExternalServiceError

logger = structlog.get_logger()


class AgentService(Protocol):
    """Remote conversational agent, as seen by the orchestrator."""

    async def create_thread(self) -> str: ...

    async def resume_thread(self, thread_id: str) -> None: ...

    async def submit(self, thread_id: str, text: str) -> str: ...

    async def wait(self, thread_id: str, run_id: str) -> None: ...

    async def fetch_reply(self, thread_id: str, run_id: str) -> str: ...


class OpenAIThreadService:
    """
    AgentService backed by ``AsyncOpenAI.beta.threads``.

    Args:
        client: an ``AsyncOpenAI`` (or compatible) client
        assistant_id: assistant that executes runs on the thread
        poll_interval_ms: delay between run status polls
    """

    def __init__(self, client: Any, assistant_id: str, poll_interval_ms: int = 1000):
        self._client = client
        self._assistant_id = assistant_id
        self._poll_interval_ms = poll_interval_ms

    async def create_thread(self) -> str:
        thread = await self._client.beta.threads.create()
        return thread.id

    async def resume_thread(self, thread_id: str) -> None:
        # Retrieval fails with NotFoundError for unknown or deleted threads
        await self._client.beta.threads.retrieve(thread_id)

    async def submit(self, thread_id: str, text: str) -> str:
        await self._client.beta.threads.messages.create(
            thread_id=thread_id,
            role="user",
            content=text,
        )
        run = await self._client.beta.threads.runs.create(
            thread_id=thread_id,
            assistant_id=self._assistant_id,
        )
        return run.id

    async def wait(self, thread_id: str, run_id: str) -> None:
        run = await self._client.beta.threads.runs.poll(
            run_id,
            thread_id=thread_id,
            poll_interval_ms=self._poll_interval_ms,
        )
        if run.status != "completed":
            detail = ""
            last_error = getattr(run, "last_error", None)
            if last_error is not None:
                detail = f": {last_error.message}"
            raise ExternalServiceError(f"Run {run_id} ended with status '{run.status}'{detail}")

    async def fetch_reply(self, thread_id: str, run_id: str) -> str:
        """
        Return the newest assistant message produced by the run.

        Text content blocks are joined with newlines; non-text blocks
        (images, files) are skipped.
        """
        page = await self._client.beta.threads.messages.list(
            thread_id=thread_id,
            run_id=run_id,
            order="desc",
        )
        for message in page.data:
            if message.role != "assistant":
                continue
            parts = [block.text.value for block in message.content if block.type == "text"]
            if parts:
                return "\n".join(parts)
        raise ExternalServiceError(f"Run {run_id} produced no assistant reply")


def get_agent_service(settings: Settings) -> OpenAIThreadService:
    """Build the OpenAI-backed service from runtime credentials."""
    try:
        from openai import AsyncOpenAI
    except ImportError as e:
        raise ExternalServiceError("openai is not installed. Run: pip install openai") from e

    if not settings.openai_api_key:
        raise ExternalServiceError(
            "LLM API key is not configured. Please set OPENAI_API_KEY environment variable."
        )
    if not settings.openai_assistant_id:
        raise ExternalServiceError(
            "Assistant is not configured. Please set OPENAI_ASSISTANT_ID environment variable."
        )

    client = AsyncOpenAI(api_key=settings.openai_api_key, base_url=settings.openai_base_url)
    logger.debug("agent_service.created", base_url=settings.openai_base_url)
    return OpenAIThreadService(
        client,
        assistant_id=settings.openai_assistant_id,
        poll_interval_ms=settings.run_poll_interval_ms,
    )
