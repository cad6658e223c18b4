"""
Session Orchestrator - one prompt, one run

Responsibilities:
- resume the caller's thread or create (and persist) a new one
- submit the prompt and wait for the run to finish
- extract the final reply
"""

import asyncio

import structlog

from ..errors import ExternalServiceError, InvalidInput, RunnerError
from ..llm.client import AgentService
from ..llm.schemas import RunResult
from .store import SessionStore

logger = structlog.get_logger()


class SessionOrchestrator:
    """
    Drives a single run against the remote agent service.

    Resumption is caller-controlled: the store is written when a thread is
    created but never consulted to pick a thread to resume.
    """

    def __init__(
        self,
        service: AgentService,
        store: SessionStore,
        timeout_seconds: float | None = None,
    ):
        self.service = service
        self.store = store
        self.timeout_seconds = timeout_seconds

    async def run(self, prompt_text: str | None, resume_thread_id: str | None = None) -> RunResult:
        """
        Send ``prompt_text`` to a thread and return the agent's reply.

        Args:
            prompt_text: full prompt, sent unmodified
            resume_thread_id: existing thread to continue (None creates one)

        Raises:
            InvalidInput: prompt missing or empty
            ExternalServiceError: anything the remote service reports
        """
        if not prompt_text:
            raise InvalidInput("Prompt text is empty")

        created = False
        try:
            if resume_thread_id:
                logger.info("thread.resuming", thread_id=resume_thread_id)
                await self.service.resume_thread(resume_thread_id)
                thread_id = resume_thread_id
            else:
                logger.info("thread.creating")
                thread_id = await self.service.create_thread()
                created = True
                self.store.save(thread_id)
                logger.info("thread.created", thread_id=thread_id)

            logger.info("run.submitting", thread_id=thread_id, prompt_chars=len(prompt_text))
            run_id = await self.service.submit(thread_id, prompt_text)

            await self._wait(thread_id, run_id)

            logger.info("run.completed", thread_id=thread_id, run_id=run_id)
            reply = await self.service.fetch_reply(thread_id, run_id)
        except RunnerError:
            raise
        except Exception as e:
            logger.error("run.error", error=str(e))
            raise ExternalServiceError(str(e)) from e

        return RunResult(reply=reply, thread_id=thread_id, run_id=run_id, created=created)

    async def _wait(self, thread_id: str, run_id: str) -> None:
        if self.timeout_seconds is None:
            await self.service.wait(thread_id, run_id)
            return
        try:
            await asyncio.wait_for(self.service.wait(thread_id, run_id), timeout=self.timeout_seconds)
        except asyncio.TimeoutError as e:
            raise ExternalServiceError(
                f"Run {run_id} did not complete within {self.timeout_seconds}s"
            ) from e
