"""
Offline orchestrator for CODEX_TEST_MODE.

Never touches the network. Useful for exercising the surrounding automation.
"""

import structlog

from ..llm.schemas import RunResult
from .store import SessionStore

logger = structlog.get_logger()

TEST_OUTPUT = "Test output from Codex SDK runner"
TEST_THREAD_ID = "test-thread-123"


class OfflineOrchestrator:
    """Same interface as SessionOrchestrator, fixed results."""

    def __init__(self, store: SessionStore):
        self.store = store

    async def run(self, prompt_text: str | None, resume_thread_id: str | None = None) -> RunResult:
        logger.info("offline.run", prompt_chars=len(prompt_text or ""))

        created = False
        if not self.store.exists():
            self.store.save(TEST_THREAD_ID)
            created = True
        stored = self.store.load() or TEST_THREAD_ID

        return RunResult(
            reply=TEST_OUTPUT,
            thread_id=resume_thread_id or stored,
            created=created,
        )
