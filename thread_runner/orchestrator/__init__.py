"""
Orchestrator - session lifecycle around a single prompt run

- real mode: SessionOrchestrator against the remote agent service
- offline mode: OfflineOrchestrator with fixed output
"""

from .offline import TEST_OUTPUT, TEST_THREAD_ID, OfflineOrchestrator
from .session import SessionOrchestrator
from .store import FileSessionStore, MemorySessionStore, SessionStore

__all__ = [
    "FileSessionStore",
    "MemorySessionStore",
    "OfflineOrchestrator",
    "SessionOrchestrator",
    "SessionStore",
    "TEST_OUTPUT",
    "TEST_THREAD_ID",
]
