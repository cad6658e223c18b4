"""
Session store - where the most recently created thread id lives between runs.

The orchestrator only ever calls ``save`` (on thread creation). ``load`` is
used by offline mode and by the ``session`` CLI commands; ``run`` never reads
it to resume automatically.
"""

import os
import tempfile
import time
from pathlib import Path
from typing import Protocol

import structlog

from ..errors import SessionStoreError

logger = structlog.get_logger()


class SessionStore(Protocol):
    """Minimal persistence interface for a single session handle."""

    def load(self) -> str | None: ...

    def save(self, thread_id: str) -> None: ...

    def exists(self) -> bool: ...


class FileSessionStore:
    """
    Keeps the thread id as raw text in a single file.

    Writes go through a temp file in the same directory followed by
    ``os.replace``, so a reader never sees a half-written id.
    """

    def __init__(self, path: str | Path = ".codex_thread_id"):
        self.path = Path(path)

    def load(self) -> str | None:
        try:
            content = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise SessionStoreError(f"Failed to read session file {self.path}: {e}") from e
        return content.strip() or None

    def save(self, thread_id: str) -> None:
        directory = self.path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=directory)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(thread_id)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise SessionStoreError(f"Failed to save session file {self.path}: {e}") from e
        logger.debug("session_store.saved", path=str(self.path))

    def clear(self) -> bool:
        """Remove the stored handle. Returns False if nothing was stored."""
        try:
            self.path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise SessionStoreError(f"Failed to remove session file {self.path}: {e}") from e
        logger.info("session_store.cleared", path=str(self.path))
        return True

    def exists(self) -> bool:
        """True once the handle file exists, even if it is blank."""
        return self.path.exists()

    def age_hours(self) -> float:
        """Hours since the handle was last written, 0.0 when none is stored."""
        if not self.exists():
            return 0.0
        try:
            mtime = self.path.stat().st_mtime
        except OSError as e:
            raise SessionStoreError(f"Failed to stat session file {self.path}: {e}") from e
        return max(0.0, (time.time() - mtime) / 3600)

    def is_expired(self, expiry_hours: float) -> bool:
        """A non-positive expiry means handles never expire."""
        if expiry_hours <= 0:
            return False
        return self.age_hours() >= expiry_hours


class MemorySessionStore:
    """In-process store, useful for tests and embedding."""

    def __init__(self, thread_id: str | None = None):
        self.thread_id = thread_id
        self.saves: list[str] = []

    def load(self) -> str | None:
        return self.thread_id

    def save(self, thread_id: str) -> None:
        self.thread_id = thread_id
        self.saves.append(thread_id)

    def exists(self) -> bool:
        return self.thread_id is not None
