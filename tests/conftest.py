"""
Shared fixtures for the thread runner tests.
"""

import pytest

from thread_runner.config import get_settings

ENV_VARS = [
    "CODEX_TEST_MODE",
    "CODEX_THREAD_ID_FILE",
    "OPENAI_API_KEY",
    "OPENAI_ASSISTANT_ID",
    "OPENAI_BASE_URL",
    "RUN_POLL_INTERVAL_MS",
    "RUN_TIMEOUT_SECONDS",
    "LOG_LEVEL",
    "SESSION_EXPIRY_HOURS",
]


class FakeAgentService:
    """Records every call in order; failures are injected per method."""

    def __init__(self, thread_id="thread_new", run_id="run_001", reply="Agent reply", fail_on=None, error=None):
        self.thread_id = thread_id
        self.run_id = run_id
        self.reply = reply
        self.fail_on = fail_on
        self.error = error or RuntimeError(f"{fail_on} failed")
        self.calls: list[tuple] = []

    def _record(self, name, *args):
        self.calls.append((name, *args))
        if name == self.fail_on:
            raise self.error

    async def create_thread(self):
        self._record("create_thread")
        return self.thread_id

    async def resume_thread(self, thread_id):
        self._record("resume_thread", thread_id)

    async def submit(self, thread_id, text):
        self._record("submit", thread_id, text)
        return self.run_id

    async def wait(self, thread_id, run_id):
        self._record("wait", thread_id, run_id)

    async def fetch_reply(self, thread_id, run_id):
        self._record("fetch_reply", thread_id, run_id)
        return self.reply

    @property
    def names(self):
        return [c[0] for c in self.calls]


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Run every test in an empty directory with no runner env vars set."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def fake_service():
    return FakeAgentService()


@pytest.fixture
def prompt_file(tmp_path):
    path = tmp_path / "PROMPT.md"
    path.write_text("Fix the failing build.\n", encoding="utf-8")
    return path


@pytest.fixture
def make_service():
    """Factory for FakeAgentService with custom behavior."""
    return FakeAgentService
