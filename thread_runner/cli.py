"""
Command line entry point.

    thread-runner run <prompt-file> <output-file> [thread-id]
    thread-runner session show
    thread-runner session reset

Exit status is 0 on success and 1 on any error. Diagnostics go to stderr.
"""

import argparse
import asyncio
import sys
from pathlib import Path

import structlog

from .config import Settings, get_settings
from .errors import InvalidInput, RunnerError
from .llm.client import get_agent_service
from .llm.schemas import RunResult
from .log_config import configure_logging
from .orchestrator import FileSessionStore, OfflineOrchestrator, SessionOrchestrator

logger = structlog.get_logger()


class _ArgumentParser(argparse.ArgumentParser):
    """Report usage problems as InvalidInput instead of exiting with status 2."""

    def error(self, message):
        raise InvalidInput(f"{message}\n{self.format_usage().strip()}")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="thread-runner",
        description="Send a prompt to a remote agent thread and write the reply to a file",
    )
    commands = parser.add_subparsers(dest="command", required=True, parser_class=_ArgumentParser)

    run = commands.add_parser("run", help="Run one prompt")
    run.add_argument("prompt_file", nargs="?", help="Path to the prompt file")
    run.add_argument("output_file", nargs="?", help="Path for the agent reply")
    run.add_argument("thread_id", nargs="?", default=None, help="Optional thread ID to resume")

    session = commands.add_parser("session", help="Inspect or reset the stored thread ID")
    session.add_argument("action", choices=["show", "reset"])

    return parser


def build_orchestrator(settings: Settings, store: FileSessionStore) -> SessionOrchestrator | OfflineOrchestrator:
    """Pick the offline or the real orchestrator from settings."""
    if settings.test_mode:
        logger.info("test_mode.enabled")
        return OfflineOrchestrator(store)
    return SessionOrchestrator(
        get_agent_service(settings),
        store,
        timeout_seconds=settings.run_timeout_seconds,
    )


def read_prompt(path: str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InvalidInput(f"Cannot read prompt file {path}: {e}") from e


def write_reply(path: str, reply: str) -> None:
    """Overwrite ``path`` with the reply verbatim, newline-terminated."""
    if not reply.endswith("\n"):
        reply += "\n"
    try:
        Path(path).write_text(reply, encoding="utf-8")
    except OSError as e:
        raise InvalidInput(f"Cannot write output file {path}: {e}") from e


async def run_prompt(
    prompt_file: str,
    output_file: str,
    thread_id: str | None,
    settings: Settings,
) -> RunResult:
    """Read the prompt, run it, and write the reply. Nothing is written on failure."""
    prompt_text = read_prompt(prompt_file)
    store = FileSessionStore(settings.thread_id_file)
    orchestrator = build_orchestrator(settings, store)

    result = await orchestrator.run(prompt_text, thread_id)

    write_reply(output_file, result.reply)
    logger.info("output.written", path=output_file, thread_id=result.thread_id)
    return result


def _session_command(action: str, settings: Settings) -> int:
    store = FileSessionStore(settings.thread_id_file)
    if action == "reset":
        store.clear()
        return 0

    thread_id = store.load()
    if thread_id is None:
        logger.warning("session.none", path=str(store.path))
        return 1
    line = f"{thread_id}\t{store.age_hours():.1f}h"
    if store.is_expired(settings.session_expiry_hours):
        logger.warning("session.expired", thread_id=thread_id, expiry_hours=settings.session_expiry_hours)
        line += "\texpired"
    print(line)
    return 0


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    configure_logging(settings.log_level)

    try:
        args = build_parser().parse_args(argv)

        if args.command == "session":
            return _session_command(args.action, settings)

        if not args.prompt_file or not args.output_file:
            raise InvalidInput(
                "Usage: thread-runner run <prompt-file> <output-file> [thread-id]"
            )
        asyncio.run(run_prompt(args.prompt_file, args.output_file, args.thread_id, settings))
    except RunnerError as e:
        logger.error("runner.failed", error_type=type(e).__name__, error=str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
