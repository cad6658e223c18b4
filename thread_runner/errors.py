"""
Error kinds raised by the runner.

Every error is fatal for the invocation: the CLI reports it on stderr and
exits with status 1.
"""


class RunnerError(Exception):
    """Base class for all runner failures."""


class InvalidInput(RunnerError):
    """Missing arguments or an unusable prompt. Raised before any remote call."""


class ExternalServiceError(RunnerError):
    """Any failure reported by (or while reaching) the remote agent service."""


class SessionStoreError(RunnerError):
    """The local session handle could not be read or written."""
