"""
Result schema for a single prompt run.
"""

from pydantic import BaseModel, Field


class RunResult(BaseModel):
    """Outcome of one submit-and-wait cycle."""
    reply: str = Field(description="Final assistant reply text, verbatim")
    thread_id: str = Field(min_length=1, description="Thread the prompt was sent to")
    run_id: str | None = Field(default=None, description="Remote run id (None in offline mode)")
    created: bool = Field(default=False, description="Whether this run created the thread")
