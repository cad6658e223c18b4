"""
Configuration management for the thread runner.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Runner settings loaded from environment variables."""

    # Application
    app_name: str = "thread-runner"
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Offline mode: skip the remote service and emit fixed output
    test_mode: bool = Field(default=False, alias="CODEX_TEST_MODE")

    # Remote agent service
    openai_api_key: str = Field(default="", alias="OPENAI_API_KEY")
    openai_base_url: str = Field(default="https://api.openai.com/v1", alias="OPENAI_BASE_URL")
    openai_assistant_id: str = Field(default="", alias="OPENAI_ASSISTANT_ID")

    # Run polling
    run_poll_interval_ms: int = Field(default=1000, alias="RUN_POLL_INTERVAL_MS")
    # None means wait indefinitely
    run_timeout_seconds: float | None = Field(default=None, alias="RUN_TIMEOUT_SECONDS")

    # Session persistence
    thread_id_file: str = Field(default=".codex_thread_id", alias="CODEX_THREAD_ID_FILE")
    # 0 or less: stored handles never expire
    session_expiry_hours: float = Field(default=0, alias="SESSION_EXPIRY_HOURS")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
