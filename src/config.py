from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Central configuration loaded from environment / .env file."""

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "PDL_MONITOR_",
        "extra": "ignore",
    }

    # Check definitions (YAML)
    config_path: str = "monitor.yaml"

    # text | json | table
    output_format: str = "text"

    # Argument passed to init scripts for the running check
    status_argument: str = "status"

    # Table holding created/updated millisecond timestamps for the index check
    index_query_table: str = "event"

    # Logging (stderr; stdout belongs to the supervisor)
    log_level: str = "WARNING"


settings = Settings()
