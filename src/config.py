"""Environment-based configuration loader using pydantic BaseSettings."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Every field has a default so the demo service starts with an empty
    environment; values from the environment (or a .env file) override them.
    """

    # Application
    app_name: str = "Web Exception Handling Demo"
    app_version: str = "0.1.0"
    log_level: str = "INFO"

    # Access gate
    forbidden_path_marker: str = "secret2"
    access_denied_message: str = "Stop! This access is forbidden"

    # Error translation
    default_error_message: str = "Oups, Houston, we have a problem"
    # Reproduce the original text-template body with naive quote escaping
    legacy_error_escaping: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


def get_settings() -> Settings:
    """Create and return a validated Settings instance."""
    return Settings()
