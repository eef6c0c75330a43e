"""Package settings loaded from environment variables."""

import logging
import os

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _env_file() -> str | None:
    if os.getenv("PYTEST_CURRENT_TEST"):
        return None
    return ".env"


class PulseSettings(BaseSettings):
    """Pulse configuration. Values come from ``PULSE_*`` environment variables."""

    # Logging
    log_level: str = Field(default="INFO")

    # Stop every registered pulse when the interpreter exits
    stop_on_exit: bool = Field(default=True)

    model_config = SettingsConfigDict(
        env_prefix="PULSE_",
        env_file=_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        if os.getenv("PYTEST_CURRENT_TEST"):
            return (init_settings,)
        return (init_settings, env_settings, dotenv_settings, file_secret_settings)


settings = PulseSettings()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging with the package's standard format."""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=getattr(logging, (level or settings.log_level).upper()),
    )
