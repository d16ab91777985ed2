"""Service configuration loaded from AUTOPILOT_* environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

CREDENTIAL_ENV_VAR = "OPENAI_API_KEY"


class AutopilotSettings(BaseSettings):
    """Autopilot Agent Service settings.

    All fields are read from environment variables with the ``AUTOPILOT_``
    prefix.  For example, ``AUTOPILOT_LOG_LEVEL=DEBUG`` maps to ``log_level``.

    The model credential is the exception: it is read from the conventional
    ``OPENAI_API_KEY`` variable (``AUTOPILOT_OPENAI_API_KEY`` also works).
    """

    model_config = SettingsConfigDict(
        env_prefix="AUTOPILOT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -- Logging ---------------------------------------------------------------
    log_level: str = "INFO"
    log_json: bool = False
    """Emit one JSON object per log line (loguru ``serialize``)."""

    # -- Server ----------------------------------------------------------------
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 8000

    # -- Generation ------------------------------------------------------------
    openai_api_key: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices(CREDENTIAL_ENV_VAR, "AUTOPILOT_OPENAI_API_KEY"),
    )
    """Credential used to authorize the generation call.  Required."""

    model: str = "gpt-4.1-mini"
    """OpenAI chat model name."""

    temperature: float = Field(default=0.6, ge=0.0, le=2.0)
    max_output_tokens: int = Field(default=900, gt=0)

    output_retries: int = Field(default=1, ge=0)
    """How many times the SDK may ask the model to fix a schema-invalid output."""

    # -- Prompting -------------------------------------------------------------
    knowledge_limit: int = Field(default=3, ge=0)
    """Maximum knowledge entries injected into each prompt."""

    system_prompt: str | None = None
    """Optional Jinja2 template replacing the built-in system prompt."""

    # -- Helpers ---------------------------------------------------------------

    def has_credential(self) -> bool:
        return self.openai_api_key is not None and bool(self.openai_api_key.get_secret_value().strip())


def get_settings() -> AutopilotSettings:
    """Return a cached settings instance.

    Reads from environment variables and ``.env`` on first call, then returns
    the same object.  Call ``_get_settings_cached.cache_clear()`` in tests to
    force a re-read after overriding env vars.
    """
    return _get_settings_cached()


@lru_cache(maxsize=1)
def _get_settings_cached() -> AutopilotSettings:
    return AutopilotSettings()
