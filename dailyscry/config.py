from pathlib import Path
from uuid import UUID

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from dailyscry.models.failure import ConfigurationError

ENV_PREFIX = "DAILY_SCRY_"


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, env_file=".env", extra="ignore")

    mastodon_url: str | None = None
    mastodon_access_token: str | None = None
    mastodon_character_limit: int = 500

    telegram_token: str | None = None
    telegram_chat_id: str | None = None
    telegram_character_limit: int = 4096

    # Where downloaded card images are written
    image_path: Path = Path("/tmp")

    # Comma separated Scryfall oracle IDs that are never posted
    ignored_oracle_ids: str = ""

    @field_validator("ignored_oracle_ids")
    @classmethod
    def _validate_oracle_ids(cls, value: str) -> str:
        for oracle_id in _split_ids(value):
            UUID(oracle_id)
        return value

    @property
    def ignored_oracle_id_set(self) -> frozenset[UUID]:
        """Ignored oracle IDs as UUIDs."""
        return frozenset(UUID(oracle_id) for oracle_id in _split_ids(self.ignored_oracle_ids))

    def check_mastodon_config(self) -> None:
        """
        Ensure everything needed to post to Mastodon is set.

        Raises:
            ConfigurationError: Naming the first missing variable
        """
        if not self.mastodon_url:
            raise ConfigurationError(f"{ENV_PREFIX}MASTODON_URL")
        if not self.mastodon_access_token:
            raise ConfigurationError(f"{ENV_PREFIX}MASTODON_ACCESS_TOKEN")
        if self.mastodon_character_limit <= 0:
            raise ConfigurationError(
                f"{ENV_PREFIX}MASTODON_CHARACTER_LIMIT", detail="must be positive"
            )

    def check_telegram_config(self) -> None:
        """
        Ensure everything needed to post to Telegram is set.

        Raises:
            ConfigurationError: Naming the first missing variable
        """
        if not self.telegram_token:
            raise ConfigurationError(f"{ENV_PREFIX}TELEGRAM_TOKEN")
        if not self.telegram_chat_id:
            raise ConfigurationError(f"{ENV_PREFIX}TELEGRAM_CHAT_ID")
        if self.telegram_character_limit <= 0:
            raise ConfigurationError(
                f"{ENV_PREFIX}TELEGRAM_CHARACTER_LIMIT", detail="must be positive"
            )


def _split_ids(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def load_settings(**overrides: object) -> Settings:
    """
    Load settings from the environment and .env.

    Args:
        **overrides: Values taking precedence over the environment

    Raises:
        ConfigurationError: If a variable cannot be parsed
    """
    try:
        return Settings(**overrides)  # type: ignore[arg-type]
    except ValidationError as e:
        error = e.errors()[0]
        field_name = str(error["loc"][0]) if error["loc"] else "settings"
        raise ConfigurationError(f"{ENV_PREFIX}{field_name.upper()}", detail=error["msg"]) from e
