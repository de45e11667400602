from pathlib import Path
from uuid import UUID

import pytest

from dailyscry.config import Settings, load_settings
from dailyscry.models import ConfigurationError

ORACLE_ID = "14c8cee5-9a29-4e7d-9ce0-1ac2a8a8bd40"
OTHER_ORACLE_ID = "5089ec1a-f881-4d55-af14-5d996171203b"


class TestDefaults:
    def test_defaults(self, settings: Settings) -> None:
        assert settings.mastodon_url is None
        assert settings.mastodon_character_limit == 500
        assert settings.telegram_character_limit == 4096
        assert settings.image_path == Path("/tmp")
        assert settings.ignored_oracle_id_set == frozenset()


class TestEnvironment:
    def test_reads_prefixed_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DAILY_SCRY_MASTODON_URL", "https://mastodon.example")
        monkeypatch.setenv("DAILY_SCRY_MASTODON_CHARACTER_LIMIT", "1000")
        monkeypatch.setenv("DAILY_SCRY_IMAGE_PATH", "/var/tmp/scry")

        loaded = load_settings(_env_file=None)

        assert loaded.mastodon_url == "https://mastodon.example"
        assert loaded.mastodon_character_limit == 1000
        assert loaded.image_path == Path("/var/tmp/scry")

    def test_ignored_oracle_ids(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DAILY_SCRY_IGNORED_ORACLE_IDS", f"{ORACLE_ID}, {OTHER_ORACLE_ID},")

        loaded = load_settings(_env_file=None)

        assert loaded.ignored_oracle_id_set == frozenset({UUID(ORACLE_ID), UUID(OTHER_ORACLE_ID)})

    def test_malformed_oracle_id_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DAILY_SCRY_IGNORED_ORACLE_IDS", "not-a-uuid")

        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(_env_file=None)

        assert exc_info.value.key == "DAILY_SCRY_IGNORED_ORACLE_IDS"

    def test_malformed_limit_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DAILY_SCRY_TELEGRAM_CHARACTER_LIMIT", "lots")

        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(_env_file=None)

        assert exc_info.value.key == "DAILY_SCRY_TELEGRAM_CHARACTER_LIMIT"


class TestChannelChecks:
    def test_mastodon_url_missing(self, settings: Settings) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            settings.check_mastodon_config()

        assert exc_info.value.key == "DAILY_SCRY_MASTODON_URL"

    def test_mastodon_token_missing(self) -> None:
        settings = Settings(_env_file=None, mastodon_url="https://mastodon.example")  # type: ignore[call-arg]

        with pytest.raises(ConfigurationError) as exc_info:
            settings.check_mastodon_config()

        assert exc_info.value.key == "DAILY_SCRY_MASTODON_ACCESS_TOKEN"

    def test_mastodon_complete(self) -> None:
        settings = Settings(  # type: ignore[call-arg]
            _env_file=None,
            mastodon_url="https://mastodon.example",
            mastodon_access_token="token",
        )

        settings.check_mastodon_config()

    def test_mastodon_limit_must_be_positive(self) -> None:
        settings = Settings(  # type: ignore[call-arg]
            _env_file=None,
            mastodon_url="https://mastodon.example",
            mastodon_access_token="token",
            mastodon_character_limit=0,
        )

        with pytest.raises(ConfigurationError) as exc_info:
            settings.check_mastodon_config()

        assert exc_info.value.key == "DAILY_SCRY_MASTODON_CHARACTER_LIMIT"

    def test_telegram_chat_missing(self) -> None:
        settings = Settings(_env_file=None, telegram_token="123:abc")  # type: ignore[call-arg]

        with pytest.raises(ConfigurationError) as exc_info:
            settings.check_telegram_config()

        assert exc_info.value.key == "DAILY_SCRY_TELEGRAM_CHAT_ID"

    def test_telegram_complete(self) -> None:
        settings = Settings(  # type: ignore[call-arg]
            _env_file=None,
            telegram_token="123:abc",
            telegram_chat_id="@dailyscry",
        )

        settings.check_telegram_config()
