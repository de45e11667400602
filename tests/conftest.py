from pathlib import Path

import pytest

from dailyscry.config import ENV_PREFIX, Settings
from dailyscry.models.card import Card
from dailyscry.parsers.scryfall import load_cards

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep DAILY_SCRY_* variables of the host out of the tests."""
    for name in Settings.model_fields:
        monkeypatch.delenv(f"{ENV_PREFIX}{name.upper()}", raising=False)


@pytest.fixture(scope="session")
def cards() -> dict[str, Card]:
    """Sample cards parsed from Scryfall JSON, keyed by name."""
    return load_cards(FIXTURES / "scryfall_cards.json")


@pytest.fixture
def settings() -> Settings:
    """Default settings, ignoring any .env file."""
    return Settings(_env_file=None)  # type: ignore[call-arg]
