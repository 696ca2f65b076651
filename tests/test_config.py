"""Tests for settings loading."""

import pytest

from notion_random_data.config import get_settings
from notion_random_data.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    # No .env file and no inherited settings
    monkeypatch.chdir(tmp_path)
    for name in ("NOTION_TOKEN", "BASE_PARENT_PAGE_ID", "SOURCE_DATABASE_ID", "UPDATE_DATABASE_ID", "REQUEST_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("NOTION_TOKEN", "secret_env")
    monkeypatch.setenv("BASE_PARENT_PAGE_ID", "parent")
    monkeypatch.setenv("REQUEST_TIMEOUT", "12.5")

    settings = get_settings()

    assert settings.notion_token == "secret_env"
    assert settings.base_parent_page_id == "parent"
    assert settings.request_timeout == 12.5
    assert settings.source_database_id is None


def test_missing_settings_raise_configuration_error(monkeypatch):
    monkeypatch.setenv("BASE_PARENT_PAGE_ID", "parent")

    with pytest.raises(ConfigurationError, match="NOTION_TOKEN"):
        get_settings()
