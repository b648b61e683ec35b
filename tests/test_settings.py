"""
Environment parsing for runtime settings
"""

import pytest

from userapi.config.settings import DEFAULT_API_KEY, NameMatch, StoreBackend, get_settings


def test_defaults_from_empty_environment(caplog):
    settings = get_settings({})

    assert settings.api_key == DEFAULT_API_KEY
    assert settings.uses_default_api_key
    assert settings.store_backend == StoreBackend.MEMORY
    assert settings.name_match is None
    assert settings.db_host == "localhost"
    assert settings.db_port == 5432
    assert settings.db_close_timeout == 5.0
    assert "insecure default key" in caplog.text


def test_database_values_are_read():
    settings = get_settings({
        "API_KEY": "s3cret",
        "STORE_BACKEND": "Postgres",
        "USER_NAME_MATCH": "substring",
        "DB_HOST": "db",
        "DB_PORT": "6543",
        "DB_USER": "app",
        "DB_PASSWORD": "pw",
        "DB_NAME": "users",
    })

    assert settings.api_key == "s3cret"
    assert settings.store_backend == StoreBackend.POSTGRES
    assert settings.name_match == NameMatch.SUBSTRING
    assert settings.database_target() == "app@db:6543/users"


def test_blank_api_key_falls_back_to_default():
    assert get_settings({"API_KEY": ""}).api_key == DEFAULT_API_KEY


@pytest.mark.parametrize("environ", [
    {"STORE_BACKEND": "sqlite"},
    {"USER_NAME_MATCH": "fuzzy"},
    {"SEED_SAMPLE_USERS": "maybe"},
    {"DB_PORT": "five"},
    {"DB_POOL_MIN": "20", "DB_POOL_MAX": "10"},
])
def test_invalid_values_raise(environ):
    with pytest.raises(ValueError):
        get_settings(environ)


def test_seeding_can_be_disabled():
    assert get_settings({"SEED_SAMPLE_USERS": "false"}).seed_sample_users is False
