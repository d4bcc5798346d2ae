"""Unit tests for settings fallbacks"""

import pytest
from installment_portal.config import PLACEHOLDER_STORE_KEY, PLACEHOLDER_STORE_URL, Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("SUPABASE_URL", "SUPABASE_ANON_KEY", "DATABASE_URL"):
        monkeypatch.delenv(name, raising=False)


def test_missing_url_falls_back_to_placeholder():
    settings = Settings(_env_file=None)
    assert settings.supabase_url == PLACEHOLDER_STORE_URL
    assert settings.supabase_anon_key == PLACEHOLDER_STORE_KEY
    assert settings.uses_placeholder_store


@pytest.mark.parametrize("url", ["not a url", "supabase.co", "ftp://", ""])
def test_malformed_url_falls_back_to_placeholder(url):
    settings = Settings(_env_file=None, supabase_url=url)
    assert settings.supabase_url == PLACEHOLDER_STORE_URL


def test_valid_url_from_environment(monkeypatch):
    monkeypatch.setenv("SUPABASE_URL", "https://abcd.supabase.co")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "anon-key")

    settings = Settings(_env_file=None)

    assert settings.supabase_url == "https://abcd.supabase.co"
    assert settings.supabase_anon_key == "anon-key"
    assert not settings.uses_placeholder_store


def test_database_url_means_no_placeholder_store():
    settings = Settings(_env_file=None, database_url="postgresql://localhost/portal")
    assert not settings.uses_placeholder_store


def test_business_defaults():
    settings = Settings(_env_file=None)
    assert settings.installment_transaction_type == "CICILAN"
    assert settings.item_note_prefix == "Cicilan: "
    assert settings.min_suffix_digits == 4
