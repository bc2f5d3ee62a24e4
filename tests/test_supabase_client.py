from unittest.mock import MagicMock, patch

import pytest

from app.config import Settings, settings
from app.database.supabase_client import SupabaseClient, get_supabase


@pytest.fixture(autouse=True)
def _reset_client():
    SupabaseClient.reset_client()
    yield
    SupabaseClient.reset_client()


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("SUPABASE_URL", "https://project.supabase.co")
    monkeypatch.setenv("SUPABASE_KEY", "publishable-key")
    monkeypatch.setenv("AVATARS_BUCKET", "profile-pictures")

    loaded = Settings(_env_file=None)

    assert loaded.supabase_url == "https://project.supabase.co"
    assert loaded.avatars_bucket == "profile-pictures"
    assert loaded.is_configured


def test_client_requires_configuration(monkeypatch):
    monkeypatch.setattr(settings, "supabase_url", "")

    with pytest.raises(ValueError):
        get_supabase()


def test_client_is_created_once(monkeypatch):
    monkeypatch.setattr(settings, "supabase_url", "https://project.supabase.co")
    monkeypatch.setattr(settings, "supabase_key", "publishable-key")
    client = MagicMock(name="client")

    with patch("app.database.supabase_client.create_client", return_value=client) as create:
        assert get_supabase() is client
        assert get_supabase() is client

    create.assert_called_once_with("https://project.supabase.co", "publishable-key")
