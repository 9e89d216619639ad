"""Unit tests for application settings configuration."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from sportsnews.config import Settings


def test_settings_uses_backend_env_file_independent_of_cwd():
    """Settings should always include backend/.env as an env source."""
    env_files = Settings.model_config.get("env_file")
    assert env_files is not None

    normalized = {str(Path(item)) for item in env_files}
    expected_backend_env = str(Path(__file__).resolve().parents[2] / ".env")

    assert expected_backend_env in normalized
    assert str(Path(".env")) in normalized


def test_supabase_endpoints_derive_from_project_url():
    settings = Settings(supabase_url="https://demo.supabase.co/", _env_file=None)
    assert settings.rest_url == "https://demo.supabase.co/rest/v1"
    assert settings.auth_url == "https://demo.supabase.co/auth/v1"


def test_like_toggle_policy_defaults_to_reject(monkeypatch):
    monkeypatch.delenv("LIKE_TOGGLE_POLICY", raising=False)
    assert Settings(_env_file=None).like_toggle_policy == "reject"


def test_like_toggle_policy_from_environment(monkeypatch):
    monkeypatch.setenv("LIKE_TOGGLE_POLICY", "queue")
    assert Settings(_env_file=None).like_toggle_policy == "queue"


def test_unknown_like_toggle_policy_is_rejected(monkeypatch):
    monkeypatch.setenv("LIKE_TOGGLE_POLICY", "drop")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
