"""Unit tests for provider settings loading."""
import pytest

from directus_iac.config import settings
from directus_iac.config.settings import ProviderConfig, load_settings
from directus_iac.core.directus import REQUEST_TIMEOUT, ConfigurationError

ENV_VARS = (
    "DIRECTUS_ENDPOINT",
    "DIRECTUS_TOKEN",
    "DIRECTUS_TIMEOUT",
    "DIRECTUS_AUDIT_LOG",
    "DIRECTUS_OPERATOR",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # Never pick up a real /run/secrets mount
    monkeypatch.setattr(settings, "Path", lambda *_: tmp_path / "run-secrets")


def test_load_settings_defaults(monkeypatch):
    monkeypatch.setenv("DIRECTUS_ENDPOINT", "https://cms.example.com")
    monkeypatch.setenv("DIRECTUS_TOKEN", "env-token")

    config = load_settings()

    assert config == ProviderConfig(endpoint="https://cms.example.com", token="env-token")
    assert config.timeout == REQUEST_TIMEOUT
    assert config.audit_log_enabled is False
    assert config.operator == "automation"


def test_token_not_in_repr(monkeypatch):
    monkeypatch.setenv("DIRECTUS_ENDPOINT", "https://cms.example.com")
    monkeypatch.setenv("DIRECTUS_TOKEN", "super-secret")

    assert "super-secret" not in repr(load_settings())


def test_missing_endpoint():
    with pytest.raises(ConfigurationError, match="DIRECTUS_ENDPOINT"):
        load_settings()


def test_missing_token(monkeypatch):
    monkeypatch.setenv("DIRECTUS_ENDPOINT", "https://cms.example.com")

    with pytest.raises(ConfigurationError, match="DIRECTUS_TOKEN not found"):
        load_settings()


def test_token_from_secret_file(monkeypatch, tmp_path):
    secrets_dir = tmp_path / "run-secrets"
    secrets_dir.mkdir()
    (secrets_dir / "directus_token").write_text("file-token\n")
    monkeypatch.setenv("DIRECTUS_ENDPOINT", "https://cms.example.com")
    monkeypatch.setenv("DIRECTUS_TOKEN", "env-token")

    assert load_settings().token == "file-token"


def test_empty_secret_file_falls_back_to_env(monkeypatch, tmp_path):
    secrets_dir = tmp_path / "run-secrets"
    secrets_dir.mkdir()
    (secrets_dir / "directus_token").write_text("  \n")
    monkeypatch.setenv("DIRECTUS_ENDPOINT", "https://cms.example.com")
    monkeypatch.setenv("DIRECTUS_TOKEN", "env-token")

    assert load_settings().token == "env-token"


def test_optional_settings(monkeypatch):
    monkeypatch.setenv("DIRECTUS_ENDPOINT", "https://cms.example.com")
    monkeypatch.setenv("DIRECTUS_TOKEN", "env-token")
    monkeypatch.setenv("DIRECTUS_TIMEOUT", "12.5")
    monkeypatch.setenv("DIRECTUS_AUDIT_LOG", "True")
    monkeypatch.setenv("DIRECTUS_OPERATOR", "ci-pipeline")

    config = load_settings()

    assert config.timeout == 12.5
    assert config.audit_log_enabled is True
    assert config.operator == "ci-pipeline"


@pytest.mark.parametrize("raw", ["soon", "0", "-3"])
def test_invalid_timeout(monkeypatch, raw):
    monkeypatch.setenv("DIRECTUS_ENDPOINT", "https://cms.example.com")
    monkeypatch.setenv("DIRECTUS_TOKEN", "env-token")
    monkeypatch.setenv("DIRECTUS_TIMEOUT", raw)

    with pytest.raises(ConfigurationError, match="DIRECTUS_TIMEOUT"):
        load_settings()
