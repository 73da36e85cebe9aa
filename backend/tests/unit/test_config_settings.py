"""Unit tests for application settings configuration."""

from pathlib import Path

from duna_service.config import Settings


def test_settings_uses_backend_env_file_independent_of_cwd():
    """Settings should always include backend/.env as an env source."""
    env_files = Settings.model_config.get("env_file")
    assert env_files is not None

    normalized = {str(Path(item)) for item in env_files}
    expected_backend_env = str(Path(__file__).resolve().parents[2] / ".env")

    assert expected_backend_env in normalized
    assert str(Path(".env")) in normalized


def test_settings_read_pipeline_values_from_environment(monkeypatch):
    monkeypatch.setenv("GENERATION_API_KEY", "sk-test")
    monkeypatch.setenv("GENERATION_MAX_TOKENS", "512")
    monkeypatch.setenv("RPC_URL", "http://localhost:8545")
    monkeypatch.setenv("PRIVATE_KEY", "0x" + "11" * 32)
    monkeypatch.setenv("DEPLOY_CONFIRMATION_TIMEOUT", "45")
    monkeypatch.setenv("SOURCE_TRANSFORM", "reverse")

    settings = Settings(_env_file=None)

    assert settings.generation_max_tokens == 512
    assert settings.deploy_confirmation_timeout == 45.0
    assert settings.source_transform == "reverse"
    assert settings.generation_configured is True
    assert settings.chain_configured is True


def test_chain_is_unconfigured_without_rpc_url(monkeypatch):
    monkeypatch.delenv("RPC_URL", raising=False)
    monkeypatch.delenv("PRIVATE_KEY", raising=False)
    monkeypatch.delenv("PRIVATE_KEY_FILE", raising=False)

    settings = Settings(_env_file=None, private_key="0x" + "11" * 32)

    assert settings.chain_configured is False
