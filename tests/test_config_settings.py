"""Tests for environment-driven settings loading and validation."""

from __future__ import annotations

import io

import pytest
import structlog

from acrolinx_mcp.config import SettingsLoadError, config_configure_logging, config_load_settings


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Run each test without a dotenv file or inherited Acrolinx variables."""

    monkeypatch.chdir(tmp_path)
    for variable_name in (
        "ACROLINX_API_KEY",
        "ACROLINX_BASE_URL",
        "WORKFLOW_TIMEOUT",
        "POLL_INTERVAL",
        "MAX_RETRIES",
        "MAX_TEXT_LENGTH",
        "DEBUG",
    ):
        monkeypatch.delenv(variable_name, raising=False)


def test_config_load_settings_applies_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Load defaults when only the API key is provided.

    Args:
        monkeypatch: Pytest monkeypatch fixture.

    Returns:
        None: Assertions validate default values.

    Raises:
        AssertionError: Raised when defaults differ.
    """

    monkeypatch.setenv("ACROLINX_API_KEY", "secret-key")

    settings = config_load_settings()

    assert settings.acrolinx_api_key == "secret-key"
    assert settings.acrolinx_base_url == "https://app.acrolinx.cloud"
    assert settings.workflow_timeout == 60000
    assert settings.poll_interval == 2000
    assert settings.max_retries == 3
    assert settings.retry_base_delay_ms == 1000
    assert settings.max_text_length == 100000
    assert settings.continue_on_poll_error is True
    assert settings.debug is False


def test_config_load_settings_reads_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    """Read overrides and strip the trailing slash from the base URL."""

    monkeypatch.setenv("ACROLINX_API_KEY", "  secret-key  ")
    monkeypatch.setenv("ACROLINX_BASE_URL", "https://acrolinx.example.test/")
    monkeypatch.setenv("WORKFLOW_TIMEOUT", "5000")
    monkeypatch.setenv("POLL_INTERVAL", "250")
    monkeypatch.setenv("MAX_RETRIES", "5")
    monkeypatch.setenv("DEBUG", "true")

    settings = config_load_settings()

    assert settings.acrolinx_api_key == "secret-key"
    assert settings.acrolinx_base_url == "https://acrolinx.example.test"
    assert settings.workflow_timeout == 5000
    assert settings.poll_interval == 250
    assert settings.max_retries == 5
    assert settings.debug is True


def test_config_load_settings_requires_api_key() -> None:
    """Fail startup when the API key is missing."""

    with pytest.raises(SettingsLoadError, match="acrolinx_api_key"):
        config_load_settings()


def test_config_load_settings_rejects_invalid_base_url(monkeypatch: pytest.MonkeyPatch) -> None:
    """Reject a base URL without an HTTP scheme."""

    monkeypatch.setenv("ACROLINX_API_KEY", "secret-key")
    monkeypatch.setenv("ACROLINX_BASE_URL", "acrolinx.example.test")

    with pytest.raises(SettingsLoadError):
        config_load_settings()


def test_config_configure_logging_writes_key_value_lines_to_stream() -> None:
    """Render events as key/value lines and filter debug events unless enabled."""

    stream = io.StringIO()
    config_configure_logging(debug=False, stream=stream)
    logger = structlog.get_logger("test")

    logger.debug("hidden event")
    logger.info("visible event", workflow_id="wf-1")

    output = stream.getvalue()
    assert "hidden event" not in output
    assert "event='visible event'" in output
    assert "level='info'" in output
    assert "workflow_id='wf-1'" in output
