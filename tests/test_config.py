from pathlib import Path

import pytest
from pydantic import ValidationError

from artemis.config import load_config
from artemis.config import loader


@pytest.fixture
def no_default_config(tmp_path, monkeypatch):
    monkeypatch.setattr(loader, "DEFAULT_CONFIG_PATH", tmp_path / "missing.yaml")


def write_config(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults_without_config_file(no_default_config):
    cfg = load_config()

    assert cfg.llm.model == "gemini-3-flash-preview"
    assert cfg.llm.thinking_model == "gemini-3-pro-preview"
    assert cfg.email is None
    assert cfg.alerts.admin_password == "admin123"
    assert len(cfg.alerts.recipients) == 5
    assert cfg.monitor.batch_size == 3


def test_environment_only_configuration(no_default_config, monkeypatch):
    monkeypatch.setenv("ARTEMIS_LLM__API_KEY", "env-key")
    monkeypatch.setenv("ARTEMIS_MONITOR__INTERVAL_MINUTES", "5")

    cfg = load_config()

    assert cfg.llm.api_key == "env-key"
    assert cfg.monitor.interval_minutes == 5


def test_yaml_with_environment_substitution(tmp_path, monkeypatch):
    monkeypatch.setenv("ARTEMIS_TEST_KEY", "sk-from-env")
    monkeypatch.delenv("ARTEMIS_TEST_LEVEL", raising=False)
    path = write_config(
        tmp_path,
        """
llm:
  api_key: $ARTEMIS_TEST_KEY
  model: gemini-3-flash-preview
logging:
  level: $ARTEMIS_TEST_LEVEL:DEBUG
email:
  smtp_user: artemis
  smtp_password: secret
  from_address: alerts@artemis.corp
""",
    )

    cfg = load_config(path)

    assert cfg.llm.api_key == "sk-from-env"
    assert cfg.logging.level == "DEBUG"
    assert cfg.email.smtp_port == 587
    assert cfg.email.from_name == "ARTEMIS Alerts"


def test_overrides_apply_dotted_keys(no_default_config, tmp_path):
    cfg = load_config(overrides={"state.db_path": str(tmp_path / "x.db"), "monitor.interval_minutes": 1})

    assert cfg.state.db_path == tmp_path / "x.db"
    assert cfg.monitor.interval_minutes == 1


def test_missing_explicit_config_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_unset_env_vars_fall_back_to_defaults():
    data = {"a": "$UNSET_VALUE:fallback", "b": ["$OTHER:x", 3], "c": "plain"}

    assert loader._resolve_defaults(data) == {"a": "fallback", "b": ["x", 3], "c": "plain"}


@pytest.mark.parametrize("minutes", [0, -5])
def test_monitor_interval_must_be_positive(no_default_config, minutes):
    with pytest.raises(ValidationError):
        load_config(overrides={"monitor.interval_minutes": minutes})
