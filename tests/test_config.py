import importlib
import sys
from pathlib import Path

import pytest

# Ensure the repository root is on the Python path for module imports
sys.path.append(str(Path(__file__).resolve().parents[1]))

import config
from exceptions import ConfigurationException


@pytest.fixture
def reload_config(monkeypatch):
    yield lambda: importlib.reload(config)
    monkeypatch.undo()
    importlib.reload(config)


def test_config_reads_environment(monkeypatch, reload_config):
    monkeypatch.setenv("SENTRY_DSN", "https://key@sentry.example.com/1")
    monkeypatch.setenv("SENTRY_OPTIONS", '{"environment": "staging"}')
    monkeypatch.setenv("SENTRY_ENABLED", "false")

    settings = reload_config()

    assert settings.SENTRY_DSN == "https://key@sentry.example.com/1"
    assert settings.SENTRY_OPTIONS == {"environment": "staging"}
    assert settings.SENTRY_ENABLED is False


def test_config_rejects_invalid_options(monkeypatch, reload_config):
    monkeypatch.setenv("SENTRY_JS_OPTIONS", "not json")

    with pytest.raises(ConfigurationException):
        reload_config()
