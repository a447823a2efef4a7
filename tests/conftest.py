import pytest

from logwrap import config


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch):
    monkeypatch.setattr(config, "DEFAULT_CONFIG_FILES", [])
    for name in config.ENV_OVERRIDES:
        monkeypatch.delenv(name, raising=False)
