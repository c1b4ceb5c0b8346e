from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Garante que o pacote espressolab seja importável durante os testes locais
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from espressolab.core import config as core_config  # noqa: E402
from espressolab.core.config import StoreBacking  # noqa: E402


@pytest.fixture()
def fresh_settings(monkeypatch):
    for name in ("ESPRESSOLAB_STORE_BACKING", "ESPRESSOLAB_DATA_DIR", "ESPRESSOLAB_SQL_ECHO", "ESPRESSOLAB_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    core_config.get_settings.cache_clear()
    yield monkeypatch
    core_config.get_settings.cache_clear()


def test_defaults_are_in_memory(fresh_settings):
    settings = core_config.get_settings()
    assert settings.store_backing is StoreBacking.MEMORY
    assert settings.data_dir == Path("data")
    assert settings.sql_echo is False
    assert settings.log_level == "INFO"


def test_environment_overrides(fresh_settings, tmp_path):
    fresh_settings.setenv("ESPRESSOLAB_STORE_BACKING", "Durable")
    fresh_settings.setenv("ESPRESSOLAB_DATA_DIR", str(tmp_path))
    fresh_settings.setenv("ESPRESSOLAB_SQL_ECHO", "yes")
    fresh_settings.setenv("ESPRESSOLAB_LOG_LEVEL", "debug")
    settings = core_config.get_settings()
    assert settings.store_backing is StoreBacking.DURABLE
    assert settings.data_dir == tmp_path
    assert settings.sql_echo is True
    assert settings.log_level == "DEBUG"


def test_unknown_backing_falls_back_to_memory(fresh_settings):
    fresh_settings.setenv("ESPRESSOLAB_STORE_BACKING", "cloud")
    assert core_config.get_settings().store_backing is StoreBacking.MEMORY
