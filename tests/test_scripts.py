from __future__ import annotations

import importlib.util
import sys
from pathlib import Path

import pytest

# Garante que o pacote espressolab seja importável durante os testes locais
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from espressolab.core.config import StoreBacking  # noqa: E402
from espressolab.db import create_tables  # noqa: E402
from espressolab.domain.entities import DataModel, EntityKind  # noqa: E402
from espressolab.repositories.local_store import LocalStore  # noqa: E402


def _load_script(name: str):
    path = ROOT / "scripts" / f"{name}.py"
    spec = importlib.util.spec_from_file_location(f"scripts_{name}", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _stored(data_dir: Path) -> list[dict]:
    with LocalStore() as store:
        store.initialize(DataModel.ESPRESSO_LAB, backing=StoreBacking.DURABLE, data_dir=data_dir)
        return store.fetch(EntityKind.STORE)


def test_create_tables(tmp_path, capsys):
    create_tables.main(["--data-dir", str(tmp_path)])
    assert (tmp_path / "EspressoLab.sqlite").exists()
    assert "Store schema ready" in capsys.readouterr().out


def test_create_tables_reports_fatal_errors(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    with pytest.raises(SystemExit) as info:
        create_tables.main(["--data-dir", str(blocker)])
    assert "Failed to create tables" in str(info.value)


def test_add_and_reset_stores(tmp_path, capsys):
    add_store = _load_script("add_store")
    reset_stores = _load_script("reset_stores")

    add_store.main(["--id", "1", "--name", "Centro", "--data-dir", str(tmp_path)])
    add_store.main(["--id", "2", "--name", "Savassi", "--data-dir", str(tmp_path)])
    assert "OK: store saved" in capsys.readouterr().out
    assert sorted(item["id"] for item in _stored(tmp_path)) == ["1", "2"]

    reset_stores.main(["--id", "1", "--data-dir", str(tmp_path)])
    assert "remaining: 1" in capsys.readouterr().out
    assert _stored(tmp_path) == [{"id": "2", "name": "Savassi"}]

    reset_stores.main(["--all", "--data-dir", str(tmp_path)])
    assert "remaining: 0" in capsys.readouterr().out


def test_add_store_rejects_blank_id(tmp_path):
    add_store = _load_script("add_store")
    with pytest.raises(SystemExit):
        add_store.main(["--id", "  ", "--name", "x", "--data-dir", str(tmp_path)])
