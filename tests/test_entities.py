from __future__ import annotations

import sys
from pathlib import Path

# Garante que o pacote espressolab seja importável durante os testes locais
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from espressolab.db.models import MODELS  # noqa: E402
from espressolab.domain.entities import DataModel, EntityKind, name_of  # noqa: E402


def test_every_entity_kind_has_a_schema_name():
    assert name_of(EntityKind.STORE) == "Store"
    for kind in EntityKind:
        assert name_of(kind) == kind.schema_name
        assert name_of(kind)


def test_data_model_file():
    assert DataModel.ESPRESSO_LAB.file == "EspressoLab"
    assert DataModel("espressoLab") is DataModel.ESPRESSO_LAB


def test_every_entity_kind_is_declared_by_the_espresso_lab_model():
    tables = {model.__tablename__ for model in MODELS[DataModel.ESPRESSO_LAB]}
    assert tables == {name_of(kind) for kind in EntityKind}
