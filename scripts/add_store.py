#!/usr/bin/env python3
"""
Save a Store record into the durable EspressoLab store.

Usage:
  python scripts/add_store.py --id 1 --name "Centro" [--data-dir ./data]
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Garantir que o pacote espressolab seja importável quando rodado diretamente
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from espressolab.core.config import StoreBacking, get_settings  # noqa: E402
from espressolab.domain.entities import DataModel, EntityKind  # noqa: E402
from espressolab.domain.predicates import attr  # noqa: E402
from espressolab.repositories.errors import FatalInitializationError, StoreError  # noqa: E402
from espressolab.repositories.local_store import LocalStore  # noqa: E402


def main(argv: list[str] | None = None) -> None:
    ap = argparse.ArgumentParser(description="Save a Store into the durable store")
    ap.add_argument("--id", required=True, help="Store id (e.g. 1)")
    ap.add_argument("--name", required=True, help="Store name")
    ap.add_argument("--data-dir", help="Directory holding the store file (default: ESPRESSOLAB_DATA_DIR)")
    args = ap.parse_args(argv)
    logging.basicConfig(level=get_settings().log_level)

    store_id = (args.id or "").strip()
    if not store_id:
        raise SystemExit("Invalid id")
    name = (args.name or "").strip()

    with LocalStore() as store:
        try:
            store.initialize(DataModel.ESPRESSO_LAB, backing=StoreBacking.DURABLE, data_dir=args.data_dir)
        except FatalInitializationError as exc:
            raise SystemExit(f"Store unavailable: {exc}") from exc
        try:
            store.save({"id": store_id, "name": name}, EntityKind.STORE)
            saved = store.fetch(EntityKind.STORE, attr("id") == store_id)
        except StoreError as exc:
            raise SystemExit(f"Error: {exc}") from exc

    print("OK: store saved")
    print(f"  id: {store_id}")
    print(f"  name: {name}")
    print(f"  records with this id: {len(saved)}")


if __name__ == "__main__":
    main()
