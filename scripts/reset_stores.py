#!/usr/bin/env python3
"""
Delete Store records from the durable EspressoLab store.

Usage:
  python scripts/reset_stores.py --id 1 [--data-dir ./data]
  python scripts/reset_stores.py --all [--data-dir ./data]
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
    ap = argparse.ArgumentParser(description="Delete Stores from the durable store")
    target = ap.add_mutually_exclusive_group(required=True)
    target.add_argument("--id", help="Delete every Store with this id")
    target.add_argument("--all", action="store_true", help="Delete every Store")
    ap.add_argument("--data-dir", help="Directory holding the store file (default: ESPRESSOLAB_DATA_DIR)")
    args = ap.parse_args(argv)
    logging.basicConfig(level=get_settings().log_level)

    with LocalStore() as store:
        try:
            store.initialize(DataModel.ESPRESSO_LAB, backing=StoreBacking.DURABLE, data_dir=args.data_dir)
        except FatalInitializationError as exc:
            raise SystemExit(f"Store unavailable: {exc}") from exc
        try:
            if args.all:
                store.delete_all(EntityKind.STORE)
            else:
                store.delete(attr("id") == args.id.strip(), EntityKind.STORE)
            remaining = len(store.fetch(EntityKind.STORE))
        except StoreError as exc:
            raise SystemExit(f"Error: {exc}") from exc

    print("OK: stores deleted")
    print(f"  remaining: {remaining}")


if __name__ == "__main__":
    main()
