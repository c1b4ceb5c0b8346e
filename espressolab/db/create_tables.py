"""Utility script to create the durable store schema."""
from __future__ import annotations

import argparse
import logging

from espressolab.core.config import StoreBacking, get_settings
from espressolab.domain.entities import DataModel
from espressolab.repositories.errors import FatalInitializationError
from espressolab.repositories.local_store import LocalStore

from .session import store_path


def create_all(data_model: DataModel = DataModel.ESPRESSO_LAB, data_dir=None) -> None:
    with LocalStore() as store:
        store.initialize(data_model, backing=StoreBacking.DURABLE, data_dir=data_dir)


def main(argv: list[str] | None = None) -> None:
    ap = argparse.ArgumentParser(description="Create the durable EspressoLab store")
    ap.add_argument("--data-dir", help="Directory holding the store file (default: ESPRESSOLAB_DATA_DIR)")
    args = ap.parse_args(argv)
    logging.basicConfig(level=get_settings().log_level)

    try:
        create_all(data_dir=args.data_dir)
    except FatalInitializationError as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
    print(f"Store schema ready at {store_path(DataModel.ESPRESSO_LAB, args.data_dir)}")


if __name__ == "__main__":
    main()
