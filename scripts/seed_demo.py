#!/usr/bin/env python3
"""Populate a persisted data set with demo tenants and properties.

Rehydrates the configured backend (bootstrap data on first run), adds
Faker-generated records through the store, and lets the mirror write them.
"""

import argparse
import logging
from pathlib import Path

from mhimmo.config import MhImmoConfig, StorageConfig
from mhimmo.generators import populate_store
from mhimmo.logging import setup_logging
from mhimmo.persistence import PersistenceAdapter, build_backend

logger = logging.getLogger(__name__)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed mhimmo with demo data")
    parser.add_argument("--data-dir", type=Path, default=Path("data"), help="JSON backend directory")
    parser.add_argument("--storage", choices=["json", "postgres"], default="json")
    parser.add_argument("--tenants", type=int, default=10)
    parser.add_argument("--properties", type=int, default=12)
    parser.add_argument("--occupancy", type=float, default=0.75)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--pretty", action="store_true", help="Pretty-print JSON slots")
    parser.add_argument("--log-level", default="INFO")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    setup_logging(args.log_level)

    config = MhImmoConfig.from_env()
    config.storage = StorageConfig(backend=args.storage, json_dir=args.data_dir, pretty_json=args.pretty)

    backend = build_backend(config)
    adapter = PersistenceAdapter(backend, pretty=args.pretty)
    store = adapter.rehydrate(strict_references=config.strict_references)

    result = populate_store(
        store,
        tenants=args.tenants,
        properties=args.properties,
        occupancy=args.occupancy,
        seed=args.seed,
    )
    # Slots untouched by the population (payments) are written too
    adapter.flush(store)
    backend.close()

    logger.info("Done: %s", result)
    for name, count in store.summary().items():
        logger.info("  %s: %d records", name, count)


if __name__ == "__main__":
    main()
