#!/usr/bin/env python3
"""Export the current employee snapshot as JSON.

Run from the backend/ directory:

    python3 scripts/export_snapshot.py [--output FILE] [--refresh] [--verbose]

Resolves the snapshot exactly like the API does (remote endpoint, then the
local store, then the built-in examples) and reports which source answered.
A successful remote fetch also refreshes the local store.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys

_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from simpeg.core.config import Settings  # noqa: E402
from simpeg.models.employee import EmployeeRecord  # noqa: E402
from simpeg.services.record_repository import RecordRepository, SnapshotSource  # noqa: E402

logger = logging.getLogger(__name__)


def serialize_snapshot(snapshot: list[EmployeeRecord]) -> str:
    return json.dumps([record.to_wire() for record in snapshot], ensure_ascii=False, indent=2)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Export the employee snapshot resolved through the record repository",
    )
    parser.add_argument(
        "--output",
        "-o",
        default=None,
        help="Write JSON to this file instead of stdout",
    )
    parser.add_argument(
        "--refresh",
        action="store_true",
        help="Drop any cached snapshot before resolving",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )
    return parser.parse_args(argv)


async def export_snapshot(
    args: argparse.Namespace,
    repository: RecordRepository | None = None,
) -> SnapshotSource | None:
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(message)s")

    if repository is None:
        repository = RecordRepository.from_settings(Settings())
    if args.refresh:
        repository.cache.clear()

    snapshot = await repository.list_all()
    source = repository.last_source
    logger.info("Resolved %d records from %s", len(snapshot), source.value if source else "unknown")
    if source == SnapshotSource.FALLBACK:
        logger.warning("No real data source reachable — exported records are built-in examples")

    text = serialize_snapshot(snapshot)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as fh:
            fh.write(text + "\n")
        logger.info("Wrote %s", args.output)
    else:
        sys.stdout.write(text + "\n")
    return source


def main() -> None:
    args = parse_args()
    asyncio.run(export_snapshot(args))


if __name__ == "__main__":
    main()
