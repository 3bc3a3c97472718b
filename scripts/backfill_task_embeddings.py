#!/usr/bin/env python3
"""
Backfill Task Embeddings

Computes missing ``tasks.embedding`` vectors so that smart search can
rank them. Connects directly to the backend database using the
POSTGRES_* env vars (or .env).

Usage:
    $ python scripts/backfill_task_embeddings.py
    $ python scripts/backfill_task_embeddings.py --batch-size 32 --max-batches 10
"""

from __future__ import annotations

import argparse
import asyncio
import logging

from smart_tasks.core.database import dispose_engine, get_session_factory
from smart_tasks.core.logging import setup_logging
from smart_tasks.services.indexing import DEFAULT_BATCH_SIZE, TaskEmbeddingIndexer

logger = logging.getLogger("smart_tasks.scripts.backfill")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Backfill missing task embeddings.")
    parser.add_argument(
        "--batch-size",
        type=int,
        default=DEFAULT_BATCH_SIZE,
        help=f"Tasks embedded per transaction (default: {DEFAULT_BATCH_SIZE})",
    )
    parser.add_argument(
        "--max-batches",
        type=int,
        default=None,
        help="Stop after this many batches (default: until no task is left)",
    )
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    return parser.parse_args()


async def main() -> None:
    args = parse_args()
    setup_logging(args.log_level)

    indexer = TaskEmbeddingIndexer()
    try:
        async with get_session_factory()() as session:
            count = await indexer.index_pending(
                session,
                batch_size=args.batch_size,
                max_batches=args.max_batches,
            )
        logger.info("Backfill complete: %d task(s) indexed", count)
    finally:
        await dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())
