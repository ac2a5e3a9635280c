#!/usr/bin/env python3
"""
Development script to prepare object storage and the record database.

Creates the videos and thumbnails buckets and the index behind the video
listing query. Safe to run repeatedly: existing buckets and indexes are left
as they are.

Usage:
    python scripts/init_storage.py [--buckets | --indexes] [--dry-run]

Options:
    --buckets   Only create buckets
    --indexes   Only create database indexes
    --dry-run   Show what would be created without creating anything
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from dataclasses import dataclass

from src.application.services.records import VideoRecordStore
from src.commons.settings import get_settings
from src.infrastructure.factory import InfrastructureFactory


@dataclass
class InitArgs:
    """Parsed command line arguments."""

    create_buckets: bool
    create_indexes: bool
    dry_run: bool


def parse_args() -> InitArgs:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Create storage buckets and database indexes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--buckets", action="store_true", help="Only create buckets")
    parser.add_argument(
        "--indexes", action="store_true", help="Only create database indexes"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be created without creating anything",
    )

    args = parser.parse_args()
    both = not (args.buckets or args.indexes)

    return InitArgs(
        create_buckets=both or args.buckets,
        create_indexes=both or args.indexes,
        dry_run=args.dry_run,
    )


async def init_buckets(factory: InfrastructureFactory, dry_run: bool) -> None:
    """Create the videos and thumbnails buckets if missing."""
    print("\n=== Buckets ===")
    blob = factory.get_blob_storage()
    buckets = factory.settings.blob_storage.buckets

    for bucket in (buckets.videos, buckets.thumbnails):
        if await blob.bucket_exists(bucket):
            print(f"  Bucket '{bucket}' already exists")
            continue
        if dry_run:
            print(f"  [DRY-RUN] Would create bucket '{bucket}'")
            continue
        await blob.create_bucket(bucket)
        print(f"  Created bucket '{bucket}'")


async def init_indexes(factory: InfrastructureFactory, dry_run: bool) -> None:
    """Create the listing index on the videos collection."""
    print("\n=== Indexes ===")
    collection = factory.settings.document_db.collections.videos

    if dry_run:
        print(f"  [DRY-RUN] Would ensure index (status, uploadDate) on '{collection}'")
        return

    store = VideoRecordStore(factory.get_document_db(), collection)
    await store.ensure_indexes()
    print(f"  Ensured index (status, uploadDate) on '{collection}'")


async def run(args: InitArgs) -> list[str]:
    """Execute the selected steps and return a list of errors."""
    factory = InfrastructureFactory(get_settings())
    errors: list[str] = []
    steps = [
        (args.create_buckets, "Buckets", init_buckets),
        (args.create_indexes, "Indexes", init_indexes),
    ]

    try:
        for enabled, name, step in steps:
            if not enabled:
                continue
            try:
                await step(factory, args.dry_run)
            except Exception as e:
                errors.append(f"{name}: {e}")
                print(f"  Failed: {e}")
    finally:
        await factory.close_all()

    return errors


def main() -> None:
    """Main entry point."""
    args = parse_args()

    print("=" * 50)
    print("  STORAGE INITIALIZATION")
    print("=" * 50)
    print(f"Mode: {'DRY-RUN' if args.dry_run else 'APPLY'}")

    errors = asyncio.run(run(args))

    print("\n" + "=" * 50)
    if errors:
        print(f"Completed with {len(errors)} error(s):")
        for error in errors:
            print(f"  - {error}")
        sys.exit(1)
    print("Initialization completed successfully!")
    print("=" * 50)


if __name__ == "__main__":
    main()
