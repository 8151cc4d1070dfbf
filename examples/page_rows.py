#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import json

from restpager import OutputShape, PageFilter, PagingClient


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Page rows of a REST resource")
    p.add_argument("resource", nargs="?", default="persons")
    p.add_argument("rows", nargs="?", type=int, default=25)
    p.add_argument("--offset", type=int, default=0)
    p.add_argument("--page-size", type=int, default=0)
    p.add_argument("--criteria", default=None, help='JSON criteria, e.g. {"lastName":"Smith"}')
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    page_filter = PageFilter.criteria(args.criteria) if args.criteria else None

    async with PagingClient.from_settings() as client:
        total = await client.get_total_count(args.resource, filter=page_filter)
        rows = await client.get_rows_from_offset(
            args.resource,
            args.offset,
            args.rows,
            page_size=args.page_size,
            filter=page_filter,
            shape=OutputShape.ROW_RECORDS,
        )

    print("=" * 65)
    print(f"Resource   : {args.resource}")
    print(f"Total rows : {total}")
    print(f"Returned   : {len(rows)} (from offset {args.offset})")
    print("=" * 65)
    for row in rows:
        print(json.dumps(row)[:120])
    print("=" * 65)


if __name__ == "__main__":
    asyncio.run(main())
