#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio

from restpager import OutputShape, PagingClient, paging_request


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Page several resources in the background")
    p.add_argument("resources", nargs="*", default=["persons", "courses", "sections"])
    p.add_argument("--pages", type=int, default=2)
    p.add_argument("--page-size", type=int, default=50)
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    async with PagingClient.from_settings() as client:
        handles = {
            resource: client.submit(
                paging_request(resource, page_count=args.pages, page_size=args.page_size),
                OutputShape.PAGE_RECORDS,
            )
            for resource in args.resources
        }
        for resource, handle in handles.items():
            try:
                pages = await handle
            except Exception as e:
                print(f"{resource:20} | failed: {e}")
                continue
            rows = sum(len(page) if isinstance(page, list) else 1 for page in pages)
            print(f"{resource:20} | {len(pages):>3} pages | {rows:>6} rows | {handle.state.value}")


if __name__ == "__main__":
    asyncio.run(main())
