#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import logging
import os

from shardpoll import InMemoryPositionStore, IteratorType, KinesisClient, Record, Stream, StreamConfig


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Print sequence numbers of records arriving on a Kinesis stream")
    p.add_argument("--stream", default=os.getenv("AWS_KINESIS_STREAM"), help="Stream name")
    p.add_argument("--endpoint", default=os.getenv("AWS_KINESIS_ENDPOINT"), help="Kinesis endpoint URL")
    p.add_argument("--region", default=None)
    p.add_argument(
        "--iterator-type",
        default="LATEST",
        type=IteratorType.from_string,
        help="LATEST or TRIM_HORIZON",
    )
    p.add_argument("--interval", type=float, default=1.0, help="Seconds between polls")
    p.add_argument("--limit", type=int, default=1000)
    p.add_argument("--unsigned", action="store_true", help="Skip SigV4 signing (local emulators)")
    p.add_argument("-v", "--verbose", action="store_true")
    args = p.parse_args()
    if not args.stream:
        p.error("--stream or AWS_KINESIS_STREAM is required")
    return args


def handler(records: list[Record]) -> None:
    for r in records:
        print(f"{r.sequence_number} | {r.partition_key:20} | {len(r.data):>6} bytes")


async def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = StreamConfig(interval=args.interval, limit=args.limit, iterator_type=args.iterator_type)
    store = InMemoryPositionStore()
    async with KinesisClient(args.endpoint, args.region, sign=not args.unsigned) as client:
        stream = await Stream.connect(client, args.stream, store, config)
        print(f"Listening on {stream.name} ({len(stream.shards)} shards)")
        await stream.listen(handler)


if __name__ == "__main__":
    asyncio.run(main())
