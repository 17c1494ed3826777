"""Stream handle and shard poll loop.

Architecture:
    A Stream is created once per stream name by describing it. The shard
    directory is fixed from then on. ``listen()`` seeds a starting iterator per
    shard, then runs one tick per interval. Each tick visits the shards in
    directory order:

        read position -> fetch records -> dispatch to handler -> write position

    The position written is always the iterator returned by the fetch that
    consumed the previous one, so positions only move forward and a restarted
    consumer resumes where the last tick left off.

Design Decisions:
    - Fail fast: any store or fetch error ends ``listen()`` with that error.
      There is no retry, no backoff and no per-shard isolation.
    - Fire-and-forget delivery: coroutine handlers run as tasks, plain
      callables run in the loop's default executor. The loop never waits for
      them, so handler slowness or failure cannot stall or stop polling. The
      flip side is no backpressure and no ordering between deliveries.
    - Fixed cadence: ticks start ``interval`` apart. A tick that overruns
      delays the next one; ticks never overlap or queue up.

Rate Limits:
    Kinesis allows five GetRecords calls per second per shard, shared by every
    consumer of the shard. Size ``StreamConfig.interval`` for the number of
    processes polling the same stream.

See Also:
    - PositionStore: Where positions are persisted
    - StreamService: Remote calls consumed
"""

from __future__ import annotations

import asyncio
import functools
import inspect
import logging
from collections.abc import Awaitable, Callable, Iterable

from ..core.config import StreamConfig
from ..core.exceptions import (
    DescribeFailed,
    FetchFailed,
    IteratorRequestFailed,
    NoShards,
    ShardPollError,
    StoreUnavailable,
)
from ..io.service import StreamService
from ..models import Record, RecordBatch, Shard
from ..store.base import PositionStore

Handler = Callable[[list[Record]], Awaitable[None]] | Callable[[list[Record]], None]


class Stream:
    """Tracks the read position of every shard of one stream and polls them."""

    def __init__(
        self,
        name: str,
        shards: Iterable[Shard],
        service: StreamService,
        store: PositionStore,
        config: StreamConfig | None = None,
        *,
        logger: logging.Logger | logging.LoggerAdapter | None = None,
    ) -> None:
        self.name = name
        self.shards: tuple[Shard, ...] = tuple(shards)
        if not self.shards:
            raise NoShards(f"stream {name!r} has 0 shards", stream=name)
        self.config = config if config is not None else StreamConfig()
        self.logger = logger or logging.getLogger(__name__)
        self.ticks = 0

        self._service = service
        self._store = store
        # Strong references keep in-flight deliveries alive until they finish
        self._deliveries: set[asyncio.Future] = set()

    @classmethod
    async def connect(
        cls,
        service: StreamService,
        stream_name: str,
        store: PositionStore,
        config: StreamConfig | None = None,
        *,
        logger: logging.Logger | logging.LoggerAdapter | None = None,
    ) -> Stream:
        """Describe ``stream_name`` and build a Stream over its shards.

        Raises:
            DescribeFailed: If the describe call fails
            NoShards: If the stream has no shards
        """
        try:
            description = await service.describe_stream(stream_name)
        except Exception as e:
            raise DescribeFailed(
                f"failed to describe stream {stream_name!r}: {e}", stream=stream_name
            ) from e

        return cls(stream_name, description.shards, service, store, config, logger=logger)

    @property
    def pending_deliveries(self) -> int:
        """Number of handler invocations still running."""
        return len(self._deliveries)

    async def listen(self, handler: Handler) -> None:
        """Poll every shard each interval and pass record batches to ``handler``.

        ``handler`` is called once per shard per tick with that shard's records,
        possibly none. It may be a coroutine function or a plain callable; in
        both cases it runs in the background. An awaitable returned by a plain
        callable is run on the event loop; any other result is ignored.

        Only returns by raising. Cancel the enclosing task to stop listening.

        Raises:
            IteratorRequestFailed: If a starting iterator cannot be obtained
            StoreUnavailable: If the position store fails
            FetchFailed: If fetching records fails or a shard has closed
        """
        loop = asyncio.get_running_loop()
        interval = self.config.interval
        next_tick = loop.time() + interval

        try:
            await self._seed_positions()
            while True:
                delay = next_tick - loop.time()
                if delay > 0:
                    await asyncio.sleep(delay)
                await self._tick(handler)
                self.ticks += 1

                next_tick += interval
                now = loop.time()
                if next_tick < now:
                    # Overran: start the next tick now instead of bursting to catch up
                    next_tick = now
        except ShardPollError as e:
            self.logger.error(
                f"Stopped listening on stream {self.name}: {e}",
                extra={"stream": self.name, "error": type(e).__name__},
            )
            raise

    async def drain(self) -> None:
        """Wait for every in-flight handler invocation to finish."""
        while self._deliveries:
            await asyncio.gather(*list(self._deliveries), return_exceptions=True)

    async def _seed_positions(self) -> None:
        self.logger.info(
            "Getting initial shard iterators for all shards",
            extra={"stream": self.name, "iterator_type": self.config.iterator_type.value},
        )
        for shard in self.shards:
            try:
                iterator = await self._service.get_shard_iterator(
                    self.name,
                    shard.shard_id,
                    self.config.iterator_type,
                    starting_sequence_number=self.config.starting_sequence_number,
                    timestamp=self.config.timestamp,
                )
            except Exception as e:
                raise IteratorRequestFailed(
                    f"failed to get initial iterator for shard {shard.shard_id}: {e}",
                    stream=self.name,
                    shard_id=shard.shard_id,
                ) from e
            await self._write_position(shard, iterator)

    async def _tick(self, handler: Handler) -> None:
        self.logger.info("Tick", extra={"stream": self.name, "tick": self.ticks + 1})
        for shard in self.shards:
            position = await self._read_position(shard)

            self.logger.info(
                "Getting records for shard",
                extra={"stream": self.name, "shard": shard.shard_id, "iterator": position},
            )
            batch = await self._fetch(shard, position)

            self._dispatch(handler, shard, batch)

            if batch.next_iterator is None:
                raise FetchFailed(
                    f"shard {shard.shard_id} is closed: no next iterator returned",
                    stream=self.name,
                    shard_id=shard.shard_id,
                    shard_closed=True,
                )
            await self._write_position(shard, batch.next_iterator)

    async def _fetch(self, shard: Shard, position: str) -> RecordBatch:
        try:
            return await self._service.get_records(position, self.config.limit)
        except Exception as e:
            raise FetchFailed(
                f"failed to get records for shard {shard.shard_id}: {e}",
                stream=self.name,
                shard_id=shard.shard_id,
            ) from e

    async def _read_position(self, shard: Shard) -> str:
        try:
            position = await self._store.get(self.name, shard.shard_id)
        except StoreUnavailable:
            raise
        except Exception as e:
            raise StoreUnavailable(
                f"failed to read position for shard {shard.shard_id}: {e}",
                stream=self.name,
                shard_id=shard.shard_id,
            ) from e
        if not position:
            raise StoreUnavailable(
                f"no position stored for shard {shard.shard_id}",
                stream=self.name,
                shard_id=shard.shard_id,
            )
        return position

    async def _write_position(self, shard: Shard, position: str) -> None:
        try:
            await self._store.set(self.name, shard.shard_id, position)
        except StoreUnavailable:
            raise
        except Exception as e:
            raise StoreUnavailable(
                f"failed to write position for shard {shard.shard_id}: {e}",
                stream=self.name,
                shard_id=shard.shard_id,
            ) from e

    def _dispatch(self, handler: Handler, shard: Shard, batch: RecordBatch) -> None:
        records = list(batch.records)
        self.logger.info(
            "Passing records to handler",
            extra={"stream": self.name, "shard": shard.shard_id, "record_count": len(records)},
        )
        # Fire handler (don't block the poll loop)
        if inspect.iscoroutinefunction(handler) or inspect.iscoroutinefunction(
            getattr(handler, "__call__", None)
        ):
            delivery: asyncio.Future = asyncio.create_task(handler(records))
        else:
            # run sync handler in default loop executor to avoid blocking
            loop = asyncio.get_running_loop()
            delivery = loop.run_in_executor(None, handler, records)
        self._track(delivery, shard.shard_id)

    def _track(self, delivery: asyncio.Future, shard_id: str) -> None:
        self._deliveries.add(delivery)
        delivery.add_done_callback(functools.partial(self._on_delivery_done, shard_id))

    def _on_delivery_done(self, shard_id: str, delivery: asyncio.Future) -> None:
        try:
            if delivery.cancelled():
                return
            exc = delivery.exception()
            if exc is not None:
                self.logger.error(
                    f"Handler failed for shard {shard_id}: {exc}",
                    exc_info=exc,
                    extra={"stream": self.name, "shard": shard_id},
                )
                return
            result = delivery.result()
            if inspect.isawaitable(result):
                # Plain callable that returned a coroutine (e.g. a lambda wrapping one)
                self._track(asyncio.ensure_future(result), shard_id)
        finally:
            self._deliveries.discard(delivery)
