import asyncio
import contextlib
import logging

from domain.models.quote import CacheMirrorRecord, PersistedQuoteRecord
from infrastructure.persistence.database import Database
from infrastructure.persistence.repositories.quote import QuoteRepository

logger = logging.getLogger(__name__)

SinkRecord = PersistedQuoteRecord | CacheMirrorRecord


class QuoteRecordSink:
    """Fire-and-forget writer for quote history and the cache mirror.

    ``submit`` only enqueues; a single background task drains the queue.
    Records are written at most once: failed writes are logged and dropped,
    and a full queue drops the incoming record.
    """

    def __init__(self, database: Database, max_queue_size: int = 1000):
        self.database = database
        self._queue: asyncio.Queue[SinkRecord] = asyncio.Queue(maxsize=max_queue_size)
        self._worker: asyncio.Task | None = None

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    @property
    def is_running(self) -> bool:
        return self._worker is not None and not self._worker.done()

    def start(self) -> None:
        if self.is_running:
            return
        self._worker = asyncio.create_task(self._run(), name="quote-record-sink")
        logger.info("Quote record sink started")

    def submit(self, record: SinkRecord) -> bool:
        try:
            self._queue.put_nowait(record)
        except asyncio.QueueFull:
            logger.warning(
                f"Persistence queue full, dropping {record.__class__.__name__} for {record.currency}",
                extra={"extra_data": {"currency": record.currency, "queue_size": self._queue.maxsize}},
            )
            return False
        return True

    async def write(self, record: SinkRecord) -> None:
        async with self.database.session() as session:
            repository = QuoteRepository(db_session=session)
            if isinstance(record, PersistedQuoteRecord):
                repository.add_quote_record(record)
            else:
                await repository.upsert_cache_mirror(record)

    async def _run(self) -> None:
        while True:
            record = await self._queue.get()
            try:
                await self.write(record)
            except Exception as e:
                logger.error(
                    f"Failed to persist {record.__class__.__name__} for {record.currency}: {e}",
                    exc_info=True,
                )
            finally:
                self._queue.task_done()

    async def close(self, timeout: float = 5.0) -> None:
        if self._worker is None:
            return

        try:
            await asyncio.wait_for(self._queue.join(), timeout=timeout)
        except TimeoutError:
            logger.warning(f"Persistence queue not drained in {timeout}s, dropping {self.pending} records")
        finally:
            self._worker.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._worker
            self._worker = None
            logger.info("Quote record sink stopped")
