"""
Monitor Worker

Feeds market-data snapshots from an asyncio queue into the delta threshold
monitor, one `process_event` call per snapshot, across a fixed number of
consumer tasks.
"""

from __future__ import annotations

import asyncio
import logging

from .monitor import DeltaThresholdMonitor
from .types import AlertEvent, MarketDataSnapshot

logger = logging.getLogger(__name__)


class MonitorWorker:
    """
    Queue-driven runner for a DeltaThresholdMonitor.

    Example:
        worker = MonitorWorker(monitor, concurrency=8)
        worker.start()

        await worker.submit(snapshot)
        await worker.join()

        await worker.stop()
    """

    def __init__(
        self,
        monitor: DeltaThresholdMonitor,
        concurrency: int = 4,
        max_queue_size: int = 0,
    ) -> None:
        """
        Initialize monitor worker.

        Args:
            monitor: Monitor that processes each snapshot
            concurrency: Number of consumer tasks
            max_queue_size: Queue bound (0 means unbounded)
        """
        if concurrency < 1:
            raise ValueError(f"concurrency must be at least 1, got: {concurrency}")

        self.monitor = monitor
        self.concurrency = concurrency
        self._queue: asyncio.Queue[MarketDataSnapshot] = asyncio.Queue(maxsize=max_queue_size)
        self._tasks: list[asyncio.Task[None]] = []

        self.processed_count = 0
        self.alert_count = 0

    @property
    def running(self) -> bool:
        """True while consumer tasks are alive."""
        return any(not task.done() for task in self._tasks)

    @property
    def pending(self) -> int:
        """Snapshots waiting in the queue."""
        return self._queue.qsize()

    def start(self) -> None:
        """Spawn the consumer tasks. Must be called from a running loop."""
        if self.running:
            logger.warning("Monitor worker already running")
            return

        self._tasks = [
            asyncio.create_task(self._consume(), name=f"delta-monitor-{i}")
            for i in range(self.concurrency)
        ]
        logger.info(f"Monitor worker started with {self.concurrency} consumers")

    async def submit(self, snapshot: MarketDataSnapshot) -> None:
        """Queue a snapshot (waits when the queue is full)."""
        await self._queue.put(snapshot)

    def submit_nowait(self, snapshot: MarketDataSnapshot) -> None:
        """Queue a snapshot without waiting.

        Raises:
            asyncio.QueueFull: If the queue is bounded and full
        """
        self._queue.put_nowait(snapshot)

    async def join(self) -> None:
        """Wait until every queued snapshot has been processed."""
        await self._queue.join()

    async def stop(self) -> None:
        """Cancel the consumers. Queued snapshots that were not started are dropped."""
        for task in self._tasks:
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks = []
        logger.info(
            f"Monitor worker stopped: processed={self.processed_count}, "
            f"alerts={self.alert_count}"
        )

    async def _consume(self) -> None:
        while True:
            snapshot = await self._queue.get()
            try:
                alert = await self.monitor.process_event(snapshot)
                self._record(alert)
            except Exception as e:
                self.processed_count += 1
                logger.error(
                    f"Error in delta monitor worker for {snapshot.symbol}: {e}",
                    exc_info=True,
                )
            finally:
                self._queue.task_done()

    def _record(self, alert: AlertEvent | None) -> None:
        self.processed_count += 1
        if alert is not None:
            self.alert_count += 1
