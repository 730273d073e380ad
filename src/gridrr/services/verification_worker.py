"""Background scheduling for the verification sweep."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from gridrr.core.settings import settings
from gridrr.db.session import SessionLocal
from gridrr.services.verification import VerificationThresholds, run_verification_sweep

logger = logging.getLogger(__name__)


class VerificationSweepWorker:
    """Periodically runs the verification sweep on its own session.

    The sweep is synchronous database work, so each run is pushed to a worker
    thread and the event loop only sleeps between runs.
    """

    def __init__(
        self,
        interval_seconds: float | None = None,
        session_factory: Callable[[], Session] = SessionLocal,
        thresholds: VerificationThresholds | None = None,
    ) -> None:
        """Initialize the worker.

        Args:
            interval_seconds: Seconds between sweeps; defaults to the configured
                interval. A value of zero or less disables the worker.
            session_factory: Callable returning a new database session.
            thresholds: Optional override for the configured thresholds.
        """
        if interval_seconds is None:
            interval_seconds = settings.verification_sweep_interval_seconds
        self.interval = float(interval_seconds)
        self._session_factory = session_factory
        self._thresholds = thresholds
        self._task: asyncio.Task[None] | None = None
        self._stopping = asyncio.Event()

    @property
    def enabled(self) -> bool:
        """Return True if a positive interval is configured."""
        return self.interval > 0

    async def start(self) -> None:
        """Start the background sweep loop."""
        if not self.enabled:
            return

        if self._task is None or self._task.done():
            self._stopping.clear()
            self._task = asyncio.create_task(self._run())
            logger.info("Verification sweep worker started (every %.0fs)", self.interval)

    async def stop(self) -> None:
        """Stop the background sweep loop."""
        if self._task is None:
            return

        self._stopping.set()
        await self._task
        self._task = None

    def sweep_once(self) -> list[int]:
        """Run a single sweep with a fresh session and return the flagged ids."""
        db = self._session_factory()
        try:
            return run_verification_sweep(db, self._thresholds)
        finally:
            db.close()

    async def _run(self) -> None:
        while not self._stopping.is_set():
            try:
                await asyncio.to_thread(self.sweep_once)
            except SQLAlchemyError as e:
                logger.error("Verification sweep failed: %s", e, exc_info=True)

            try:
                await asyncio.wait_for(self._stopping.wait(), timeout=self.interval)
            except TimeoutError:
                continue
