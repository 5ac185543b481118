"""Background polling of the audit trail sheet.

Keeps the most recent snapshot of records and statistics for the dashboard
views. Each poll replaces the snapshot wholesale.
"""

import itertools
import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable

import requests

from common.deescalation import AuditRecord, DeEscalationStats, analyze_records

from .audit_trail import AuditTrailClient

logger = logging.getLogger(__name__)


@dataclass
class DashboardSnapshot:
    """Records and statistics from one successful poll."""
    records: list[AuditRecord] = field(default_factory=list)
    stats: DeEscalationStats = field(default_factory=DeEscalationStats.empty)
    fetched_at: datetime | None = None
    sequence: int = 0  # 0 means nothing fetched yet

    def recent(self, limit: int = 10) -> list[AuditRecord]:
        """First rows of the sheet, for the recommendations table."""
        return self.records[:limit]

    def to_dict(self) -> dict:
        return {
            "stats": self.stats.to_dict(),
            "fetched_at": self.fetched_at.isoformat() if self.fetched_at else None,
            "sequence": self.sequence,
        }


class AuditTrailPoller:
    """Polls the audit trail on a fixed interval and aggregates each response.

    Requests are tagged with an increasing sequence number. A response that
    arrives after a newer one has already been applied is discarded, so
    overlapping requests never roll the dashboard back to older data.
    """

    def __init__(
        self,
        client: AuditTrailClient,
        interval: int | float = 30,
        on_update: Callable[[DashboardSnapshot], None] | None = None,
    ):
        self.client = client
        self.interval = interval
        self.on_update = on_update

        self._snapshot = DashboardSnapshot()
        self._loading = True
        self._sequence = itertools.count(1)
        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def snapshot(self) -> DashboardSnapshot:
        with self._lock:
            return self._snapshot

    @property
    def loading(self) -> bool:
        """True until the first poll has finished, successfully or not."""
        with self._lock:
            return self._loading

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _next_sequence(self) -> int:
        with self._lock:
            return next(self._sequence)

    def poll_once(self) -> bool:
        """Fetch and aggregate the sheet once.

        Fetch failures are logged and leave the current snapshot in place.

        Returns:
            True if the snapshot was replaced.
        """
        sequence = self._next_sequence()
        try:
            records = self.client.fetch_records()
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Error fetching audit trail (request #{sequence}): {e}")
            with self._lock:
                self._loading = False
            return False

        stats = analyze_records(records)
        snapshot = DashboardSnapshot(
            records=records,
            stats=stats,
            fetched_at=datetime.now(),
            sequence=sequence,
        )

        # Snapshot and loading flag change together
        with self._lock:
            self._loading = False
            if sequence < self._snapshot.sequence:
                logger.warning(
                    f"Discarding stale audit trail response #{sequence} "
                    f"(already showing #{self._snapshot.sequence})"
                )
                return False
            self._snapshot = snapshot

        logger.info(
            f"Audit trail refreshed: {stats.total} record(s), "
            f"{stats.approved} approved, {stats.declined} declined, "
            f"{stats.pending} pending ({stats.approval_rate}% approval)"
        )

        if self.on_update:
            try:
                self.on_update(snapshot)
            except Exception as e:
                logger.exception(f"Error in audit trail update callback: {e}")

        return True

    def _run(self) -> None:
        """Poll immediately, then once per interval until stopped."""
        while not self._stop_event.is_set():
            try:
                self.poll_once()
            except Exception as e:
                logger.exception(f"Error during audit trail poll: {e}")
            if self._stop_event.wait(self.interval):
                break

    def start(self) -> None:
        """Start the polling thread. Does nothing if already running."""
        if self.running:
            return
        logger.info(f"Starting audit trail poller (interval: {self.interval}s)")
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run,
            name="audit-trail-poller",
            daemon=True,
        )
        self._thread.start()

    def stop(self, timeout: float | None = None) -> None:
        """Stop the recurring poll.

        An in-flight request is allowed to finish; no further polls start.
        """
        self._stop_event.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        self._thread = None
        logger.info("Audit trail poller stopped")

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the poller is stopped. Returns True if it was."""
        return self._stop_event.wait(timeout)

    def __enter__(self) -> "AuditTrailPoller":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
