"""
Trendkart - Cycle Scheduler

Runs the trend cycle on a fixed interval in a background thread,
independent of the request-serving event loop.
"""

import logging
from typing import Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from trendkart.services.trend_cycle import CycleReport, TrendCycle

logger = logging.getLogger(__name__)

JOB_ID = "trend_cycle"


class CycleScheduler:
    """
    Schedules the trend cycle.

    Features:
    - Fixed interval trigger
    - Prevents overlapping runs (triggers that fire mid-cycle are dropped)
    - Manual run on demand
    """

    def __init__(self, cycle: TrendCycle, interval_seconds: int = 30):
        self.cycle = cycle
        self.interval_seconds = interval_seconds
        self.scheduler = BackgroundScheduler()
        self.is_running = False

    def start(self):
        """Start the scheduler."""
        if self.is_running:
            logger.warning("Scheduler is already running")
            return

        self.scheduler.add_job(
            self._run_cycle,
            trigger=IntervalTrigger(seconds=self.interval_seconds),
            id=JOB_ID,
            name=f"Trend Cycle (every {self.interval_seconds}s)",
            max_instances=1,  # Prevent overlapping runs
            coalesce=True,  # Missed triggers collapse into one
            replace_existing=True,
        )

        self.scheduler.start()
        self.is_running = True
        logger.info(f"Trend cycle scheduler started (every {self.interval_seconds}s)")

    def stop(self):
        """Stop the scheduler."""
        if not self.is_running:
            logger.warning("Scheduler is not running")
            return

        self.scheduler.shutdown(wait=False)
        self.is_running = False
        logger.info("Trend cycle scheduler stopped")

    def run_now(self) -> Optional[CycleReport]:
        """Run a cycle immediately; returns None if one is already in flight."""
        return self._run_cycle()

    def _run_cycle(self) -> Optional[CycleReport]:
        try:
            return self.cycle.run()
        except Exception as e:
            logger.error(f"✗ Trend cycle failed: {e}", exc_info=True)
            return None

    def get_next_run_time(self) -> Optional[str]:
        if not self.is_running:
            return None
        job = self.scheduler.get_job(JOB_ID)
        if job is None or job.next_run_time is None:
            return None
        return job.next_run_time.isoformat()

    def get_status(self) -> dict:
        """Get scheduler status."""
        report = self.cycle.last_report
        return {
            "is_running": self.is_running,
            "cycle_in_progress": self.cycle.is_running,
            "interval_seconds": self.interval_seconds,
            "last_cycle": report.to_dict() if report else None,
            "next_run": self.get_next_run_time(),
        }
