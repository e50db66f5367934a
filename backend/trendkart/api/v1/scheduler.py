"""
Trendkart API - Scheduler Endpoints

Monitor the trend cycle scheduler and trigger a cycle by hand.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.concurrency import run_in_threadpool

from trendkart.api.deps import get_scheduler, require_admin
from trendkart.services.cycle_scheduler import CycleScheduler

router = APIRouter(prefix="/scheduler", tags=["scheduler"])


@router.get("/status")
async def get_scheduler_status(scheduler: CycleScheduler = Depends(get_scheduler)):
    """
    Get the current status of the trend cycle scheduler.

    Returns:
        - is_running: Whether the periodic trigger is active
        - cycle_in_progress: Whether a cycle is executing right now
        - last_cycle: Report of the last completed cycle
        - next_run: ISO timestamp of the next scheduled cycle
    """
    return {
        "status": "ok",
        "scheduler": scheduler.get_status(),
    }


@router.post("/run", dependencies=[Depends(require_admin)])
async def run_cycle(scheduler: CycleScheduler = Depends(get_scheduler)):
    """
    Run a trend cycle now.

    Returns 409 if a cycle is already in progress; the request is dropped,
    not queued.
    """
    report = await run_in_threadpool(scheduler.run_now)
    if report is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Trend cycle already in progress",
        )
    return {
        "status": "completed",
        "cycle": report.to_dict(),
    }
