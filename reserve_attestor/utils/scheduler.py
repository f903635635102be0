"""
Cron scheduler that fires the Proof-of-Reserve workflow.
"""
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.schedulers.blocking import BlockingScheduler
from apscheduler.triggers.cron import CronTrigger
from datetime import datetime, timezone
from typing import Callable, Optional

from ..config.settings import RunConfig, validate_config
from ..errors import AttestationError, ConfigError

JOB_ID = 'proof_of_reserve'


def build_trigger(schedule: str) -> CronTrigger:
    """Parse a five-field crontab expression (UTC)."""
    try:
        return CronTrigger.from_crontab(schedule, timezone='UTC')
    except ValueError as e:
        raise ConfigError("schedule", f"invalid cron schedule {schedule!r}: {e}") from e


def run_attestation_job(config: RunConfig, runtime_factory: Callable, handler: Callable) -> Optional[str]:
    """
    Scheduled entry point. A failed run is reported and left for the next
    trigger; nothing is retried here.
    """
    try:
        runtime = runtime_factory()
        return handler(config, runtime, scheduled_time=datetime.now(timezone.utc))
    except AttestationError as e:
        print(f"[SCHEDULER] ✗ Attestation run aborted: {e}")
        return None


def start_scheduler(
    config: RunConfig,
    runtime_factory: Callable,
    handler: Callable,
    blocking: bool = True,
):
    """
    Register the attestation job on the configured cron schedule and start.

    Args:
        config: Validated run configuration
        runtime_factory: Zero-argument callable building a WorkflowRuntime per run
        handler: The trigger handler, called as handler(config, runtime, scheduled_time=...)
        blocking: Block the calling thread (CLI) or run in the background

    Returns:
        The started scheduler
    """
    validate_config(config)
    trigger = build_trigger(config.schedule)

    scheduler = BlockingScheduler(timezone='UTC') if blocking else BackgroundScheduler(timezone='UTC')

    scheduler.add_job(
        run_attestation_job,
        trigger,
        args=[config, runtime_factory, handler],
        id=JOB_ID,
        name='Publish Proof-of-Reserve report',
        max_instances=1,
        coalesce=True,
        replace_existing=True
    )

    print("[SCHEDULER] ✓ Scheduler starting")
    print(f"[SCHEDULER]   - Proof-of-Reserve report: '{config.schedule}' (UTC)")

    scheduler.start()
    return scheduler
