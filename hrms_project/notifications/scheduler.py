from apscheduler.schedulers.background import BackgroundScheduler
from django.conf import settings
from django.db import close_old_connections
from django.utils import timezone
import logging

from notifications import conf

logger = logging.getLogger(__name__)

JOB_ID = "notification_dispatch_pass"

# ============================================================
# GLOBAL SAFETY LOCK
# Prevents the embedded scheduler from starting more than once
# ============================================================
_scheduler = None


def build_scheduler(scheduler_class=BackgroundScheduler, interval_seconds=None):
    """
    Create (but do not start) a scheduler with the dispatcher job.

    - First run fires immediately, then every `interval_seconds`
    - max_instances=1: a slow pass is never overlapped by the next tick
    - coalesce=True: ticks missed while a pass was running collapse into one
    """
    interval_seconds = interval_seconds or conf.poll_interval_seconds()

    scheduler = scheduler_class(timezone=settings.TIME_ZONE)

    scheduler.add_job(
        run_scheduled_pass,
        trigger="interval",
        seconds=interval_seconds,
        id=JOB_ID,
        replace_existing=True,
        max_instances=1,      # Prevent overlapping runs
        coalesce=True,        # Merge missed runs
        misfire_grace_time=conf.misfire_grace_seconds(),
        next_run_time=timezone.now(),
    )

    return scheduler


def start_scheduler():
    """
    Start the embedded background scheduler.

    - Respects ENABLE_SCHEDULER setting
    - Prevents double start (Django autoreload, imports)
    """
    global _scheduler

    # --------------------------------------------
    # DEV / PROD TOGGLE
    # --------------------------------------------
    if not getattr(settings, "ENABLE_SCHEDULER", False):
        logger.info("Notification scheduler disabled via settings (ENABLE_SCHEDULER=False)")
        return None

    # --------------------------------------------
    # SAFETY LOCK (NO DOUBLE START)
    # --------------------------------------------
    if _scheduler is not None:
        logger.info("Notification scheduler already running, skipping initialization")
        return _scheduler

    logger.info("Starting notification scheduler...")

    _scheduler = build_scheduler(BackgroundScheduler)
    _scheduler.start()

    logger.info(
        "Notification scheduler started: dispatcher pass every %s seconds",
        conf.poll_interval_seconds(),
    )
    return _scheduler


def run_scheduled_pass():
    """
    Job body. Keeps business logic out of the scheduler and makes sure
    a broken pass never kills the scheduler thread.
    """
    from notifications.services.dispatcher import run_pass

    close_old_connections()
    try:
        report = run_pass()
    except Exception:
        logger.exception("Dispatcher pass aborted")
        return None
    finally:
        close_old_connections()

    if report is not None and (report.pending or report.errors or report.tokens_cleared):
        logger.info(
            "Dispatcher pass at %s | %s",
            f"{report.started_at:%Y-%m-%d %H:%M:%S}",
            report.summary(),
        )

    return report
