# fau_portal/scheduler.py
"""
Background task scheduler.

Uses APScheduler to run the periodic event reminder job inside the web
process.
"""

import logging
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger
from apscheduler.events import EVENT_JOB_ERROR, EVENT_JOB_MISSED

from fau_portal.background_tasks.reminder_tasks import send_event_reminders
from fau_portal.core.config import settings

logger = logging.getLogger(__name__)

# Global scheduler instance
scheduler = None


def _on_job_error(event):
    """Log scheduler job errors with full context."""
    exc = event.exception
    logger.error(
        "Scheduled job FAILED: job_id=%s error=%s",
        event.job_id, exc,
        exc_info=(type(exc), exc, None) if exc else None,
    )
    if event.traceback:
        logger.error("Traceback for job %s:\n%s", event.job_id, event.traceback)


def _on_job_missed(event):
    """Log when a scheduled job misses its execution window."""
    logger.warning(
        "Scheduled job MISSED: job_id=%s scheduled_run_time=%s",
        event.job_id,
        event.scheduled_run_time,
    )


def init_scheduler():
    """
    Initialize the background scheduler with all periodic tasks.

    This is called once when the application starts up.
    """
    global scheduler

    if scheduler is not None:
        logger.warning("Scheduler already initialized")
        return scheduler

    scheduler = BackgroundScheduler(
        timezone=settings.TIMEZONE,
        job_defaults={
            'coalesce': True,  # Combine missed executions
            'max_instances': 1,  # Only one instance of each job at a time
            'misfire_grace_time': 300,
        }
    )

    interval = settings.REMINDER_CHECK_INTERVAL_MINUTES
    scheduler.add_job(
        func=send_event_reminders,
        trigger=IntervalTrigger(minutes=interval),
        id='send_event_reminders',
        name='Send Day-Before Event Reminders',
        replace_existing=True
    )
    logger.info("Scheduled job: send_event_reminders (every %d minutes)", interval)

    scheduler.add_listener(_on_job_error, EVENT_JOB_ERROR)
    scheduler.add_listener(_on_job_missed, EVENT_JOB_MISSED)

    scheduler.start()
    logger.info("Background scheduler started successfully")

    return scheduler


def shutdown_scheduler():
    """
    Gracefully shutdown the scheduler.

    This is called when the application shuts down.
    """
    global scheduler

    if scheduler is not None:
        scheduler.shutdown(wait=True)
        logger.info("Background scheduler shutdown complete")
        scheduler = None


def get_scheduler_status():
    """
    Get the current status of all scheduled jobs.

    Returns:
        Dict with the scheduler state and each job's next run time.
    """
    if scheduler is None:
        return {"status": "not_initialized", "jobs": []}

    jobs = []
    for job in scheduler.get_jobs():
        jobs.append({
            "id": job.id,
            "name": job.name,
            "next_run_time": job.next_run_time.isoformat() if job.next_run_time else None,
            "trigger": str(job.trigger)
        })

    return {
        "status": "running" if scheduler.running else "stopped",
        "jobs": jobs
    }
