"""
Background scheduler for periodic tasks.

This module manages background jobs that run on a schedule:
- Expire stale pending suggestions: Runs every hour
- Sweep revoked sessions and rate-limit windows: Runs every 15 minutes
"""

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger
from homepa.core.config import settings
from homepa.core.database import SessionLocal, get_engine
from homepa.services.rate_limiter import rate_limiter
from homepa.services.session_service import session_service
from homepa.services.suggestion_service import suggestion_service
import logging

logger = logging.getLogger(__name__)

scheduler = BackgroundScheduler()


def expire_stale_suggestions_job():
    """
    Background job moving old pending suggestions to expired.

    A suggestion nobody acted on within SUGGESTION_TTL_HOURS is no longer relevant.
    """
    db = SessionLocal(bind=get_engine())
    try:
        expired = suggestion_service.expire_stale(db, settings.SUGGESTION_TTL_HOURS)
        if expired > 0:
            logger.info(f"Expired {expired} stale suggestions")
    except Exception as e:
        logger.error(f"Error in expire_stale_suggestions_job: {str(e)}")
        db.rollback()
    finally:
        db.close()


def sweep_sessions_and_limits_job():
    """Drop revoked-session rows past their expiry and stale rate-limit windows"""
    db = SessionLocal(bind=get_engine())
    try:
        sessions = session_service.sweep_expired(db)
        windows = rate_limiter.sweep()
        logger.info(f"Sweep completed: {sessions} revoked sessions, {windows} rate-limit windows removed")
    except Exception as e:
        logger.error(f"Error in sweep_sessions_and_limits_job: {str(e)}")
        db.rollback()
    finally:
        db.close()


def start_scheduler():
    """
    Start the background scheduler.

    This should be called when the FastAPI app starts.
    """
    if not scheduler.running:
        scheduler.add_job(
            expire_stale_suggestions_job,
            trigger=IntervalTrigger(hours=1),
            id="expire_stale_suggestions",
            name="Expire stale suggestions",
            replace_existing=True
        )
        scheduler.add_job(
            sweep_sessions_and_limits_job,
            trigger=IntervalTrigger(minutes=15),
            id="sweep_sessions_and_limits",
            name="Sweep revoked sessions and rate-limit windows",
            replace_existing=True
        )

        scheduler.start()
        logger.info("Background scheduler started.")


def stop_scheduler():
    """
    Stop the background scheduler.

    This should be called when the FastAPI app shuts down.
    """
    if scheduler.running:
        scheduler.shutdown()
        logger.info("Background scheduler stopped.")
