"""
Planificateur APScheduler pour la relance des emails de l'outbox.

Le job s'exécute toutes les OUTBOX_POLL_MINUTES minutes et délivre les
messages encore PENDING (échec SMTP lors de l'envoi inline).
"""

import logging

from apscheduler.schedulers.background import BackgroundScheduler

from planner.config import settings
from planner.database import SessionLocal

logger = logging.getLogger(__name__)

scheduler = BackgroundScheduler()


def _dispatch_outbox_scheduled() -> None:
    """
    Tâche planifiée : délivre un lot de messages PENDING dans sa propre session.
    Import local pour éviter les imports circulaires.
    """
    from planner.services.mail_service import dispatch_pending

    db = SessionLocal()
    try:
        result = dispatch_pending(db)
        if result.sent_count or result.failed_count:
            logger.info(
                "Outbox : %d envoyés, %d échecs",
                result.sent_count,
                result.failed_count,
            )
    except Exception as exc:
        logger.error("Erreur lors de la relance de l'outbox : %s", exc)
    finally:
        db.close()


def start_scheduler() -> None:
    """Démarre le planificateur en arrière-plan (appelé au démarrage de l'API)."""
    if not settings.SCHEDULER_ENABLED:
        logger.info("Scheduler désactivé (SCHEDULER_ENABLED=false).")
        return
    scheduler.add_job(
        _dispatch_outbox_scheduled,
        trigger="interval",
        minutes=settings.OUTBOX_POLL_MINUTES,
        id="outbox_dispatch",
        replace_existing=True,
    )
    scheduler.start()
    logger.info(
        "Scheduler démarré — relance de l'outbox toutes les %d minutes.",
        settings.OUTBOX_POLL_MINUTES,
    )


def stop_scheduler() -> None:
    """Arrête le planificateur proprement (appelé à l'arrêt de l'API)."""
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("Scheduler arrêté.")
