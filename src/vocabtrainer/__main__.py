"""Main entry point for the trainer."""
import logging
from datetime import datetime

from vocabtrainer.config import settings
from vocabtrainer.logging_config import setup_logging
from vocabtrainer.models.base import SessionLocal, init_db
from vocabtrainer.monitoring import start_monitoring
from vocabtrainer.services.learning_service import LearningService
from vocabtrainer.services.notification_service import NotificationService

logger = logging.getLogger(__name__)


def main() -> None:
    """Roll the study day over, check achievements and report progress."""
    setup_logging("Starting vocabtrainer ...")

    if settings.monitoring.enabled:
        start_monitoring(settings.monitoring.port)
        logger.info("Metrics exported on port %d", settings.monitoring.port)

    init_db()
    logger.info("Database initialized")

    db = SessionLocal()
    try:
        service = LearningService.from_session(db, notifier=NotificationService(deliver=print))
        now = datetime.now().astimezone()

        unlocked = service.start_day(now)
        if unlocked:
            logger.info("Unlocked %d achievements on start-up", len(unlocked))

        print(service.daily_reminder(now))
        reminder = service.review_reminder(now)
        if reminder:
            print(reminder)

        upcoming = service.next_achievement()
        if upcoming is not None:
            progress = service.achievement_progress(upcoming.id)
            if progress is not None:
                logger.info(
                    "Next achievement: %s (%d/%d, %d%%)",
                    upcoming.id,
                    progress.current,
                    progress.target,
                    progress.percent,
                )
            else:
                logger.info("Next achievement: %s", upcoming.id)
    finally:
        db.close()
        logger.info("Database session closed")


if __name__ == "__main__":
    main()
