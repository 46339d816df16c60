"""Learning service wiring the scheduler, tracker, statistics and achievements."""
import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from vocabtrainer.config import AchievementSettings, LearningSettings, settings
from vocabtrainer.models.achievement_models import (
    AchievementCount,
    AchievementDefinition,
    AchievementProgress,
    AchievementStatus,
)
from vocabtrainer.models.progress_models import ProgressOverview, WordProgress
from vocabtrainer.services.achievement_engine import AchievementEngine
from vocabtrainer.services.daily_tracker import DailyTracker
from vocabtrainer.services.notification_service import NotificationService
from vocabtrainer.services.progress_scheduler import ProgressScheduler
from vocabtrainer.services.statistics_service import StatisticsService
from vocabtrainer.storage.base import (
    AchievementLedgerStore,
    DailyStatsStore,
    NotificationSink,
    ProgressRepository,
    StudyCalendarStore,
    VocabularyCatalog,
    WrongBookSet,
)
from vocabtrainer.storage.sql import (
    SqlAchievementLedger,
    SqlDailyStatsStore,
    SqlProgressRepository,
    SqlStudyCalendar,
    SqlVocabularyCatalog,
    SqlWrongBook,
)

logger = logging.getLogger(__name__)


@dataclass
class LearningOutcome:
    """Result of one learning event."""
    progress: WordProgress
    saved: bool
    unlocked: List[AchievementDefinition] = field(default_factory=list)


class LearningService:
    """Service for one learner profile.

    All operations run under one re-entrant lock, so level transitions and
    ledger inserts are never interleaved and reads never see a half-applied
    event.
    """

    def __init__(
        self,
        progress_repo: ProgressRepository,
        stats_store: DailyStatsStore,
        wrong_book: WrongBookSet,
        ledger: AchievementLedgerStore,
        catalog: VocabularyCatalog,
        calendar: Optional[StudyCalendarStore] = None,
        notifier: Optional[NotificationSink] = None,
        learning_settings: Optional[LearningSettings] = None,
        achievement_settings: Optional[AchievementSettings] = None,
    ):
        """Initialize the service with the profile's stores."""
        self.learning = learning_settings or settings.learning
        self.calendar = calendar
        self.notifications = (
            notifier if isinstance(notifier, NotificationService) else NotificationService()
        )
        self._lock = threading.RLock()

        self.tracker = DailyTracker(stats_store, calendar, self.learning)
        self.scheduler = ProgressScheduler(progress_repo, wrong_book, self.tracker, self.learning)
        self.statistics = StatisticsService(catalog, self.scheduler, self.tracker, self.learning)
        self.achievements = AchievementEngine(
            ledger,
            self.statistics,
            notifier,
            learning_settings=self.learning,
            achievement_settings=achievement_settings,
        )

    @classmethod
    def from_session(
        cls,
        db: Session,
        notifier: Optional[NotificationSink] = None,
    ) -> "LearningService":
        """Create a service over the SQL stores of a database session."""
        return cls(
            progress_repo=SqlProgressRepository(db),
            stats_store=SqlDailyStatsStore(db),
            wrong_book=SqlWrongBook(db),
            ledger=SqlAchievementLedger(db),
            catalog=SqlVocabularyCatalog(db),
            calendar=SqlStudyCalendar(db),
            notifier=notifier,
        )

    def start_day(self, now: datetime) -> List[AchievementDefinition]:
        """Run the daily rollover and an achievement pass, as on start-up."""
        with self._lock:
            self.tracker.check_rollover(now)
            return self.achievements.evaluate(now)

    def first_exposure(self, word_id: str, known: bool, now: datetime) -> LearningOutcome:
        """Record the first time the learner sees an item."""
        with self._lock:
            progress = self.scheduler.first_exposure(word_id, known, now)
            return self._complete(progress, now)

    def record_answer(self, word_id: str, correct: bool, now: datetime) -> LearningOutcome:
        """Record a review answer."""
        with self._lock:
            if correct:
                progress = self.scheduler.record_correct(word_id, now)
            else:
                progress = self.scheduler.record_wrong(word_id, now)
            return self._complete(progress, now)

    def record_correct(self, word_id: str, now: datetime) -> LearningOutcome:
        """Record a correct review answer."""
        return self.record_answer(word_id, True, now)

    def record_wrong(self, word_id: str, now: datetime) -> LearningOutcome:
        """Record a wrong review answer."""
        return self.record_answer(word_id, False, now)

    def reset_item(self, word_id: str) -> LearningOutcome:
        """Restore the default progress of an item."""
        with self._lock:
            progress = self.scheduler.reset_item(word_id)
            return LearningOutcome(progress, not self.scheduler.is_pending(word_id))

    def toggle_favorite(self, word_id: str) -> bool:
        """Flip the favorite flag of an item."""
        with self._lock:
            return self.scheduler.toggle_favorite(word_id)

    def reset_all(self) -> bool:
        """Clear progress, wrong book, daily stats and calendar.

        Unlocked achievements are kept.
        """
        with self._lock:
            self.scheduler.discard_pending()
            results = [
                self.scheduler.progress_repo.clear(),
                self.scheduler.wrong_book.clear(),
                self.tracker.reset(),
            ]
            if self.calendar is not None:
                results.append(self.calendar.clear())
            logger.info("Learning progress reset")
            return all(results)

    def retry_unsaved(self) -> bool:
        """Retry writes that failed earlier."""
        with self._lock:
            progress_saved = self.scheduler.retry_unsaved()
            stats_saved = self.tracker.retry_unsaved()
            return progress_saved and stats_saved

    def get_progress(self, word_id: str) -> WordProgress:
        """Return the progress of an item."""
        with self._lock:
            return self.scheduler.get(word_id)

    def overview(self, now: datetime) -> ProgressOverview:
        """Return the progress overview for the study day of ``now``."""
        with self._lock:
            self.tracker.check_rollover(now)
            return self.statistics.progress_overview(now)

    def review_due_ids(self, now: datetime) -> List[str]:
        """Return items due for review."""
        with self._lock:
            return self.statistics.review_due_ids(now)

    def all_achievements(self) -> List[AchievementStatus]:
        with self._lock:
            return self.achievements.all_achievements()

    def achievement_count(self) -> AchievementCount:
        with self._lock:
            return self.achievements.achievement_count()

    def next_achievement(self) -> Optional[AchievementDefinition]:
        with self._lock:
            return self.achievements.next_achievement()

    def achievement_progress(self, achievement_id: str) -> Optional[AchievementProgress]:
        with self._lock:
            return self.achievements.achievement_progress(achievement_id)

    def daily_reminder(self, now: datetime) -> str:
        """Format the daily reminder for the study day of ``now``."""
        overview = self.overview(now)
        return self.notifications.get_daily_reminder_message(overview)

    def review_reminder(self, now: datetime) -> Optional[str]:
        """Format the review reminder, None when nothing is due."""
        return self.notifications.get_review_reminder_message(self.review_due_ids(now))

    def _complete(self, progress: WordProgress, now: datetime) -> LearningOutcome:
        saved = not self.scheduler.is_pending(progress.word_id) and self.tracker.unsaved is None
        unlocked = self.achievements.evaluate(now)
        return LearningOutcome(progress, saved, unlocked)
