"""Daily counters and streak bookkeeping across study days."""
import logging
from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Optional

from vocabtrainer.config import LearningSettings, settings
from vocabtrainer.models.progress_models import DailyStats
from vocabtrainer.monitoring import streak_days
from vocabtrainer.storage.base import DailyStatsStore, StudyCalendarStore

logger = logging.getLogger(__name__)


def study_day(now: datetime, day_start_hour: int = 0) -> date:
    """Return the study day an instant belongs to.

    A study day starts at ``day_start_hour``; earlier instants count towards
    the previous calendar day.
    """
    return (now - timedelta(hours=day_start_hour)).date()


class DailyTracker:
    """Service for the daily stats record and the study calendar."""

    def __init__(
        self,
        stats_store: DailyStatsStore,
        calendar: Optional[StudyCalendarStore] = None,
        learning_settings: Optional[LearningSettings] = None,
    ):
        """Initialize the tracker with its stores."""
        self.stats_store = stats_store
        self.calendar = calendar
        self.learning = learning_settings or settings.learning
        self.unsaved: Optional[DailyStats] = None

    def study_day(self, now: datetime) -> date:
        """Return the study day of ``now``."""
        return study_day(now, self.learning.day_start_hour)

    def current(self) -> DailyStats:
        """Return the latest stats, including a pending unsaved write."""
        if self.unsaved is not None:
            return replace(self.unsaved)
        return self.stats_store.get()

    def check_rollover(self, now: datetime) -> DailyStats:
        """Start a new study day if ``now`` is past the last recorded one.

        Idempotent within a study day.
        """
        stats = self.current()
        today = self.study_day(now)
        last_date = stats.last_study_date

        if last_date == today:
            return stats

        if last_date is not None:
            gap = (today - last_date).days
            if gap == 1:
                stats.streak += 1
            elif gap > 1:
                stats.streak = 0
            else:
                logger.warning(
                    "Study day %s is before the last study date %s; keeping streak %d",
                    today,
                    last_date,
                    stats.streak,
                )

        stats.today_learned = 0
        stats.today_reviewed = 0
        stats.last_study_date = today
        self._save(stats)

        streak_days.set(stats.streak)
        logger.info("New study day %s (streak: %d)", today, stats.streak)
        return stats

    def record_learned(self, now: datetime) -> DailyStats:
        """Count an item learned for the first time."""
        stats = self.check_rollover(now)
        stats.today_learned += 1
        stats.total_learned += 1
        self._save(stats)

        if self.calendar is not None and not self.calendar.increment(self.study_day(now), 1):
            logger.warning("Failed to update the study calendar for %s", self.study_day(now))
        return stats

    def record_answer(self, correct: bool, now: datetime) -> DailyStats:
        """Count a review answer."""
        stats = self.check_rollover(now)
        if correct:
            stats.total_correct += 1
        else:
            stats.total_wrong += 1
        stats.today_reviewed += 1
        self._save(stats)
        return stats

    def reset(self) -> bool:
        """Restore zeroed stats."""
        self.unsaved = None
        return self._save(DailyStats())

    def retry_unsaved(self) -> bool:
        """Write a pending stats record again."""
        if self.unsaved is None:
            return True
        return self._save(self.unsaved)

    def _save(self, stats: DailyStats) -> bool:
        if self.stats_store.set(stats):
            self.unsaved = None
            return True
        logger.warning("Daily stats write failed; keeping them for retry")
        self.unsaved = replace(stats)
        return False
