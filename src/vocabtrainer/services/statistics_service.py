"""Read-only statistics over the vocabulary and the study counters."""
import math
from datetime import datetime
from typing import List, Optional

from vocabtrainer.config import LearningSettings, settings
from vocabtrainer.models.progress_models import (
    ProgressOverview,
    VocabularyCounts,
    WordProgress,
)
from vocabtrainer.services.daily_tracker import DailyTracker
from vocabtrainer.services.progress_scheduler import ProgressScheduler
from vocabtrainer.storage.base import VocabularyCatalog


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return math.floor(value + 0.5)


def calculate_accuracy(correct: int, wrong: int) -> int:
    """Return the percentage of correct answers, 0 when there are none."""
    total = correct + wrong
    if total == 0:
        return 0
    return round_half_up(correct / total * 100)


class StatisticsService:
    """Service for derived views of the learning state. Never writes."""

    def __init__(
        self,
        catalog: VocabularyCatalog,
        scheduler: ProgressScheduler,
        tracker: DailyTracker,
        learning_settings: Optional[LearningSettings] = None,
    ):
        """Initialize the service with the catalog and the core services."""
        self.catalog = catalog
        self.scheduler = scheduler
        self.tracker = tracker
        self.learning = learning_settings or settings.learning

    def _catalog_progress(self) -> List[WordProgress]:
        records = self.scheduler.all_progress()
        return [
            records.get(word_id) or WordProgress(word_id=word_id)
            for word_id in self.catalog.all_ids()
        ]

    def vocabulary_counts(self) -> VocabularyCounts:
        """Partition the catalog into new, learning and mastered items."""
        new = learning = mastered = 0
        for progress in self._catalog_progress():
            if progress.level == 0:
                new += 1
            elif progress.level >= self.learning.max_level:
                mastered += 1
            else:
                learning += 1
        return VocabularyCounts(
            total=new + learning + mastered,
            new=new,
            learning=learning,
            mastered=mastered,
        )

    def new_ids(self) -> List[str]:
        """Return catalog items never studied."""
        return [p.word_id for p in self._catalog_progress() if p.level == 0]

    def review_due_ids(self, now: datetime) -> List[str]:
        """Return catalog items due for review on the study day of ``now``."""
        today = self.tracker.study_day(now)
        return [
            p.word_id for p in self._catalog_progress()
            if self.scheduler.is_due(p, today)
        ]

    def review_due_count(self, now: datetime) -> int:
        """Return the number of items due for review."""
        return len(self.review_due_ids(now))

    def wrong_book_ids(self) -> List[str]:
        """Return the wrong book in insertion order."""
        return self.scheduler.wrong_book.all()

    def favorite_ids(self) -> List[str]:
        """Return catalog items marked as favorite."""
        return [p.word_id for p in self._catalog_progress() if p.is_favorite]

    def accuracy(self) -> int:
        """Return the lifetime answer accuracy in percent."""
        stats = self.tracker.current()
        return calculate_accuracy(stats.total_correct, stats.total_wrong)

    def progress_overview(self, now: datetime) -> ProgressOverview:
        """Bundle counts, today's counters and goals."""
        counts = self.vocabulary_counts()
        stats = self.tracker.current()
        return ProgressOverview(
            total_words=counts.total,
            new_words=counts.new,
            learning_words=counts.learning,
            mastered_words=counts.mastered,
            review_due=self.review_due_count(now),
            today_learned=stats.today_learned,
            today_reviewed=stats.today_reviewed,
            daily_new_goal=self.learning.daily_new_goal,
            daily_review_goal=self.learning.daily_review_goal,
            streak=stats.streak,
            accuracy=calculate_accuracy(stats.total_correct, stats.total_wrong),
        )
