"""Level transitions and review scheduling of vocabulary items."""
import logging
from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Dict, Optional

from vocabtrainer.config import LearningSettings, settings
from vocabtrainer.models.progress_models import LevelInfo, WordProgress
from vocabtrainer.monitoring import learning_events
from vocabtrainer.services.daily_tracker import DailyTracker
from vocabtrainer.storage.base import ProgressRepository, WrongBookSet

logger = logging.getLogger(__name__)

KNOWN_START_LEVEL = 2
UNKNOWN_START_LEVEL = 1


class ProgressScheduler:
    """Service applying learning events to progress records.

    Every event reads one record, computes the new level and review date,
    and writes it back. A write the repository rejects is kept in
    ``unsaved`` so it can be retried without recomputing the transition.
    A rejected wrong book update is kept in ``pending_membership`` and the
    record keeps its previous flag until the update goes through.
    """

    def __init__(
        self,
        progress_repo: ProgressRepository,
        wrong_book: WrongBookSet,
        tracker: DailyTracker,
        learning_settings: Optional[LearningSettings] = None,
    ):
        """Initialize the scheduler with its stores."""
        self.progress_repo = progress_repo
        self.wrong_book = wrong_book
        self.tracker = tracker
        self.learning = learning_settings or settings.learning
        self.unsaved: Dict[str, WordProgress] = {}
        self.pending_membership: Dict[str, bool] = {}

    def next_review_date(self, level: int, today: date) -> date:
        """Return the review date for an item reaching ``level`` on ``today``."""
        return today + timedelta(days=self.learning.review_intervals[level])

    def is_due(self, progress: WordProgress, today: date) -> bool:
        """Check whether a learning item should be reviewed on ``today``."""
        if not 1 <= progress.level < self.learning.max_level:
            return False
        return progress.next_review is None or progress.next_review <= today

    def level_info(self, level: int) -> LevelInfo:
        """Describe a level for display."""
        if level <= 0:
            return LevelInfo("new", "New")
        if level >= self.learning.max_level:
            return LevelInfo("mastered", "Mastered")
        return LevelInfo("learning", "Learning")

    def get(self, word_id: str) -> WordProgress:
        """Return the latest record of an item, including unsaved changes."""
        if word_id in self.unsaved:
            return replace(self.unsaved[word_id])
        return self.progress_repo.get(word_id)

    def all_progress(self) -> Dict[str, WordProgress]:
        """Return every record, with unsaved changes applied."""
        records = self.progress_repo.all()
        records.update({word_id: replace(p) for word_id, p in self.unsaved.items()})
        return records

    def first_exposure(self, word_id: str, known: bool, now: datetime) -> WordProgress:
        """Record the first time the learner sees an item.

        Only applies to new items; for anything else the current record is
        returned unchanged.
        """
        progress = self.get(word_id)
        if progress.level != 0:
            logger.debug("Ignoring first exposure of %s at level %d", word_id, progress.level)
            return progress

        today = self.tracker.study_day(now)
        progress.level = KNOWN_START_LEVEL if known else UNKNOWN_START_LEVEL
        progress.last_studied = now
        progress.next_review = self.next_review_date(progress.level, today)

        if known:
            progress.correct_count += 1
        else:
            progress.wrong_count += 1
            self._join_wrong_book(progress)

        self._save(progress)
        self.tracker.record_learned(now)
        learning_events.labels(event_type="first_exposure").inc()
        logger.info("First exposure of %s (known: %s) -> level %d", word_id, known, progress.level)
        return progress

    def record_correct(self, word_id: str, now: datetime) -> WordProgress:
        """Promote an item after a correct review answer."""
        progress = self.get(word_id)
        if progress.level == 0:
            logger.debug("Ignoring review answer for new item %s", word_id)
            return progress

        today = self.tracker.study_day(now)
        progress.level = min(progress.level + 1, self.learning.max_level)
        progress.correct_count += 1
        progress.last_studied = now

        if progress.level >= self.learning.wrong_book_exit_level and (
            progress.is_in_wrong_book
            or self.pending_membership.get(word_id)
            or self.wrong_book.contains(word_id)
        ):
            self._leave_wrong_book(progress)

        progress.next_review = self.next_review_date(progress.level, today)

        self._save(progress)
        self.tracker.record_answer(True, now)
        learning_events.labels(event_type="correct").inc()
        logger.debug("Correct answer for %s -> level %d", word_id, progress.level)
        return progress

    def record_wrong(self, word_id: str, now: datetime) -> WordProgress:
        """Demote an item after a wrong review answer and schedule it for tomorrow."""
        progress = self.get(word_id)
        if progress.level == 0:
            logger.debug("Ignoring review answer for new item %s", word_id)
            return progress

        today = self.tracker.study_day(now)
        progress.level = max(progress.level - 1, 1)
        progress.wrong_count += 1
        progress.last_studied = now
        self._join_wrong_book(progress)

        # Always the shortest interval, whatever level the item dropped to
        progress.next_review = self.next_review_date(1, today)

        self._save(progress)
        self.tracker.record_answer(False, now)
        learning_events.labels(event_type="wrong").inc()
        logger.debug("Wrong answer for %s -> level %d", word_id, progress.level)
        return progress

    def reset_item(self, word_id: str) -> WordProgress:
        """Restore the default record of an item."""
        # Flag follows the stored membership until the removal is written
        progress = WordProgress(word_id=word_id, is_in_wrong_book=self.wrong_book.contains(word_id))
        self._leave_wrong_book(progress)
        self._save(progress)
        learning_events.labels(event_type="reset").inc()
        return progress

    def toggle_favorite(self, word_id: str) -> bool:
        """Flip the favorite flag of an item and return the new state."""
        progress = self.get(word_id)
        progress.is_favorite = not progress.is_favorite
        self._save(progress)
        return progress.is_favorite

    def is_pending(self, word_id: str) -> bool:
        """Check whether an item has changes that are not stored yet."""
        return word_id in self.unsaved or word_id in self.pending_membership

    def retry_unsaved(self) -> bool:
        """Write pending changes again; True when nothing is left pending."""
        for word_id, member in list(self.pending_membership.items()):
            progress = self.get(word_id)
            if self._set_membership(progress, member):
                self._save(progress)
        for word_id, progress in list(self.unsaved.items()):
            if self.progress_repo.set(word_id, progress):
                del self.unsaved[word_id]
        return not self.unsaved and not self.pending_membership

    def discard_pending(self) -> None:
        """Forget changes that were never stored."""
        self.unsaved.clear()
        self.pending_membership.clear()

    def _join_wrong_book(self, progress: WordProgress) -> bool:
        return self._set_membership(progress, True)

    def _leave_wrong_book(self, progress: WordProgress) -> bool:
        return self._set_membership(progress, False)

    def _set_membership(self, progress: WordProgress, member: bool) -> bool:
        word_id = progress.word_id
        if member:
            written = self.wrong_book.add(word_id)
        else:
            written = self.wrong_book.remove(word_id)

        if not written:
            logger.warning("Wrong book update for %s failed; keeping it for retry", word_id)
            self.pending_membership[word_id] = member
            return False
        self.pending_membership.pop(word_id, None)
        progress.is_in_wrong_book = member
        return True

    def _save(self, progress: WordProgress) -> bool:
        if self.progress_repo.set(progress.word_id, progress):
            self.unsaved.pop(progress.word_id, None)
            return True
        logger.warning("Progress write for %s failed; keeping it for retry", progress.word_id)
        self.unsaved[progress.word_id] = replace(progress)
        return False
