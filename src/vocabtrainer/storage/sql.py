"""SQLAlchemy-backed stores sharing one session."""
import logging
from datetime import date, datetime
from typing import Dict, List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from vocabtrainer.models.models import (
    AchievementRecord,
    DailyStatsRecord,
    StudyCalendarDay,
    Word,
    WordProgressRecord,
    WrongBookEntry,
)
from vocabtrainer.models.progress_models import DailyStats, WordProgress
from vocabtrainer.monitoring import db_errors, db_operations
from vocabtrainer.storage.base import (
    AchievementLedgerStore,
    DailyStatsStore,
    ProgressRepository,
    StudyCalendarStore,
    VocabularyCatalog,
    WrongBookSet,
)

logger = logging.getLogger(__name__)

DAILY_STATS_ID = 1


class SqlStore:
    """Common commit handling for the SQL stores."""

    def __init__(self, db: Session):
        """Initialize the store with a database session."""
        self.db = db

    def _commit(self, operation_type: str) -> bool:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Failed to commit %s: %s", operation_type, e)
            db_errors.labels(error_type=type(e).__name__).inc()
            return False
        db_operations.labels(operation_type=operation_type).inc()
        return True


def _to_progress(record: WordProgressRecord) -> WordProgress:
    return WordProgress.from_dict(
        record.word_id,
        {
            "level": record.level,
            "next_review": record.next_review,
            "correct_count": record.correct_count,
            "wrong_count": record.wrong_count,
            "last_studied": record.last_studied,
            "is_favorite": record.is_favorite,
            "is_in_wrong_book": record.is_in_wrong_book,
        },
    )


class SqlProgressRepository(SqlStore, ProgressRepository):
    """Progress records in the ``word_progress`` table."""

    def get(self, word_id: str) -> WordProgress:
        record = self.db.get(WordProgressRecord, word_id)
        if record is None:
            return WordProgress(word_id=word_id)
        return _to_progress(record)

    def set(self, word_id: str, progress: WordProgress) -> bool:
        record = self.db.get(WordProgressRecord, word_id)
        if record is None:
            record = WordProgressRecord(word_id=word_id)
            self.db.add(record)

        record.level = progress.level
        record.next_review = progress.next_review
        record.correct_count = progress.correct_count
        record.wrong_count = progress.wrong_count
        record.last_studied = progress.last_studied
        record.is_favorite = progress.is_favorite
        record.is_in_wrong_book = progress.is_in_wrong_book
        return self._commit("progress_set")

    def all(self) -> Dict[str, WordProgress]:
        records = self.db.scalars(select(WordProgressRecord)).all()
        return {record.word_id: _to_progress(record) for record in records}

    def clear(self) -> bool:
        self.db.query(WordProgressRecord).delete()
        return self._commit("progress_clear")


class SqlDailyStatsStore(SqlStore, DailyStatsStore):
    """Daily stats in the single ``daily_stats`` row."""

    def get(self) -> DailyStats:
        record = self.db.get(DailyStatsRecord, DAILY_STATS_ID)
        if record is None:
            return DailyStats()
        return DailyStats.from_dict({
            "total_learned": record.total_learned,
            "total_correct": record.total_correct,
            "total_wrong": record.total_wrong,
            "today_learned": record.today_learned,
            "today_reviewed": record.today_reviewed,
            "streak": record.streak,
            "last_study_date": record.last_study_date,
        })

    def set(self, stats: DailyStats) -> bool:
        record = self.db.get(DailyStatsRecord, DAILY_STATS_ID)
        if record is None:
            record = DailyStatsRecord(id=DAILY_STATS_ID)
            self.db.add(record)

        record.total_learned = stats.total_learned
        record.total_correct = stats.total_correct
        record.total_wrong = stats.total_wrong
        record.today_learned = stats.today_learned
        record.today_reviewed = stats.today_reviewed
        record.streak = stats.streak
        record.last_study_date = stats.last_study_date
        return self._commit("stats_set")


class SqlWrongBook(SqlStore, WrongBookSet):
    """Wrong book in the ``wrong_book`` table."""

    def contains(self, word_id: str) -> bool:
        return self.db.get(WrongBookEntry, word_id) is not None

    def add(self, word_id: str) -> bool:
        if self.contains(word_id):
            return True
        self.db.add(WrongBookEntry(word_id=word_id))
        return self._commit("wrong_book_add")

    def remove(self, word_id: str) -> bool:
        entry = self.db.get(WrongBookEntry, word_id)
        if entry is None:
            return True
        self.db.delete(entry)
        return self._commit("wrong_book_remove")

    def all(self) -> List[str]:
        return list(
            self.db.scalars(
                select(WrongBookEntry.word_id).order_by(WrongBookEntry.created_at)
            ).all()
        )

    def clear(self) -> bool:
        self.db.query(WrongBookEntry).delete()
        return self._commit("wrong_book_clear")


class SqlAchievementLedger(SqlStore, AchievementLedgerStore):
    """Ledger in the ``achievements`` table."""

    def all(self) -> Dict[str, datetime]:
        records = self.db.scalars(select(AchievementRecord)).all()
        return {record.achievement_id: record.unlocked_at for record in records}

    def try_insert(self, achievement_id: str, unlocked_at: datetime) -> bool:
        if self.db.get(AchievementRecord, achievement_id) is not None:
            return False

        self.db.add(AchievementRecord(achievement_id=achievement_id, unlocked_at=unlocked_at))
        try:
            self.db.commit()
        except IntegrityError:
            # Inserted concurrently through another session
            self.db.rollback()
            return False
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Failed to record achievement %s: %s", achievement_id, e)
            db_errors.labels(error_type=type(e).__name__).inc()
            return False
        db_operations.labels(operation_type="achievement_insert").inc()
        return True


class SqlStudyCalendar(SqlStore, StudyCalendarStore):
    """Study calendar in the ``study_calendar`` table."""

    def increment(self, day: date, count: int = 1) -> bool:
        record = self.db.get(StudyCalendarDay, day)
        if record is None:
            record = StudyCalendarDay(day=day, count=0)
            self.db.add(record)
        record.count += count
        return self._commit("calendar_increment")

    def all(self) -> Dict[date, int]:
        records = self.db.scalars(select(StudyCalendarDay)).all()
        return {record.day: record.count for record in records}

    def clear(self) -> bool:
        self.db.query(StudyCalendarDay).delete()
        return self._commit("calendar_clear")


class SqlVocabularyCatalog(SqlStore, VocabularyCatalog):
    """Catalog backed by the ``words`` table."""

    def all_ids(self) -> Sequence[str]:
        return list(self.db.scalars(select(Word.text).order_by(Word.text)).all())

    def add_word(self, text: str, translation: str = "", phonetic: Optional[str] = None) -> bool:
        """Add a word to the catalog, updating the translation if it already exists."""
        word = self.db.get(Word, text)
        if word is None:
            word = Word(text=text)
            self.db.add(word)
        word.translation = translation
        word.phonetic = phonetic
        return self._commit("word_add")
