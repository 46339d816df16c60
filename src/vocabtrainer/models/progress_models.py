"""Models for learning progress data."""
import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Optional

from vocabtrainer.config import MAX_LEVEL

logger = logging.getLogger(__name__)


def parse_date(value: Any) -> Optional[date]:
    """Parse a stored calendar date, returning None for anything unusable."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        logger.debug("Ignoring unparseable date %r", value)
        return None


def parse_datetime(value: Any) -> Optional[datetime]:
    """Parse a stored timestamp, returning None for anything unusable."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value))
    except ValueError:
        logger.debug("Ignoring unparseable timestamp %r", value)
        return None


def _counter(value: Any) -> int:
    try:
        return max(int(value), 0)
    except (TypeError, ValueError):
        return 0


def _isoformat(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value is not None else None


@dataclass
class WordProgress:
    """Progress of one vocabulary item."""
    word_id: str
    level: int = 0
    next_review: Optional[date] = None
    correct_count: int = 0
    wrong_count: int = 0
    last_studied: Optional[datetime] = None
    is_favorite: bool = False
    is_in_wrong_book: bool = False

    @property
    def is_new(self) -> bool:
        return self.level == 0

    @property
    def is_mastered(self) -> bool:
        return self.level >= MAX_LEVEL

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return {
            "word_id": self.word_id,
            "level": self.level,
            "next_review": _isoformat(self.next_review),
            "correct_count": self.correct_count,
            "wrong_count": self.wrong_count,
            "last_studied": _isoformat(self.last_studied),
            "is_favorite": self.is_favorite,
            "is_in_wrong_book": self.is_in_wrong_book,
        }

    @classmethod
    def from_dict(cls, word_id: str, data: Optional[Dict[str, Any]]) -> "WordProgress":
        """Build a record from stored data, falling back to defaults field by field."""
        if not isinstance(data, dict):
            return cls(word_id=word_id)

        try:
            level = int(data.get("level", 0))
        except (TypeError, ValueError):
            level = 0

        return cls(
            word_id=word_id,
            level=min(max(level, 0), MAX_LEVEL),
            next_review=parse_date(data.get("next_review")),
            correct_count=_counter(data.get("correct_count", 0)),
            wrong_count=_counter(data.get("wrong_count", 0)),
            last_studied=parse_datetime(data.get("last_studied")),
            is_favorite=bool(data.get("is_favorite", False)),
            is_in_wrong_book=bool(data.get("is_in_wrong_book", False)),
        )


@dataclass
class DailyStats:
    """Lifetime and per-day study counters."""
    total_learned: int = 0
    total_correct: int = 0
    total_wrong: int = 0
    today_learned: int = 0
    today_reviewed: int = 0
    streak: int = 0
    last_study_date: Optional[date] = None

    @property
    def total_answers(self) -> int:
        return self.total_correct + self.total_wrong

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return {
            "total_learned": self.total_learned,
            "total_correct": self.total_correct,
            "total_wrong": self.total_wrong,
            "today_learned": self.today_learned,
            "today_reviewed": self.today_reviewed,
            "streak": self.streak,
            "last_study_date": _isoformat(self.last_study_date),
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "DailyStats":
        """Build stats from stored data, falling back to zeroed counters."""
        if not isinstance(data, dict):
            return cls()

        return cls(
            total_learned=_counter(data.get("total_learned", 0)),
            total_correct=_counter(data.get("total_correct", 0)),
            total_wrong=_counter(data.get("total_wrong", 0)),
            today_learned=_counter(data.get("today_learned", 0)),
            today_reviewed=_counter(data.get("today_reviewed", 0)),
            streak=_counter(data.get("streak", 0)),
            last_study_date=parse_date(data.get("last_study_date")),
        )


@dataclass(frozen=True)
class LevelInfo:
    """Display status of a level."""
    status: str  # new, learning, mastered
    label: str


@dataclass(frozen=True)
class VocabularyCounts:
    """Partition of the vocabulary by level."""
    total: int
    new: int
    learning: int
    mastered: int


@dataclass(frozen=True)
class ProgressOverview:
    """Summary shown on the home screen and in reminders."""
    total_words: int
    new_words: int
    learning_words: int
    mastered_words: int
    review_due: int
    today_learned: int
    today_reviewed: int
    daily_new_goal: int
    daily_review_goal: int
    streak: int
    accuracy: int
