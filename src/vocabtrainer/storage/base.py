"""Contracts of the collaborators the learning core reads from and writes to.

Write methods return ``True`` when the change was persisted and ``False``
when the backing store rejected it. Read methods never raise for missing
or malformed records; they return defaults instead.
"""
from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Dict, List, Sequence

from vocabtrainer.models.achievement_models import AchievementDefinition
from vocabtrainer.models.progress_models import DailyStats, WordProgress


class ProgressRepository(ABC):
    """Per-item learning progress."""

    @abstractmethod
    def get(self, word_id: str) -> WordProgress:
        """Return the stored progress or a default level-0 record."""

    @abstractmethod
    def set(self, word_id: str, progress: WordProgress) -> bool:
        """Persist a progress record."""

    @abstractmethod
    def all(self) -> Dict[str, WordProgress]:
        """Return every stored record keyed by item id."""

    @abstractmethod
    def clear(self) -> bool:
        """Delete every record."""


class DailyStatsStore(ABC):
    """The single daily statistics record."""

    @abstractmethod
    def get(self) -> DailyStats:
        """Return the stored stats or zeroed defaults."""

    @abstractmethod
    def set(self, stats: DailyStats) -> bool:
        """Persist the stats."""


class WrongBookSet(ABC):
    """Items flagged for remedial review."""

    @abstractmethod
    def contains(self, word_id: str) -> bool:
        """Check membership."""

    @abstractmethod
    def add(self, word_id: str) -> bool:
        """Add an item; adding a member again is a no-op."""

    @abstractmethod
    def remove(self, word_id: str) -> bool:
        """Remove an item; removing a non-member is a no-op."""

    @abstractmethod
    def all(self) -> List[str]:
        """Return members in insertion order."""

    @abstractmethod
    def clear(self) -> bool:
        """Remove every member."""


class AchievementLedgerStore(ABC):
    """Append-only record of unlocked achievements."""

    @abstractmethod
    def all(self) -> Dict[str, datetime]:
        """Return unlock timestamps keyed by achievement id."""

    @abstractmethod
    def try_insert(self, achievement_id: str, unlocked_at: datetime) -> bool:
        """Insert an entry; return True only if it was not present before."""


class StudyCalendarStore(ABC):
    """Number of items first learned per study day."""

    @abstractmethod
    def increment(self, day: date, count: int = 1) -> bool:
        """Add ``count`` to the given day."""

    @abstractmethod
    def all(self) -> Dict[date, int]:
        """Return counts keyed by day."""

    @abstractmethod
    def clear(self) -> bool:
        """Delete every day."""


class VocabularyCatalog(ABC):
    """The vocabulary being studied."""

    @abstractmethod
    def all_ids(self) -> Sequence[str]:
        """Return every item id."""


class NotificationSink(ABC):
    """Receiver of achievement unlock events."""

    @abstractmethod
    def notify(self, definition: AchievementDefinition, unlocked_at: datetime) -> None:
        """Publish an unlock."""
