"""In-memory stores keeping records as serialized dicts."""
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence

from vocabtrainer.models.progress_models import (
    DailyStats,
    WordProgress,
    parse_date,
    parse_datetime,
)
from vocabtrainer.storage.base import (
    AchievementLedgerStore,
    DailyStatsStore,
    ProgressRepository,
    StudyCalendarStore,
    VocabularyCatalog,
    WrongBookSet,
)


class MemoryProgressRepository(ProgressRepository):
    """Progress records held as dict blobs keyed by item id."""

    def __init__(self, data: Optional[Dict[str, Any]] = None):
        self.data: Dict[str, Any] = data if data is not None else {}

    def get(self, word_id: str) -> WordProgress:
        return WordProgress.from_dict(word_id, self.data.get(word_id))

    def set(self, word_id: str, progress: WordProgress) -> bool:
        self.data[word_id] = progress.to_dict()
        return True

    def all(self) -> Dict[str, WordProgress]:
        return {word_id: self.get(word_id) for word_id in self.data}

    def clear(self) -> bool:
        self.data.clear()
        return True


class MemoryDailyStatsStore(DailyStatsStore):
    """Daily stats held as one dict blob."""

    def __init__(self, data: Optional[Any] = None):
        self.data = data

    def get(self) -> DailyStats:
        return DailyStats.from_dict(self.data)

    def set(self, stats: DailyStats) -> bool:
        self.data = stats.to_dict()
        return True


class MemoryWrongBook(WrongBookSet):
    """Wrong book backed by an insertion-ordered dict."""

    def __init__(self, word_ids: Iterable[str] = ()):
        self.members: Dict[str, None] = dict.fromkeys(word_ids)

    def contains(self, word_id: str) -> bool:
        return word_id in self.members

    def add(self, word_id: str) -> bool:
        self.members.setdefault(word_id, None)
        return True

    def remove(self, word_id: str) -> bool:
        self.members.pop(word_id, None)
        return True

    def all(self) -> List[str]:
        return list(self.members)

    def clear(self) -> bool:
        self.members.clear()
        return True


class MemoryAchievementLedger(AchievementLedgerStore):
    """Ledger holding ISO timestamps keyed by achievement id."""

    def __init__(self, data: Optional[Dict[str, Any]] = None):
        self.data: Dict[str, Any] = data if data is not None else {}

    def all(self) -> Dict[str, datetime]:
        ledger = {}
        for achievement_id, unlocked_at in self.data.items():
            # An entry with an unreadable timestamp is still unlocked
            ledger[achievement_id] = parse_datetime(unlocked_at) or datetime.min
        return ledger

    def try_insert(self, achievement_id: str, unlocked_at: datetime) -> bool:
        if achievement_id in self.data:
            return False
        self.data[achievement_id] = unlocked_at.isoformat()
        return True


class MemoryStudyCalendar(StudyCalendarStore):
    """Study calendar keyed by ISO date strings."""

    def __init__(self, data: Optional[Dict[str, int]] = None):
        self.data: Dict[str, int] = data if data is not None else {}

    def increment(self, day: date, count: int = 1) -> bool:
        key = day.isoformat()
        self.data[key] = self.data.get(key, 0) + count
        return True

    def all(self) -> Dict[date, int]:
        calendar = {}
        for key, count in self.data.items():
            day = parse_date(key)
            if day is not None:
                calendar[day] = count
        return calendar

    def clear(self) -> bool:
        self.data.clear()
        return True


class MemoryVocabularyCatalog(VocabularyCatalog):
    """Fixed list of item ids."""

    def __init__(self, word_ids: Iterable[str] = ()):
        self.word_ids: List[str] = list(word_ids)

    def all_ids(self) -> Sequence[str]:
        return list(self.word_ids)
