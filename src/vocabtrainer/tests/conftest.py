"""Test configuration."""
import os
from datetime import datetime

import pytest

# Set test environment before any imports
os.environ["ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"

# Import after environment setup
from vocabtrainer.config import LearningSettings
from vocabtrainer.services.learning_service import LearningService
from vocabtrainer.storage.memory import (
    MemoryAchievementLedger,
    MemoryDailyStatsStore,
    MemoryProgressRepository,
    MemoryStudyCalendar,
    MemoryVocabularyCatalog,
    MemoryWrongBook,
)

WORDS = ["apple", "banana", "cherry", "date", "elder"]


@pytest.fixture
def now() -> datetime:
    """A fixed afternoon instant."""
    return datetime(2024, 3, 11, 14, 30)


@pytest.fixture
def learning_settings() -> LearningSettings:
    """Learning settings with the documented defaults."""
    return LearningSettings(daily_new_goal=20, daily_review_goal=50, day_start_hour=0)


@pytest.fixture
def progress_repo() -> MemoryProgressRepository:
    return MemoryProgressRepository()


@pytest.fixture
def stats_store() -> MemoryDailyStatsStore:
    return MemoryDailyStatsStore()


@pytest.fixture
def wrong_book() -> MemoryWrongBook:
    return MemoryWrongBook()


@pytest.fixture
def ledger() -> MemoryAchievementLedger:
    return MemoryAchievementLedger()


@pytest.fixture
def calendar() -> MemoryStudyCalendar:
    return MemoryStudyCalendar()


@pytest.fixture
def catalog() -> MemoryVocabularyCatalog:
    return MemoryVocabularyCatalog(WORDS)


@pytest.fixture
def learning_service(
    progress_repo: MemoryProgressRepository,
    stats_store: MemoryDailyStatsStore,
    wrong_book: MemoryWrongBook,
    ledger: MemoryAchievementLedger,
    catalog: MemoryVocabularyCatalog,
    calendar: MemoryStudyCalendar,
    learning_settings: LearningSettings,
) -> LearningService:
    """Create a learning service over in-memory stores."""
    return LearningService(
        progress_repo=progress_repo,
        stats_store=stats_store,
        wrong_book=wrong_book,
        ledger=ledger,
        catalog=catalog,
        calendar=calendar,
        learning_settings=learning_settings,
    )
