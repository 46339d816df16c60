"""Tests for database and progress models."""
from datetime import date, datetime
from typing import Generator

import pytest
from faker import Faker
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from vocabtrainer.models.base import init_db
from vocabtrainer.models.models import DailyStatsRecord, Word, WordProgressRecord
from vocabtrainer.models.progress_models import (
    DailyStats,
    WordProgress,
    parse_date,
    parse_datetime,
)

fake = Faker()


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create a fresh in-memory database session for each test."""
    engine = create_engine("sqlite://", poolclass=StaticPool)
    init_db(engine)
    db = Session(engine)
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


def test_word_progress_record_defaults(db: Session) -> None:
    """Test progress record creation."""
    record = WordProgressRecord(word_id=fake.word())
    db.add(record)
    db.commit()
    db.refresh(record)

    assert record.level == 0
    assert record.next_review is None
    assert record.correct_count == 0
    assert record.wrong_count == 0
    assert record.is_favorite is False
    assert record.is_in_wrong_book is False
    assert record.created_at is not None


def test_daily_stats_record_defaults(db: Session) -> None:
    """Test daily stats record creation."""
    record = DailyStatsRecord(id=1)
    db.add(record)
    db.commit()
    db.refresh(record)

    assert record.streak == 0
    assert record.total_learned == 0
    assert record.last_study_date is None


def test_word_creation(db: Session) -> None:
    """Test catalog word creation."""
    word = Word(text="hello", translation="привіт", phonetic="həˈləʊ")
    db.add(word)
    db.commit()

    assert db.get(Word, "hello").translation == "привіт"


def test_word_progress_defaults() -> None:
    progress = WordProgress(word_id="hello")

    assert progress.level == 0
    assert progress.is_new
    assert not progress.is_mastered
    assert progress.next_review is None


def test_word_progress_from_dict_restores_fields() -> None:
    progress = WordProgress.from_dict("hello", {
        "level": 3,
        "next_review": "2024-03-15",
        "correct_count": 4,
        "wrong_count": 1,
        "last_studied": "2024-03-11T14:30:00",
        "is_favorite": True,
        "is_in_wrong_book": False,
    })

    assert progress.level == 3
    assert progress.next_review == date(2024, 3, 15)
    assert progress.correct_count == 4
    assert progress.last_studied == datetime(2024, 3, 11, 14, 30)
    assert progress.is_favorite is True


@pytest.mark.parametrize("data", [None, "garbage", 42, []])
def test_word_progress_from_malformed_blob_is_default(data) -> None:
    assert WordProgress.from_dict("hello", data) == WordProgress(word_id="hello")


def test_word_progress_from_dict_sanitizes_fields() -> None:
    progress = WordProgress.from_dict("hello", {
        "level": 9,
        "next_review": "not-a-date",
        "correct_count": -3,
        "wrong_count": "many",
        "last_studied": "yesterday",
    })

    assert progress.level == 5
    assert progress.next_review is None
    assert progress.correct_count == 0
    assert progress.wrong_count == 0
    assert progress.last_studied is None


def test_word_progress_negative_level_is_clamped() -> None:
    assert WordProgress.from_dict("hello", {"level": -2}).level == 0


def test_daily_stats_from_dict_with_bad_date() -> None:
    stats = DailyStats.from_dict({"streak": 4, "last_study_date": "31/12/2023"})

    assert stats.streak == 4
    assert stats.last_study_date is None


def test_daily_stats_total_answers() -> None:
    assert DailyStats(total_correct=180, total_wrong=20).total_answers == 200


def test_parse_helpers() -> None:
    assert parse_date(datetime(2024, 3, 11, 23, 59)) == date(2024, 3, 11)
    assert parse_date("2024-03-11T08:00:00") == date(2024, 3, 11)
    assert parse_date(None) is None
    assert parse_datetime("2024-03-11T08:00:00") == datetime(2024, 3, 11, 8)
    assert parse_datetime(12) is None


if __name__ == "__main__":
    pytest.main([__file__])
