"""Tests for the statistics service."""
from datetime import date, timedelta

import pytest

from vocabtrainer.models.progress_models import DailyStats, WordProgress
from vocabtrainer.services.learning_service import LearningService
from vocabtrainer.services.statistics_service import (
    StatisticsService,
    calculate_accuracy,
    round_half_up,
)


@pytest.fixture
def statistics(learning_service: LearningService) -> StatisticsService:
    return learning_service.statistics


@pytest.fixture
def seeded(progress_repo, wrong_book) -> None:
    """apple new, banana and cherry learning, date mastered, elder untouched."""
    progress_repo.set("banana", WordProgress("banana", level=2, next_review=date(2024, 3, 11)))
    progress_repo.set("cherry", WordProgress("cherry", level=4, next_review=date(2024, 3, 20),
                                             is_favorite=True))
    progress_repo.set("date", WordProgress("date", level=5, next_review=date(2024, 3, 1)))
    progress_repo.set("apple", WordProgress("apple", level=0))
    # Progress for items outside the catalog is ignored
    progress_repo.set("zucchini", WordProgress("zucchini", level=3))


@pytest.mark.parametrize(
    "correct, wrong, expected",
    [(0, 0, 0), (180, 20, 90), (1, 0, 100), (0, 5, 0), (1, 7, 13), (2, 1, 67)],
)
def test_calculate_accuracy(correct: int, wrong: int, expected: int) -> None:
    assert calculate_accuracy(correct, wrong) == expected


def test_round_half_up() -> None:
    assert round_half_up(12.5) == 13
    assert round_half_up(12.49) == 12
    assert round_half_up(0.5) == 1


@pytest.mark.usefixtures("seeded")
def test_vocabulary_counts(statistics: StatisticsService) -> None:
    counts = statistics.vocabulary_counts()

    assert counts.total == 5
    assert counts.new == 2
    assert counts.learning == 2
    assert counts.mastered == 1


@pytest.mark.usefixtures("seeded")
def test_review_due(statistics: StatisticsService, now) -> None:
    assert statistics.review_due_ids(now) == ["banana"]
    assert statistics.review_due_count(now + timedelta(days=9)) == 2


def test_never_scheduled_learning_item_is_due(statistics: StatisticsService, progress_repo, now) -> None:
    progress_repo.set("apple", WordProgress("apple", level=3, next_review=None))

    assert statistics.review_due_ids(now) == ["apple"]


@pytest.mark.usefixtures("seeded")
def test_id_lists(statistics: StatisticsService, wrong_book) -> None:
    wrong_book.add("banana")
    wrong_book.add("apple")

    assert statistics.new_ids() == ["apple", "elder"]
    assert statistics.favorite_ids() == ["cherry"]
    assert statistics.wrong_book_ids() == ["banana", "apple"]


def test_accuracy_reads_stats(statistics: StatisticsService, stats_store) -> None:
    stats_store.set(DailyStats(total_correct=180, total_wrong=20))

    assert statistics.accuracy() == 90


@pytest.mark.usefixtures("seeded")
def test_progress_overview(statistics: StatisticsService, stats_store, now) -> None:
    stats_store.set(DailyStats(today_learned=3, today_reviewed=7, streak=2,
                               total_correct=3, total_wrong=1))

    overview = statistics.progress_overview(now)

    assert overview.total_words == 5
    assert overview.mastered_words == 1
    assert overview.review_due == 1
    assert overview.today_learned == 3
    assert overview.today_reviewed == 7
    assert overview.daily_new_goal == 20
    assert overview.daily_review_goal == 50
    assert overview.streak == 2
    assert overview.accuracy == 75


@pytest.mark.usefixtures("seeded")
def test_statistics_do_not_write(statistics: StatisticsService, progress_repo, stats_store, now) -> None:
    before_progress = dict(progress_repo.data)
    before_stats = stats_store.data

    statistics.progress_overview(now)
    statistics.review_due_ids(now)

    assert progress_repo.data == before_progress
    assert stats_store.data == before_stats


if __name__ == "__main__":
    pytest.main([__file__])
