"""Tests for configuration settings."""
import pytest

from vocabtrainer.config import (
    REVIEW_INTERVALS,
    LearningSettings,
    Settings,
    settings,
)


def test_settings_defaults():
    """Test default settings values."""
    assert settings.learning.review_intervals == {1: 1, 2: 2, 3: 4, 4: 7, 5: 15}
    assert settings.learning.max_level == 5
    assert settings.learning.wrong_book_exit_level == 3
    assert settings.achievements.next_achievement_order[0] == "first_word"
    assert settings.database.url == "sqlite://"


def test_review_intervals_are_copied():
    """Each settings instance owns its interval table."""
    learning = LearningSettings()
    learning.review_intervals[1] = 99
    assert REVIEW_INTERVALS[1] == 1


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"daily_new_goal": 0}, "DAILY_NEW_GOAL"),
        ({"daily_review_goal": 0}, "DAILY_REVIEW_GOAL"),
        ({"day_start_hour": 24}, "DAY_START_HOUR"),
        ({"wrong_book_exit_level": 6}, "WRONG_BOOK_EXIT_LEVEL"),
        ({"review_intervals": {1: 1, 2: 2}}, "Review interval missing"),
        ({"review_intervals": {1: 0, 2: 2, 3: 4, 4: 7, 5: 15}}, "at least one day"),
    ],
)
def test_validate_rejects_invalid_learning_settings(overrides, message):
    """Invalid learning settings raise ValueError."""
    test_settings = Settings(learning=LearningSettings(**overrides))

    with pytest.raises(ValueError, match=message):
        test_settings.validate()


def test_validate_accepts_defaults():
    Settings().validate()


if __name__ == "__main__":
    pytest.main([__file__])
