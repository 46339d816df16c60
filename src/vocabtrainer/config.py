"""Configuration settings for the trainer."""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Define base directory
BASE_DIR = Path(__file__).parent.parent.parent

# Load environment variables from .env file
env_file = ".env.test" if os.getenv("ENV") == "test" else ".env"
load_dotenv(env_file)


# Learning settings
REVIEW_INTERVALS = {1: 1, 2: 2, 3: 4, 4: 7, 5: 15}  # level -> days until next review
MAX_LEVEL = 5


@dataclass
class DatabaseSettings:
    """Database configuration settings."""
    url: str = os.getenv("DATABASE_URL", "sqlite:///vocabtrainer.db")
    echo: bool = os.getenv("DATABASE_ECHO", "false").lower() == "true"


@dataclass
class LoggingSettings:
    """Logging configuration settings."""
    level: str = os.getenv("LOG_LEVEL", "INFO")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    dir: Optional[str] = os.getenv("LOG_DIR", None)
    rotation: str = os.getenv("LOG_ROTATION", "midnight")
    interval: int = int(os.getenv("LOG_INTERVAL", "1"))
    backup_count: int = int(os.getenv("LOG_BACKUP_COUNT", "7"))


@dataclass
class LearningSettings:
    """Learning process settings."""
    daily_new_goal: int = int(os.getenv("DAILY_NEW_GOAL", "20"))
    daily_review_goal: int = int(os.getenv("DAILY_REVIEW_GOAL", "50"))
    day_start_hour: int = int(os.getenv("DAY_START_HOUR", "0"))
    wrong_book_exit_level: int = int(os.getenv("WRONG_BOOK_EXIT_LEVEL", "3"))
    max_level: int = MAX_LEVEL
    review_intervals: dict[int, int] = field(default_factory=lambda: dict(REVIEW_INTERVALS))


@dataclass
class AchievementSettings:
    """Achievement engine settings."""
    next_achievement_order: list[str] = field(
        default_factory=lambda: [
            "first_word",
            "words_50",
            "words_100",
            "streak_3",
            "streak_7",
            "mastered_50",
            "accuracy_80",
        ]
    )


@dataclass
class MonitoringSettings:
    """Prometheus exporter settings."""
    enabled: bool = os.getenv("MONITORING_ENABLED", "false").lower() == "true"
    port: int = int(os.getenv("MONITORING_PORT", "9090"))


def get_database_settings() -> DatabaseSettings:
    """Get database settings."""
    return DatabaseSettings()


def get_logging_settings() -> LoggingSettings:
    """Get logging settings."""
    return LoggingSettings()


def get_learning_settings() -> LearningSettings:
    """Get learning settings."""
    return LearningSettings()


def get_achievement_settings() -> AchievementSettings:
    """Get achievement settings."""
    return AchievementSettings()


def get_monitoring_settings() -> MonitoringSettings:
    """Get monitoring settings."""
    return MonitoringSettings()


@dataclass
class Settings:
    """Main settings class that combines all configuration settings."""
    database: DatabaseSettings = field(default_factory=get_database_settings)
    logging: LoggingSettings = field(default_factory=get_logging_settings)
    learning: LearningSettings = field(default_factory=get_learning_settings)
    achievements: AchievementSettings = field(default_factory=get_achievement_settings)
    monitoring: MonitoringSettings = field(default_factory=get_monitoring_settings)

    def validate(self) -> None:
        """Validate settings and raise ValueError if invalid."""
        if self.learning.daily_new_goal < 1:
            raise ValueError("DAILY_NEW_GOAL must be positive")

        if self.learning.daily_review_goal < 1:
            raise ValueError("DAILY_REVIEW_GOAL must be positive")

        if not 0 <= self.learning.day_start_hour <= 23:
            raise ValueError("DAY_START_HOUR must be between 0 and 23")

        if not 1 <= self.learning.wrong_book_exit_level <= self.learning.max_level:
            raise ValueError("WRONG_BOOK_EXIT_LEVEL must be between 1 and the maximum level")

        missing = [
            level for level in range(1, self.learning.max_level + 1)
            if level not in self.learning.review_intervals
        ]
        if missing:
            raise ValueError(f"Review interval missing for levels {missing}")

        if any(days < 1 for days in self.learning.review_intervals.values()):
            raise ValueError("Review intervals must be at least one day")


# Create global settings instance
settings = Settings()
settings.validate()
