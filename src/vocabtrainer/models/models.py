"""Database models for the trainer."""
from sqlalchemy import Boolean, Column, Date, DateTime, Integer, String

from vocabtrainer.models.base import Base, TimestampMixin


class Word(Base, TimestampMixin):
    """Vocabulary catalog entry."""

    __tablename__ = "words"

    text = Column(String, primary_key=True)
    translation = Column(String, nullable=False, default="")
    phonetic = Column(String, nullable=True)


class WordProgressRecord(Base, TimestampMixin):
    """Learning progress of one vocabulary item."""

    __tablename__ = "word_progress"

    word_id = Column(String, primary_key=True)
    level = Column(Integer, default=0, nullable=False)  # 0 new, 1-4 learning, 5 mastered
    next_review = Column(Date, nullable=True)
    correct_count = Column(Integer, default=0, nullable=False)
    wrong_count = Column(Integer, default=0, nullable=False)
    last_studied = Column(DateTime(timezone=True), nullable=True)
    is_favorite = Column(Boolean, default=False, nullable=False)
    is_in_wrong_book = Column(Boolean, default=False, nullable=False)


class DailyStatsRecord(Base, TimestampMixin):
    """Process-wide study counters. Only the row with id 1 is used."""

    __tablename__ = "daily_stats"

    id = Column(Integer, primary_key=True)
    total_learned = Column(Integer, default=0, nullable=False)
    total_correct = Column(Integer, default=0, nullable=False)
    total_wrong = Column(Integer, default=0, nullable=False)
    today_learned = Column(Integer, default=0, nullable=False)
    today_reviewed = Column(Integer, default=0, nullable=False)
    streak = Column(Integer, default=0, nullable=False)
    last_study_date = Column(Date, nullable=True)


class WrongBookEntry(Base, TimestampMixin):
    """Membership of an item in the wrong book."""

    __tablename__ = "wrong_book"

    word_id = Column(String, primary_key=True)


class AchievementRecord(Base):
    """Unlocked achievement."""

    __tablename__ = "achievements"

    achievement_id = Column(String, primary_key=True)
    unlocked_at = Column(DateTime(timezone=True), nullable=False)


class StudyCalendarDay(Base):
    """Number of items first learned on a study day."""

    __tablename__ = "study_calendar"

    day = Column(Date, primary_key=True)
    count = Column(Integer, default=0, nullable=False)
