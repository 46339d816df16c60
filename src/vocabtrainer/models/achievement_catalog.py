"""Built-in achievement catalog, in display and evaluation order."""
from typing import Dict, Tuple

from vocabtrainer.models.achievement_models import (
    AchievementDefinition,
    AllOf,
    CounterThreshold,
    GoalReached,
    RatioThreshold,
    TimeWindow,
)


def _accuracy(target: int, min_answers: int) -> AllOf:
    return AllOf((
        RatioThreshold("accuracy", target),
        CounterThreshold("total_answers", min_answers),
    ))


ACHIEVEMENTS: Tuple[AchievementDefinition, ...] = (
    # Learning milestones
    AchievementDefinition("first_word", "Beginner", "Learn your first word", "🌱",
                          CounterThreshold("total_learned", 1)),
    AchievementDefinition("words_50", "Apprentice", "Learn 50 words", "📖",
                          CounterThreshold("total_learned", 50)),
    AchievementDefinition("words_100", "Vocabulary Rookie", "Learn 100 words", "📚",
                          CounterThreshold("total_learned", 100)),
    AchievementDefinition("words_500", "Word Enthusiast", "Learn 500 words", "🎓",
                          CounterThreshold("total_learned", 500)),
    AchievementDefinition("words_1000", "Word Expert", "Learn 1000 words", "🏅",
                          CounterThreshold("total_learned", 1000)),
    AchievementDefinition("words_2000", "Word Master", "Learn 2000 words", "👑",
                          CounterThreshold("total_learned", 2000)),
    AchievementDefinition("words_3500", "Word Champion", "Learn all 3500 words", "🏆",
                          CounterThreshold("total_learned", 3500)),

    # Streaks
    AchievementDefinition("streak_3", "Warming Up", "Study 3 days in a row", "🔥",
                          CounterThreshold("streak", 3)),
    AchievementDefinition("streak_7", "One Week Strong", "Study 7 days in a row", "💪",
                          CounterThreshold("streak", 7)),
    AchievementDefinition("streak_30", "Star of the Month", "Study 30 days in a row", "⭐",
                          CounterThreshold("streak", 30)),
    AchievementDefinition("streak_100", "Hundred Day Legend", "Study 100 days in a row", "🌟",
                          CounterThreshold("streak", 100)),
    AchievementDefinition("streak_365", "Year Round", "Study 365 days in a row", "💎",
                          CounterThreshold("streak", 365)),

    # Accuracy
    AchievementDefinition("accuracy_80", "Steady Hand", "Reach 80% accuracy over 50 answers", "🎯",
                          _accuracy(80, 50)),
    AchievementDefinition("accuracy_90", "Sharp Memory", "Reach 90% accuracy over 100 answers", "🎪",
                          _accuracy(90, 100)),
    AchievementDefinition("accuracy_95", "Photographic", "Reach 95% accuracy over 200 answers", "🧠",
                          _accuracy(95, 200)),

    # Mastery
    AchievementDefinition("mastered_50", "First Results", "Master 50 words", "✅",
                          CounterThreshold("mastered_count", 50)),
    AchievementDefinition("mastered_200", "Making Progress", "Master 200 words", "🌈",
                          CounterThreshold("mastered_count", 200)),
    AchievementDefinition("mastered_500", "Fluent", "Master 500 words", "🚀",
                          CounterThreshold("mastered_count", 500)),
    AchievementDefinition("mastered_1000", "Virtuoso", "Master 1000 words", "🎖️",
                          CounterThreshold("mastered_count", 1000)),

    # Special
    AchievementDefinition("daily_goal", "Goal Getter", "Complete the daily learning goal", "📅",
                          GoalReached("today_learned", "daily_goal")),
    AchievementDefinition("night_owl", "Night Owl", "Study after midnight", "🦉",
                          TimeWindow(0, 5)),
    AchievementDefinition("early_bird", "Early Bird", "Study before 6 in the morning", "🐦",
                          TimeWindow(5, 6)),
)

ACHIEVEMENTS_BY_ID: Dict[str, AchievementDefinition] = {a.id: a for a in ACHIEVEMENTS}
