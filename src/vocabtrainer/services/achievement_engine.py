"""Achievement evaluation over an aggregate snapshot."""
import logging
from datetime import datetime
from typing import List, Optional, Sequence

from vocabtrainer.config import AchievementSettings, LearningSettings, settings
from vocabtrainer.models.achievement_catalog import ACHIEVEMENTS
from vocabtrainer.models.achievement_models import (
    AchievementCount,
    AchievementDefinition,
    AchievementProgress,
    AchievementSnapshot,
    AchievementStatus,
    AllOf,
    Condition,
    CounterThreshold,
    GoalReached,
    RatioThreshold,
    TimeWindow,
)
from vocabtrainer.monitoring import achievements_unlocked, condition_errors
from vocabtrainer.services.statistics_service import StatisticsService, round_half_up
from vocabtrainer.storage.base import AchievementLedgerStore, NotificationSink

logger = logging.getLogger(__name__)


def evaluate_condition(condition: Condition, snapshot: AchievementSnapshot) -> bool:
    """Interpret a condition against a snapshot.

    Raises AttributeError for unknown snapshot fields, ValueError when a time
    window is evaluated without an hour and TypeError for unknown kinds.
    """
    if isinstance(condition, CounterThreshold):
        return getattr(snapshot, condition.counter) >= condition.target
    if isinstance(condition, RatioThreshold):
        return getattr(snapshot, condition.ratio) >= condition.target
    if isinstance(condition, GoalReached):
        return getattr(snapshot, condition.counter) >= getattr(snapshot, condition.goal)
    if isinstance(condition, TimeWindow):
        if snapshot.hour is None:
            raise ValueError("Snapshot has no evaluation hour")
        return condition.start_hour <= snapshot.hour < condition.end_hour
    if isinstance(condition, AllOf):
        return all(evaluate_condition(c, snapshot) for c in condition.conditions)
    raise TypeError(f"Unknown condition: {condition!r}")


class AchievementEngine:
    """Service unlocking achievements and reporting progress towards them."""

    def __init__(
        self,
        ledger: AchievementLedgerStore,
        statistics: StatisticsService,
        notifier: Optional[NotificationSink] = None,
        catalog: Sequence[AchievementDefinition] = ACHIEVEMENTS,
        learning_settings: Optional[LearningSettings] = None,
        achievement_settings: Optional[AchievementSettings] = None,
    ):
        """Initialize the engine with the ledger, the statistics and the catalog."""
        self.ledger = ledger
        self.statistics = statistics
        self.notifier = notifier
        self.catalog = tuple(catalog)
        self.learning = learning_settings or settings.learning
        self.settings = achievement_settings or settings.achievements

    def get_definition(self, achievement_id: str) -> Optional[AchievementDefinition]:
        """Find a definition by id."""
        for definition in self.catalog:
            if definition.id == achievement_id:
                return definition
        return None

    def build_snapshot(self, now: Optional[datetime] = None) -> AchievementSnapshot:
        """Collect the values conditions are evaluated against.

        ``now`` supplies the hour for time-window conditions; without it
        those conditions are not satisfied.
        """
        stats = self.statistics.tracker.current()
        counts = self.statistics.vocabulary_counts()
        return AchievementSnapshot(
            total_learned=stats.total_learned,
            total_correct=stats.total_correct,
            total_wrong=stats.total_wrong,
            today_learned=stats.today_learned,
            today_reviewed=stats.today_reviewed,
            streak=stats.streak,
            new_count=counts.new,
            learning_count=counts.learning,
            mastered_count=counts.mastered,
            accuracy=self.statistics.accuracy(),
            total_answers=stats.total_answers,
            daily_goal=self.learning.daily_new_goal,
            hour=now.hour if now is not None else None,
        )

    def evaluate(self, now: datetime) -> List[AchievementDefinition]:
        """Unlock every satisfied achievement and return the new ones in catalog order."""
        snapshot = self.build_snapshot(now)
        unlocked = self.ledger.all()
        newly_unlocked = []

        for definition in self.catalog:
            if definition.id in unlocked:
                continue
            if not self._is_satisfied(definition, snapshot):
                continue
            if not self.ledger.try_insert(definition.id, now):
                continue

            newly_unlocked.append(definition)
            achievements_unlocked.labels(achievement_id=definition.id).inc()
            logger.info("Achievement unlocked: %s", definition.id)
            self._notify(definition, now)

        return newly_unlocked

    def _is_satisfied(self, definition: AchievementDefinition, snapshot: AchievementSnapshot) -> bool:
        try:
            return bool(evaluate_condition(definition.condition, snapshot))
        except Exception as e:
            logger.debug("Condition of %s not evaluable: %s", definition.id, e)
            condition_errors.labels(achievement_id=definition.id).inc()
            return False

    def _notify(self, definition: AchievementDefinition, unlocked_at: datetime) -> None:
        if self.notifier is None:
            return
        try:
            self.notifier.notify(definition, unlocked_at)
        except Exception as e:
            logger.error("Failed to publish unlock of %s: %s", definition.id, e)

    def all_achievements(self) -> List[AchievementStatus]:
        """Return every achievement with its unlock state."""
        unlocked = self.ledger.all()
        return [
            AchievementStatus(
                definition=definition,
                unlocked=definition.id in unlocked,
                unlocked_at=unlocked.get(definition.id),
            )
            for definition in self.catalog
        ]

    def achievement_count(self) -> AchievementCount:
        """Return how many catalog achievements are unlocked."""
        unlocked = self.ledger.all()
        return AchievementCount(
            unlocked=sum(1 for definition in self.catalog if definition.id in unlocked),
            total=len(self.catalog),
        )

    def next_achievement(self) -> Optional[AchievementDefinition]:
        """Return the first locked achievement of the suggestion order."""
        unlocked = self.ledger.all()
        for achievement_id in self.settings.next_achievement_order:
            definition = self.get_definition(achievement_id)
            if definition is not None and achievement_id not in unlocked:
                return definition
        return None

    def achievement_progress(self, achievement_id: str) -> Optional[AchievementProgress]:
        """Return progress towards a counter threshold achievement, None for other kinds."""
        definition = self.get_definition(achievement_id)
        if definition is None or not isinstance(definition.condition, CounterThreshold):
            return None

        snapshot = self.build_snapshot()
        current = getattr(snapshot, definition.condition.counter)
        target = definition.condition.target
        return AchievementProgress(
            current=current,
            target=target,
            percent=min(100, round_half_up(current / target * 100)),
        )
