"""Service for formatting and delivering learner notifications."""
import logging
from datetime import datetime
from typing import Callable, List, Optional

from vocabtrainer.models.achievement_models import AchievementDefinition
from vocabtrainer.models.progress_models import ProgressOverview
from vocabtrainer.storage.base import NotificationSink

logger = logging.getLogger(__name__)

REVIEW_PREVIEW_SIZE = 5


class NotificationService(NotificationSink):
    """Formats notification messages and hands them to a delivery callback."""

    def __init__(self, deliver: Optional[Callable[[str], None]] = None):
        """Initialize the service with an optional delivery callback."""
        self.deliver = deliver

    def notify(self, definition: AchievementDefinition, unlocked_at: datetime) -> None:
        """Publish an achievement unlock."""
        message = self.get_achievement_message(definition)
        logger.info("Achievement %s unlocked at %s", definition.id, unlocked_at.isoformat())
        self.send(message)

    def send(self, message: str) -> None:
        """Deliver a message through the callback, if any."""
        if self.deliver is not None:
            self.deliver(message)

    def get_achievement_message(self, definition: AchievementDefinition) -> str:
        """Generate an achievement unlocked message."""
        return (
            f"🎉 Achievement Unlocked!\n\n"
            f"{definition.icon} {definition.name}\n"
            f"{definition.description}"
        )

    def get_daily_reminder_message(self, overview: ProgressOverview) -> str:
        """Generate a daily reminder message from a progress overview."""
        progress = (
            overview.mastered_words / overview.total_words * 100
            if overview.total_words > 0 else 0
        )

        message = (
            f"📊 Your Learning Progress:\n"
            f"• Total Words: {overview.total_words}\n"
            f"• Mastered Words: {overview.mastered_words}\n"
            f"• Progress: {progress:.1f}%\n"
            f"• Words for Review: {overview.review_due}\n"
            f"• Accuracy: {overview.accuracy}%\n"
            f"• Streak: {overview.streak} days\n\n"
            f"🎯 Today's Goals:\n"
            f"• New Words: {overview.today_learned}/{overview.daily_new_goal}\n"
            f"• Reviews: {overview.today_reviewed}/{overview.daily_review_goal}\n"
        )

        if overview.today_learned >= overview.daily_new_goal:
            message += "\n✅ Daily goal reached, great job!"
        else:
            message += "\n💡 Ready to learn some new words?"

        return message

    def get_review_reminder_message(self, due_words: List[str]) -> Optional[str]:
        """Generate a review reminder message, None when nothing is due."""
        if not due_words:
            return None

        message = (
            f"⏰ Time for Review!\n\n"
            f"You have {len(due_words)} words to review:\n"
        )

        for word in due_words[:REVIEW_PREVIEW_SIZE]:
            message += f"• {word}\n"

        if len(due_words) > REVIEW_PREVIEW_SIZE:
            message += f"... and {len(due_words) - REVIEW_PREVIEW_SIZE} more\n"

        return message
