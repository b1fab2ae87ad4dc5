"""Abstract interface for feedback generation."""

from abc import ABC, abstractmethod

from speech_coach.domain.models import DerivedMetrics, SpeakerPreferences, SpeechFeedback


class FeedbackService(ABC):
    """Abstract base class for LLM feedback backends."""

    @abstractmethod
    async def generate(
        self,
        transcript: str,
        metrics: DerivedMetrics,
        preferences: SpeakerPreferences | None = None,
    ) -> SpeechFeedback:
        """
        Generates coaching feedback for a transcript.

        Args:
            transcript: The transcript text.
            metrics: Metrics derived from the transcript.
            preferences: The speaker's goals, audience and tone, if known.

        Returns:
            SpeechFeedback with scores and suggestions.

        Raises:
            FeedbackServiceError: If the LLM call fails.
        """
