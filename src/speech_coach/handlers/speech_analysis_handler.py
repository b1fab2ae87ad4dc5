"""Handler for transcribing and analyzing recordings."""

import logging

from speech_coach.domain import (
    AudioClip,
    DerivedMetrics,
    FallbackSequencer,
    HeuristicFeedbackBuilder,
    MetricsCalculator,
    SpeakerPreferences,
    SpeechReport,
    TranscriptionAttempt,
    TranscriptionResult,
    extractive_summary,
)
from speech_coach.exceptions import FeedbackServiceError
from speech_coach.infrastructure.interfaces import FeedbackService

logger = logging.getLogger(__name__)


class SpeechAnalysisHandler:
    """Orchestrates transcription, metrics and feedback for one recording."""

    def __init__(
        self,
        sequencer: FallbackSequencer,
        metrics_calculator: MetricsCalculator,
        heuristic_feedback: HeuristicFeedbackBuilder,
        feedback_service: FeedbackService | None = None,
    ):
        self._sequencer = sequencer
        self._metrics = metrics_calculator
        self._heuristic_feedback = heuristic_feedback
        self._feedback_service = feedback_service

    async def transcribe(self, clip: AudioClip) -> TranscriptionResult:
        """
        Transcribes a clip with provider fallback.

        A transcript without a provider summary gets a local extractive one.

        Raises:
            AllProvidersFailed: If no provider produced a transcript.
        """
        result = await self._sequencer.transcribe(clip)
        if result.summary:
            return result
        return result.model_copy(update={"summary": extractive_summary(result.text)})

    async def transcribe_batch(self, clip: AudioClip) -> dict[str, TranscriptionAttempt]:
        """Transcribes a clip with every provider for comparison."""
        return await self._sequencer.transcribe_batch(clip)

    def compute_metrics(
        self, result: TranscriptionResult, clip: AudioClip
    ) -> DerivedMetrics:
        """Uses the clip duration, or the provider-reported one when unknown."""
        duration = clip.duration_seconds or result.audio_duration_seconds
        return self._metrics.calculate(result.text, duration)

    async def analyze(
        self, clip: AudioClip, preferences: SpeakerPreferences | None = None
    ) -> SpeechReport:
        """
        Produces a full report for a recording.

        Args:
            clip: The recording to analyze.
            preferences: The speaker's goals, audience and tone, used to
                tailor the feedback.

        Returns:
            SpeechReport with the transcript, metrics and feedback.

        Raises:
            AllProvidersFailed: If no provider produced a transcript.
        """
        logger.info(
            "Analyzing recording",
            extra={"audio_bytes": clip.size, "duration_seconds": clip.duration_seconds},
        )

        result = await self.transcribe(clip)
        metrics = self.compute_metrics(result, clip)

        if self._feedback_service is not None:
            try:
                feedback = await self._feedback_service.generate(
                    result.text, metrics, preferences=preferences
                )
                return SpeechReport(
                    transcription=result,
                    metrics=metrics,
                    feedback=feedback,
                    feedback_source="llm",
                )
            except FeedbackServiceError:
                logger.warning(
                    "LLM feedback failed, using heuristic feedback",
                    extra={"provider_id": result.provider_id},
                )

        return SpeechReport(
            transcription=result,
            metrics=metrics,
            feedback=self._heuristic_feedback.build(result, metrics, preferences),
            feedback_source="heuristic",
        )
