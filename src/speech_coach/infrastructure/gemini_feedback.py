"""Gemini implementation of the FeedbackService interface."""

import json
import logging

from google import genai

from speech_coach.domain.models import DerivedMetrics, SpeakerPreferences, SpeechFeedback
from speech_coach.exceptions import FeedbackServiceError

from .interfaces import FeedbackService

logger = logging.getLogger(__name__)


class GeminiFeedbackService(FeedbackService):
    """Feedback generation using Google Gemini."""

    def __init__(self, client: genai.Client, model_name: str, system_prompt: str):
        self._client = client
        self._model_name = model_name
        self._system_prompt = system_prompt

    async def generate(
        self,
        transcript: str,
        metrics: DerivedMetrics,
        preferences: SpeakerPreferences | None = None,
    ) -> SpeechFeedback:
        """
        Asks Gemini for structured coaching feedback.

        Args:
            transcript: The transcript text.
            metrics: Metrics derived from the transcript.
            preferences: The speaker's goals, audience and tone, if known.

        Returns:
            SpeechFeedback parsed from the model's JSON response.

        Raises:
            FeedbackServiceError: If the Gemini API call fails.
        """
        try:
            response = await self._client.aio.models.generate_content(
                model=self._model_name,
                contents=self._build_prompt(transcript, metrics, preferences),
                config={
                    "response_mime_type": "application/json",
                    "response_schema": SpeechFeedback,
                    "system_instruction": self._system_prompt,
                },
            )
            if not response.text:
                raise FeedbackServiceError("Gemini returned empty response")
            feedback = SpeechFeedback.model_validate_json(response.text)
            logger.info("LLM feedback generated", extra={"model": self._model_name})
            return feedback
        except FeedbackServiceError:
            raise
        except Exception as e:
            logger.exception("Gemini API call failed")
            raise FeedbackServiceError(f"Gemini feedback failed: {e}", cause=e) from e

    def _build_prompt(
        self,
        transcript: str,
        metrics: DerivedMetrics,
        preferences: SpeakerPreferences | None,
    ) -> str:
        stats = {
            "word_count": metrics.word_count,
            "words_per_minute": metrics.words_per_minute,
            "filler_count": metrics.filler_count,
            "filler_examples": list(metrics.filler_examples),
            "filler_percentage": metrics.filler_percentage,
            "duration_seconds": metrics.duration_seconds,
        }
        sections = [f"Speech metrics:\n{json.dumps(stats)}"]
        if preferences is not None:
            sections.append(
                f"Speaker preferences:\n{preferences.model_dump_json(exclude_none=True)}"
            )
        sections.append(f"Transcript:\n{transcript}")
        return "\n\n".join(sections)
