"""Infrastructure interface exports."""

from .feedback_service import FeedbackService
from .transcription_service import AsyncJobClient, TranscriptionClient

__all__ = ["AsyncJobClient", "FeedbackService", "TranscriptionClient"]
