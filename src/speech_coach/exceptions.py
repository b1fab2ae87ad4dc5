"""Custom exceptions for the speech-coach library."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from speech_coach.domain.models import TranscriptionAttempt


class ConfigurationError(Exception):
    """Raised when a provider is unknown or misconfigured."""

    def __init__(self, message: str):
        super().__init__(message)


class ProviderUnavailable(Exception):
    """Raised when a transcription provider call fails."""

    def __init__(self, provider_id: str, reason: str, cause: Exception | None = None):
        self.provider_id = provider_id
        self.reason = reason
        self.cause = cause
        super().__init__(f"[{provider_id}] {reason}")


class TimedOut(ProviderUnavailable):
    """Raised when a provider call or an async job runs out of time."""


class MalformedResponseError(ProviderUnavailable):
    """Raised when a provider reports success without a transcript."""


class AllProvidersFailed(Exception):
    """Raised when every registered provider failed in sequential mode."""

    def __init__(self, attempts: list[TranscriptionAttempt]):
        self.attempts = attempts
        lines = [
            f"- {a.provider_id}: {a.error_type}: {a.error}" for a in attempts
        ]
        summary = "\n".join(lines) if lines else "- no providers registered"
        super().__init__(
            f"All {len(attempts)} transcription providers failed:\n{summary}"
        )

    @property
    def reasons(self) -> list[str]:
        return [a.error or "" for a in self.attempts]


class FeedbackServiceError(Exception):
    """Raised when the feedback LLM call fails."""

    def __init__(self, message: str, cause: Exception | None = None):
        self.cause = cause
        super().__init__(message)
