"""Abstract interfaces for transcription provider clients."""

from abc import ABC, abstractmethod

from speech_coach.domain.models import AudioClip, JobSnapshot, RawProviderResponse


class TranscriptionClient(ABC):
    """A provider that returns the transcript in a single call."""

    @abstractmethod
    async def transcribe(self, clip: AudioClip) -> RawProviderResponse:
        """
        Transcribes an audio clip.

        Args:
            clip: The recording to transcribe.

        Returns:
            The provider's raw response model.

        Raises:
            ProviderUnavailable: If the provider call fails.
        """


class AsyncJobClient(ABC):
    """A provider that accepts a job and reports its result later."""

    @abstractmethod
    async def submit(self, clip: AudioClip) -> str:
        """
        Submits an audio clip for transcription.

        Returns:
            The provider-assigned job identifier.

        Raises:
            ProviderUnavailable: If the submission fails.
        """

    @abstractmethod
    async def poll(self, job_id: str) -> JobSnapshot:
        """
        Fetches the current status of a job.

        Raises:
            ProviderUnavailable: If the status request fails.
            MalformedResponseError: If the status payload cannot be parsed.
        """
