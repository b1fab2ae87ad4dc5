"""Transcription through a locally hosted Whisper inference server."""

import logging

import httpx
from pydantic import ValidationError

from speech_coach.domain.models import AudioClip, LocalServerResponse
from speech_coach.exceptions import MalformedResponseError, ProviderUnavailable

from .http_utils import ClientFactory, read_json, request_error
from .interfaces import TranscriptionClient

logger = logging.getLogger(__name__)


class LocalWhisperTranscriber(TranscriptionClient):
    """Handles transcription using a Whisper server running on the user's machine."""

    def __init__(
        self,
        provider_id: str,
        base_url: str,
        model: str = "whisper",
        timeout_seconds: float | None = None,
        client_factory: ClientFactory = httpx.AsyncClient,
    ):
        self._provider_id = provider_id
        self._url = f"{base_url.rstrip('/')}/transcribe/{model}"
        self._timeout = timeout_seconds
        self._client_factory = client_factory

    async def transcribe(self, clip: AudioClip) -> LocalServerResponse:
        """Uploads the clip as multipart form data and returns the server reply."""
        files = {"audio": ("audio", clip.data, clip.mime_type)}
        try:
            async with self._client_factory(timeout=self._timeout) as client:
                response = await client.post(self._url, files=files)
        except httpx.HTTPError as e:
            raise request_error(self._provider_id, "request", e) from e

        body = read_json(self._provider_id, response)
        try:
            result = LocalServerResponse.model_validate(body)
        except ValidationError as e:
            raise MalformedResponseError(self._provider_id, str(e), e) from e

        if not result.success:
            raise ProviderUnavailable(self._provider_id, result.error or "unknown error")

        logger.info(
            "Local transcription received",
            extra={"provider_id": self._provider_id, "api": result.api},
        )
        return result
