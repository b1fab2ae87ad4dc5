"""Hugging Face inference API implementation of TranscriptionClient."""

import logging

import httpx
from pydantic import ValidationError

from speech_coach.domain.models import AudioClip, HuggingFaceResponse
from speech_coach.exceptions import MalformedResponseError, ProviderUnavailable

from .http_utils import ClientFactory, read_json, request_error
from .interfaces import TranscriptionClient

logger = logging.getLogger(__name__)


class HuggingFaceTranscriber(TranscriptionClient):
    """Handles transcription using a hosted Hugging Face speech model."""

    def __init__(
        self,
        provider_id: str,
        model: str,
        base_url: str = "https://api-inference.huggingface.co/models",
        api_token: str | None = None,
        timeout_seconds: float | None = None,
        client_factory: ClientFactory = httpx.AsyncClient,
    ):
        self._provider_id = provider_id
        self._model = model
        self._url = f"{base_url.rstrip('/')}/{model}"
        self._api_token = api_token
        self._timeout = timeout_seconds
        self._client_factory = client_factory

    async def transcribe(self, clip: AudioClip) -> HuggingFaceResponse:
        """
        Posts the raw audio to the model endpoint.

        The inference API answers ``{"error": ...}`` while a model is loading
        or rate limited; that is reported as a provider failure.
        """
        headers = {"Content-Type": clip.mime_type}
        if self._api_token:
            headers["Authorization"] = f"Bearer {self._api_token}"

        try:
            async with self._client_factory(timeout=self._timeout) as client:
                response = await client.post(self._url, content=clip.data, headers=headers)
        except httpx.HTTPError as e:
            raise request_error(self._provider_id, "request", e) from e

        body = read_json(self._provider_id, response)
        if body.get("error"):
            raise ProviderUnavailable(self._provider_id, str(body["error"]))

        try:
            result = HuggingFaceResponse.model_validate(body)
        except ValidationError as e:
            raise MalformedResponseError(self._provider_id, str(e), e) from e

        logger.info(
            "Hugging Face transcription received",
            extra={"provider_id": self._provider_id, "model": self._model},
        )
        return result
