"""AssemblyAI implementation of the AsyncJobClient interface."""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from speech_coach.config import AssemblyAIConfig
from speech_coach.domain.models import AssemblyAIResponse, AudioClip, JobSnapshot
from speech_coach.exceptions import MalformedResponseError, ProviderUnavailable

from .http_utils import ClientFactory, read_json, request_error
from .interfaces import AsyncJobClient

logger = logging.getLogger(__name__)

MIN_AUDIO_BYTES = 1000
HTTP_TIMEOUT_SECONDS = 60.0


class AssemblyAITranscriber(AsyncJobClient):
    """Handles audio transcription using the AssemblyAI REST API."""

    def __init__(
        self,
        provider_id: str,
        config: AssemblyAIConfig,
        client_factory: ClientFactory = httpx.AsyncClient,
    ):
        self._provider_id = provider_id
        self._config = config
        self._base_url = config.base_url.rstrip("/")
        self._client_factory = client_factory

    async def submit(self, clip: AudioClip) -> str:
        """
        Uploads the audio and creates a transcript job.

        Returns:
            The transcript id to poll.
        """
        if clip.size < MIN_AUDIO_BYTES:
            raise ProviderUnavailable(
                self._provider_id,
                f"audio recording is too small or empty ({clip.size} bytes)",
            )

        async with self._client_factory(timeout=HTTP_TIMEOUT_SECONDS) as client:
            upload = await self._send(
                client,
                "POST",
                "/upload",
                content=clip.data,
                headers={"content-type": "application/octet-stream"},
            )
            upload_url = upload.get("upload_url")
            if not upload_url:
                raise MalformedResponseError(self._provider_id, "upload returned no upload_url")

            created = await self._send(
                client, "POST", "/transcript", json=self._transcript_request(upload_url)
            )

        job_id = created.get("id")
        if not job_id:
            raise MalformedResponseError(self._provider_id, "transcript request returned no id")

        logger.info(
            "AssemblyAI transcript submitted",
            extra={"provider_id": self._provider_id, "job_id": job_id, "audio_bytes": clip.size},
        )
        return job_id

    async def poll(self, job_id: str) -> JobSnapshot:
        async with self._client_factory(timeout=HTTP_TIMEOUT_SECONDS) as client:
            body = await self._send(client, "GET", f"/transcript/{job_id}")

        try:
            transcript = AssemblyAIResponse.model_validate(body)
        except ValidationError as e:
            raise MalformedResponseError(self._provider_id, str(e), e) from e

        return JobSnapshot(status=transcript.status, error=transcript.error, payload=transcript)

    def _transcript_request(self, audio_url: str) -> dict[str, Any]:
        config = self._config
        request: dict[str, Any] = {
            "audio_url": audio_url,
            "language_code": config.language_code,
            "punctuate": True,
            "format_text": True,
            "disfluencies": True,
            "speaker_labels": config.speaker_labels,
            "sentiment_analysis": config.sentiment_analysis,
            "entity_detection": config.entity_detection,
            "auto_highlights": config.auto_highlights,
        }
        if config.summarization:
            request.update(
                summarization=True,
                summary_model="informative",
                summary_type="bullets",
            )
        return request

    async def _send(
        self, client: httpx.AsyncClient, method: str, path: str, **kwargs: Any
    ) -> dict[str, Any]:
        headers = {"authorization": self._config.api_key, **kwargs.pop("headers", {})}
        try:
            response = await client.request(
                method, f"{self._base_url}{path}", headers=headers, **kwargs
            )
        except httpx.HTTPError as e:
            raise request_error(self._provider_id, f"{method} {path}", e) from e
        return read_json(self._provider_id, response)
