"""Maps provider-specific responses onto the common transcript shape."""

from typing import Any

from speech_coach.domain.models import (
    AssemblyAIResponse,
    Entity,
    Highlight,
    HuggingFaceResponse,
    LocalServerResponse,
    RawProviderResponse,
    Sentiment,
    SpeakerUtterance,
    TranscriptionResult,
    Word,
)
from speech_coach.exceptions import MalformedResponseError

# Local and Hugging Face models do not report a confidence.
LOCAL_CONFIDENCE = 0.85
CLOUD_CONFIDENCE = 0.8


class ResultNormalizer:
    """Converts raw provider payloads into TranscriptionResult objects."""

    def normalize(
        self, provider_id: str, raw: RawProviderResponse
    ) -> TranscriptionResult:
        """
        Normalizes a provider response.

        Args:
            provider_id: Identifier of the provider that produced ``raw``.
            raw: One of the tagged provider response models.

        Returns:
            TranscriptionResult with defaults for missing optional fields.

        Raises:
            MalformedResponseError: If the response carries no transcript text.
            TypeError: If ``raw`` is not a known response type.
        """
        if isinstance(raw, LocalServerResponse):
            return self._from_local(provider_id, raw)
        if isinstance(raw, HuggingFaceResponse):
            return self._from_huggingface(provider_id, raw)
        if isinstance(raw, AssemblyAIResponse):
            return self._from_assemblyai(provider_id, raw)
        raise TypeError(f"Unsupported response type: {type(raw).__name__}")

    def _require_text(self, provider_id: str, text: str | None) -> str:
        if text is None:
            raise MalformedResponseError(provider_id, "response has no transcript text")
        return text.strip()

    def _from_local(
        self, provider_id: str, raw: LocalServerResponse
    ) -> TranscriptionResult:
        return TranscriptionResult(
            text=self._require_text(provider_id, raw.text),
            confidence=LOCAL_CONFIDENCE,
            provider_id=provider_id,
        )

    def _from_huggingface(
        self, provider_id: str, raw: HuggingFaceResponse
    ) -> TranscriptionResult:
        return TranscriptionResult(
            text=self._require_text(provider_id, raw.text),
            confidence=CLOUD_CONFIDENCE,
            provider_id=provider_id,
        )

    def _from_assemblyai(
        self, provider_id: str, raw: AssemblyAIResponse
    ) -> TranscriptionResult:
        text = self._require_text(provider_id, raw.text)
        sentiments = raw.sentiment_analysis_results or []
        highlights = (raw.auto_highlights_result or {}).get("results") or []

        return TranscriptionResult(
            text=text,
            confidence=raw.confidence or 0.0,
            provider_id=provider_id,
            summary=raw.summary or "",
            sentiment=self._sentiment(sentiments[0]) if sentiments else Sentiment(),
            entities=tuple(
                Entity(
                    entity_type=e.get("entity_type", "unknown"),
                    text=e.get("text", ""),
                    start=e.get("start"),
                    end=e.get("end"),
                )
                for e in raw.entities or []
            ),
            highlights=tuple(
                Highlight(
                    text=h.get("text", ""),
                    count=h.get("count", 1),
                    rank=h.get("rank", 0.0),
                )
                for h in highlights
            ),
            utterances=tuple(
                SpeakerUtterance(
                    speaker=str(u.get("speaker", "")),
                    text=u.get("text", ""),
                    confidence=u.get("confidence"),
                    start=u.get("start"),
                    end=u.get("end"),
                )
                for u in raw.utterances or []
            ),
            words=tuple(
                Word(
                    text=w.get("text", ""),
                    start=w.get("start"),
                    end=w.get("end"),
                    confidence=w.get("confidence"),
                )
                for w in raw.words or []
            ),
            audio_duration_seconds=raw.audio_duration,
        )

    def _sentiment(self, item: dict[str, Any]) -> Sentiment:
        return Sentiment(
            label=str(item.get("sentiment") or "NEUTRAL").upper(),
            confidence=item.get("confidence", 0.5),
            text=item.get("text", ""),
        )
