import pytest

from speech_coach.domain import ResultNormalizer
from speech_coach.domain.models import (
    AssemblyAIResponse,
    HuggingFaceResponse,
    JobStatus,
    LocalServerResponse,
)
from speech_coach.exceptions import MalformedResponseError, ProviderUnavailable

ASSEMBLYAI_PAYLOAD = {
    "id": "abc",
    "status": "completed",
    "text": " Hello there. ",
    "confidence": 0.93,
    "audio_duration": 12.5,
    "summary": "- greeting",
    "sentiment_analysis_results": [
        {"text": "Hello there.", "sentiment": "POSITIVE", "confidence": 0.8}
    ],
    "entities": [{"entity_type": "person_name", "text": "Ann", "start": 0, "end": 300}],
    "auto_highlights_result": {
        "status": "success",
        "results": [{"text": "hello", "count": 2, "rank": 0.5, "timestamps": []}],
    },
    "utterances": [{"speaker": "A", "text": "Hello there.", "confidence": 0.9, "start": 0, "end": 900}],
    "words": [{"text": "Hello", "start": 0, "end": 400, "confidence": 0.99}],
    "language_model": "assemblyai_default",
}


def test_assemblyai_payload_is_fully_mapped():
    result = ResultNormalizer().normalize(
        "assemblyai", AssemblyAIResponse.model_validate(ASSEMBLYAI_PAYLOAD)
    )

    assert result.text == "Hello there."
    assert result.confidence == 0.93
    assert result.provider_id == "assemblyai"
    assert result.sentiment.label == "POSITIVE"
    assert result.entities[0].entity_type == "person_name"
    assert result.highlights[0].count == 2
    assert result.utterances[0].speaker == "A"
    assert result.words[0].text == "Hello"
    assert result.audio_duration_seconds == 12.5


def test_missing_optional_fields_get_neutral_defaults():
    raw = AssemblyAIResponse(status=JobStatus.COMPLETED, text="ok")
    result = ResultNormalizer().normalize("assemblyai", raw)

    assert result.sentiment.label == "NEUTRAL"
    assert result.entities == ()
    assert result.highlights == ()
    assert result.summary == ""
    assert result.confidence == 0.0


def test_missing_text_is_malformed():
    with pytest.raises(MalformedResponseError) as exc_info:
        ResultNormalizer().normalize("hf-whisper", HuggingFaceResponse())

    assert exc_info.value.provider_id == "hf-whisper"
    assert isinstance(exc_info.value, ProviderUnavailable)


def test_default_confidences():
    normalizer = ResultNormalizer()
    local = normalizer.normalize("local", LocalServerResponse(text="a"))
    cloud = normalizer.normalize("hf", HuggingFaceResponse(text="a"))

    assert local.confidence == 0.85
    assert cloud.confidence == 0.8


def test_normalize_is_idempotent():
    normalizer = ResultNormalizer()
    raw = AssemblyAIResponse.model_validate(ASSEMBLYAI_PAYLOAD)

    first = normalizer.normalize("assemblyai", raw)
    second = normalizer.normalize("assemblyai", raw)

    assert first == second
    assert first.model_dump_json() == second.model_dump_json()


def test_unknown_response_type_is_rejected():
    with pytest.raises(TypeError):
        ResultNormalizer().normalize("x", {"text": "hi"})
