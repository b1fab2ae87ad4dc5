"""Domain models for speech transcription and analysis."""

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field


class AudioClip(BaseModel, frozen=True):
    """A captured recording handed to the orchestrator."""

    data: bytes
    mime_type: str = "audio/webm"
    duration_seconds: float | None = None

    @property
    def size(self) -> int:
        return len(self.data)


class ProviderKind(str, Enum):
    """How a provider delivers its transcript."""

    SYNC = "sync"
    ASYNC_JOB = "async_job"


class ProviderDescriptor(BaseModel, frozen=True):
    """Static description of a registered transcription backend."""

    id: str
    label: str
    kind: ProviderKind = ProviderKind.SYNC
    priority: int = 0
    timeout_seconds: float = 30.0


class JobStatus(str, Enum):
    """Status values reported by an asynchronous job API."""

    QUEUED = "queued"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


class JobState(str, Enum):
    """Lifecycle of an asynchronous job as seen by the poller."""

    SUBMITTED = "submitted"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"
    TIMED_OUT = "timed_out"


class AsyncJob(BaseModel):
    """Polling state for one asynchronous transcription."""

    job_id: str
    provider_id: str
    state: JobState = JobState.SUBMITTED
    attempts: int = 0
    next_delay_seconds: float


# Raw provider payloads; unknown fields are ignored.


class LocalServerResponse(BaseModel, frozen=True):
    """Response of the locally hosted inference server."""

    kind: Literal["local"] = "local"
    success: bool = True
    text: str | None = None
    api: str | None = None
    error: str | None = None


class HuggingFaceResponse(BaseModel, frozen=True):
    """Response of a Hugging Face speech recognition model."""

    kind: Literal["huggingface"] = "huggingface"
    text: str | None = None


class AssemblyAIResponse(BaseModel, frozen=True):
    """Transcript resource returned by AssemblyAI."""

    kind: Literal["assemblyai"] = "assemblyai"
    id: str | None = None
    status: JobStatus = JobStatus.QUEUED
    text: str | None = None
    error: str | None = None
    confidence: float | None = None
    summary: str | None = None
    sentiment_analysis_results: list[dict[str, Any]] | None = None
    entities: list[dict[str, Any]] | None = None
    auto_highlights_result: dict[str, Any] | None = None
    utterances: list[dict[str, Any]] | None = None
    words: list[dict[str, Any]] | None = None
    audio_duration: float | None = None


RawProviderResponse = Annotated[
    Union[LocalServerResponse, HuggingFaceResponse, AssemblyAIResponse],
    Field(discriminator="kind"),
]


class JobSnapshot(BaseModel, frozen=True):
    """The outcome of a single poll of an asynchronous job."""

    status: JobStatus
    error: str | None = None
    payload: RawProviderResponse | None = None


class Sentiment(BaseModel, frozen=True):
    label: str = "NEUTRAL"
    confidence: float = 0.5
    text: str = ""


class Entity(BaseModel, frozen=True):
    entity_type: str
    text: str
    start: int | None = None
    end: int | None = None


class Highlight(BaseModel, frozen=True):
    text: str
    count: int = 1
    rank: float = 0.0


class SpeakerUtterance(BaseModel, frozen=True):
    speaker: str
    text: str
    confidence: float | None = None
    start: int | None = None
    end: int | None = None


class Word(BaseModel, frozen=True):
    text: str
    start: int | None = None
    end: int | None = None
    confidence: float | None = None


class TranscriptionResult(BaseModel, frozen=True):
    """Normalized transcript produced by any provider."""

    text: str
    confidence: float
    provider_id: str
    elapsed_ms: int = 0
    used_fallback: bool = False
    summary: str = ""
    sentiment: Sentiment = Sentiment()
    entities: tuple[Entity, ...] = ()
    highlights: tuple[Highlight, ...] = ()
    utterances: tuple[SpeakerUtterance, ...] = ()
    words: tuple[Word, ...] = ()
    audio_duration_seconds: float | None = None


class TranscriptionAttempt(BaseModel, frozen=True):
    """One provider invoked against one clip."""

    provider_id: str
    success: bool
    elapsed_ms: int
    result: TranscriptionResult | None = None
    error: str | None = None
    error_type: str | None = None

    @property
    def text(self) -> str | None:
        return self.result.text if self.result else None

    @property
    def confidence(self) -> float | None:
        return self.result.confidence if self.result else None


class FillerLexicon(BaseModel, frozen=True):
    """Versioned set of filler words and phrases."""

    version: str
    words: tuple[str, ...]


class DerivedMetrics(BaseModel, frozen=True):
    """Scalar speech metrics computed from a transcript."""

    word_count: int
    words_per_minute: float
    filler_count: int
    filler_examples: tuple[str, ...] = ()
    filler_percentage: float = 0.0
    sentence_count: int = 0
    keywords: tuple[str, ...] = ()
    duration_seconds: float
    lexicon_version: str


class SpeakerPreferences(BaseModel, frozen=True):
    """What the speaker is practising for; every field is optional."""

    speaking_goal: str | None = None
    target_audience: str | None = None
    confidence_level: str | None = None
    tone_preference: str | None = None
    native_language: str | None = None


class SpeechFeedback(BaseModel):
    """Coaching feedback for one recording."""

    overall_score: int = Field(ge=0, le=100)
    clarity_score: int = Field(ge=0, le=100)
    pace_score: int = Field(ge=0, le=100)
    filler_score: int = Field(ge=0, le=100)
    pace_assessment: str
    tone: str
    tone_guidance: str = ""
    suggestions: list[str] = []
    strengths: list[str] = []
    priority_areas: list[str] = []


class SpeechReport(BaseModel):
    """Transcript, metrics and feedback for one analyzed recording."""

    transcription: TranscriptionResult
    metrics: DerivedMetrics
    feedback: SpeechFeedback
    feedback_source: Literal["llm", "heuristic"]
