"""Application configuration loaded from environment variables."""

import os
from pathlib import Path

from pydantic import BaseModel

DEFAULT_FILLER_WORDS = (
    "um",
    "uh",
    "ah",
    "like",
    "you know",
    "so",
    "well",
    "actually",
    "basically",
)

_PROMPTS_DIR = Path(__file__).parent / "prompts"


class PollingConfig(BaseModel, frozen=True):
    """Backoff schedule for asynchronous transcription jobs."""

    initial_delay_seconds: float = 2.0
    growth_factor: float = 1.2
    max_delay_seconds: float = 10.0
    max_attempts: int = 30


class LocalWhisperConfig(BaseModel, frozen=True):
    """Locally hosted Whisper inference server."""

    base_url: str | None = None
    model: str = "whisper"
    timeout_seconds: float = 30.0


class HuggingFaceConfig(BaseModel, frozen=True):
    """Hugging Face inference API configuration."""

    api_token: str | None = None
    base_url: str = "https://api-inference.huggingface.co/models"
    whisper_model: str = "openai/whisper-base"
    wav2vec2_model: str = "facebook/wav2vec2-base-960h"
    xlsr_model: str = "facebook/wav2vec2-large-xlsr-53-english"
    timeout_seconds: float = 30.0
    whisper_timeout_seconds: float = 60.0


class AssemblyAIConfig(BaseModel, frozen=True):
    """AssemblyAI API configuration."""

    api_key: str = ""
    base_url: str = "https://api.assemblyai.com/v2"
    timeout_seconds: float = 300.0
    language_code: str = "en_us"
    speaker_labels: bool = True
    sentiment_analysis: bool = True
    entity_detection: bool = True
    auto_highlights: bool = True
    summarization: bool = False
    polling: PollingConfig = PollingConfig()


class GeminiConfig(BaseModel, frozen=True):
    """Gemini feedback LLM configuration."""

    api_key: str = ""
    model_name: str = "gemini-2.5-flash-lite"
    system_prompt_path: Path = _PROMPTS_DIR / "feedback_system.txt"


class MetricsConfig(BaseModel, frozen=True):
    """Derived speech metric settings."""

    filler_words: tuple[str, ...] = DEFAULT_FILLER_WORDS
    lexicon_version: str = "2"
    max_filler_examples: int = 5
    min_duration_seconds: float = 1.0


class AppConfig(BaseModel, frozen=True):
    """Root application configuration."""

    log_level: str = "INFO"
    local_whisper: LocalWhisperConfig = LocalWhisperConfig()
    huggingface: HuggingFaceConfig = HuggingFaceConfig()
    assemblyai: AssemblyAIConfig = AssemblyAIConfig()
    gemini: GeminiConfig = GeminiConfig()
    metrics: MetricsConfig = MetricsConfig()


def _filler_words_from_env() -> tuple[str, ...]:
    raw = os.getenv("FILLER_WORDS")
    if not raw:
        return DEFAULT_FILLER_WORDS
    return tuple(w.strip().lower() for w in raw.split(",") if w.strip())


def load_config() -> AppConfig:
    """Loads configuration from environment variables."""
    return AppConfig(
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        local_whisper=LocalWhisperConfig(
            base_url=os.getenv("LOCAL_WHISPER_URL") or None,
            model=os.getenv("LOCAL_WHISPER_MODEL", "whisper"),
            timeout_seconds=float(os.getenv("LOCAL_WHISPER_TIMEOUT_SECONDS", "30")),
        ),
        huggingface=HuggingFaceConfig(
            api_token=os.getenv("HUGGINGFACE_API_TOKEN") or None,
            base_url=os.getenv(
                "HUGGINGFACE_BASE_URL", "https://api-inference.huggingface.co/models"
            ),
            whisper_model=os.getenv("HUGGINGFACE_WHISPER_MODEL", "openai/whisper-base"),
            wav2vec2_model=os.getenv(
                "HUGGINGFACE_WAV2VEC2_MODEL", "facebook/wav2vec2-base-960h"
            ),
            xlsr_model=os.getenv(
                "HUGGINGFACE_XLSR_MODEL", "facebook/wav2vec2-large-xlsr-53-english"
            ),
            timeout_seconds=float(os.getenv("HUGGINGFACE_TIMEOUT_SECONDS", "30")),
            whisper_timeout_seconds=float(
                os.getenv("HUGGINGFACE_WHISPER_TIMEOUT_SECONDS", "60")
            ),
        ),
        assemblyai=AssemblyAIConfig(
            api_key=os.getenv("ASSEMBLYAI_API_KEY", ""),
            base_url=os.getenv("ASSEMBLYAI_BASE_URL", "https://api.assemblyai.com/v2"),
            timeout_seconds=float(os.getenv("ASSEMBLYAI_TIMEOUT_SECONDS", "300")),
            polling=PollingConfig(
                initial_delay_seconds=float(
                    os.getenv("ASSEMBLYAI_POLL_INITIAL_DELAY_SECONDS", "2.0")
                ),
                growth_factor=float(os.getenv("ASSEMBLYAI_POLL_GROWTH_FACTOR", "1.2")),
                max_delay_seconds=float(
                    os.getenv("ASSEMBLYAI_POLL_MAX_DELAY_SECONDS", "10.0")
                ),
                max_attempts=int(os.getenv("ASSEMBLYAI_POLL_MAX_ATTEMPTS", "30")),
            ),
        ),
        gemini=GeminiConfig(
            api_key=os.getenv("GEMINI_API_KEY", ""),
            model_name=os.getenv("GEMINI_MODEL", "gemini-2.5-flash-lite"),
        ),
        metrics=MetricsConfig(filler_words=_filler_words_from_env()),
    )
