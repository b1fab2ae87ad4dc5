"""Builds the object graph of the speech-coach library from configuration."""

import logging

import httpx
from google import genai

from speech_coach.config import AppConfig
from speech_coach.domain import (
    AsyncJobPoller,
    FallbackSequencer,
    FillerLexicon,
    HeuristicFeedbackBuilder,
    MetricsCalculator,
    ProviderDescriptor,
    ProviderKind,
    ProviderRegistry,
    ResultNormalizer,
)
from speech_coach.domain.registry import ProviderClient
from speech_coach.handlers import SpeechAnalysisHandler
from speech_coach.infrastructure import (
    AssemblyAITranscriber,
    GeminiFeedbackService,
    HuggingFaceTranscriber,
    LocalWhisperTranscriber,
)
from speech_coach.infrastructure.http_utils import ClientFactory
from speech_coach.infrastructure.interfaces import FeedbackService
from speech_coach.logging import setup_logging

logger = logging.getLogger(__name__)

LOCAL_WHISPER = "local-whisper"
HF_WHISPER = "hf-whisper"
HF_WAV2VEC2 = "hf-wav2vec2"
HF_XLSR = "hf-xlsr"
ASSEMBLYAI = "assemblyai"


def build_registry(
    config: AppConfig, client_factory: ClientFactory = httpx.AsyncClient
) -> ProviderRegistry:
    """
    Registers the configured providers in fallback order.

    The local model is only registered when its URL is set and AssemblyAI
    only when an API key is set.
    """
    entries: list[tuple[ProviderDescriptor, ProviderClient]] = []

    local = config.local_whisper
    if local.base_url:
        entries.append(
            (
                ProviderDescriptor(
                    id=LOCAL_WHISPER,
                    label="Local Whisper",
                    priority=0,
                    timeout_seconds=local.timeout_seconds,
                ),
                LocalWhisperTranscriber(
                    LOCAL_WHISPER,
                    local.base_url,
                    local.model,
                    local.timeout_seconds,
                    client_factory,
                ),
            )
        )

    hf = config.huggingface
    for priority, (provider_id, label, model, timeout) in enumerate(
        [
            (HF_WHISPER, "Whisper (Hugging Face)", hf.whisper_model, hf.whisper_timeout_seconds),
            (HF_WAV2VEC2, "Wav2Vec2 (Hugging Face)", hf.wav2vec2_model, hf.timeout_seconds),
            (HF_XLSR, "XLSR-53 English (Hugging Face)", hf.xlsr_model, hf.timeout_seconds),
        ],
        start=1,
    ):
        entries.append(
            (
                ProviderDescriptor(
                    id=provider_id, label=label, priority=priority, timeout_seconds=timeout
                ),
                HuggingFaceTranscriber(
                    provider_id, model, hf.base_url, hf.api_token, timeout, client_factory
                ),
            )
        )

    if config.assemblyai.api_key:
        entries.append(
            (
                ProviderDescriptor(
                    id=ASSEMBLYAI,
                    label="AssemblyAI",
                    kind=ProviderKind.ASYNC_JOB,
                    priority=4,
                    timeout_seconds=config.assemblyai.timeout_seconds,
                ),
                AssemblyAITranscriber(ASSEMBLYAI, config.assemblyai, client_factory),
            )
        )

    registry = ProviderRegistry(entries)
    logger.info(
        "Provider registry built",
        extra={"providers": [d.id for d in registry.list_providers()]},
    )
    return registry


def build_feedback_service(config: AppConfig) -> FeedbackService | None:
    """Returns the Gemini feedback service, or None when no API key is set."""
    if not config.gemini.api_key:
        return None
    system_prompt = config.gemini.system_prompt_path.read_text(encoding="utf-8")
    client = genai.Client(api_key=config.gemini.api_key)
    return GeminiFeedbackService(client, config.gemini.model_name, system_prompt)


def build_handler(
    config: AppConfig,
    client_factory: ClientFactory = httpx.AsyncClient,
    configure_logging: bool = True,
) -> SpeechAnalysisHandler:
    """Returns a fully wired speech analysis handler."""
    if configure_logging:
        setup_logging(config.log_level)

    sequencer = FallbackSequencer(
        build_registry(config, client_factory),
        ResultNormalizer(),
        AsyncJobPoller(config.assemblyai.polling),
    )
    metrics = MetricsCalculator(
        FillerLexicon(
            version=config.metrics.lexicon_version,
            words=config.metrics.filler_words,
        ),
        max_filler_examples=config.metrics.max_filler_examples,
        min_duration_seconds=config.metrics.min_duration_seconds,
    )
    return SpeechAnalysisHandler(
        sequencer,
        metrics,
        HeuristicFeedbackBuilder(),
        build_feedback_service(config),
    )
