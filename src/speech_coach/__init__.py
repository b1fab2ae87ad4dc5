from speech_coach.config import AppConfig, load_config
from speech_coach.dependencies import build_handler, build_registry
from speech_coach.domain import (
    AudioClip,
    DerivedMetrics,
    ProviderDescriptor,
    SpeakerPreferences,
    SpeechReport,
    TranscriptionAttempt,
    TranscriptionResult,
)
from speech_coach.exceptions import (
    AllProvidersFailed,
    ConfigurationError,
    FeedbackServiceError,
    MalformedResponseError,
    ProviderUnavailable,
    TimedOut,
)
from speech_coach.handlers import SpeechAnalysisHandler
from speech_coach.logging import setup_logging

__all__ = [
    "AllProvidersFailed",
    "AppConfig",
    "AudioClip",
    "ConfigurationError",
    "DerivedMetrics",
    "FeedbackServiceError",
    "MalformedResponseError",
    "ProviderDescriptor",
    "ProviderUnavailable",
    "SpeakerPreferences",
    "SpeechAnalysisHandler",
    "SpeechReport",
    "TimedOut",
    "TranscriptionAttempt",
    "TranscriptionResult",
    "build_handler",
    "build_registry",
    "load_config",
    "setup_logging",
]
