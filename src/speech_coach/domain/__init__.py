"""Domain layer exports."""

from .feedback import HeuristicFeedbackBuilder
from .metrics import MetricsCalculator
from .models import (
    AudioClip,
    DerivedMetrics,
    FillerLexicon,
    ProviderDescriptor,
    ProviderKind,
    SpeakerPreferences,
    SpeechFeedback,
    SpeechReport,
    TranscriptionAttempt,
    TranscriptionResult,
)
from .normalizer import ResultNormalizer
from .poller import AsyncJobPoller
from .registry import ProviderRegistry
from .sequencer import FallbackSequencer
from .summary import extractive_summary

__all__ = [
    "AsyncJobPoller",
    "AudioClip",
    "DerivedMetrics",
    "FallbackSequencer",
    "FillerLexicon",
    "HeuristicFeedbackBuilder",
    "MetricsCalculator",
    "ProviderDescriptor",
    "ProviderKind",
    "ProviderRegistry",
    "ResultNormalizer",
    "SpeakerPreferences",
    "SpeechFeedback",
    "SpeechReport",
    "TranscriptionAttempt",
    "TranscriptionResult",
    "extractive_summary",
]
