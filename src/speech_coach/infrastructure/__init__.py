"""Infrastructure layer exports."""

from .assemblyai_transcriber import AssemblyAITranscriber
from .gemini_feedback import GeminiFeedbackService
from .huggingface_transcriber import HuggingFaceTranscriber
from .local_whisper_transcriber import LocalWhisperTranscriber

__all__ = [
    "AssemblyAITranscriber",
    "GeminiFeedbackService",
    "HuggingFaceTranscriber",
    "LocalWhisperTranscriber",
]
