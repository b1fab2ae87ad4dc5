"""Handler exports."""

from .speech_analysis_handler import SpeechAnalysisHandler

__all__ = ["SpeechAnalysisHandler"]
