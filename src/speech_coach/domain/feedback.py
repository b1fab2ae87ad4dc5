"""Rule-based coaching feedback used when no LLM is available."""

from speech_coach.domain.models import (
    DerivedMetrics,
    SpeakerPreferences,
    SpeechFeedback,
    TranscriptionResult,
)

IDEAL_PACE_WPM = (120, 180)
HEDGING_PHRASES = ("i think", "maybe", "probably")
MAX_SUGGESTIONS = 3
MAX_RECOMMENDATIONS = 6
DEFAULT_TONE_PREFERENCE = "professional"

_TONES = {
    "POSITIVE": "confident and positive",
    "NEGATIVE": "concerned or hesitant",
}


class HeuristicFeedbackBuilder:
    """Scores a recording from its metrics without calling an LLM."""

    def build(
        self,
        result: TranscriptionResult,
        metrics: DerivedMetrics,
        preferences: SpeakerPreferences | None = None,
    ) -> SpeechFeedback:
        """
        Builds feedback from the transcript and its metrics.

        Preferences add goal and audience recommendations, tone guidance and
        strengths tailored to the speaker.
        """
        clarity = round(result.confidence * 100) if result.confidence else 75
        pace = self._pace_score(metrics.words_per_minute)
        fillers = max(0, round(100 - metrics.filler_percentage * 5))
        overall = round((clarity + pace + fillers) / 3)
        tone = _TONES.get(result.sentiment.label, "neutral and conversational")

        suggestions = self._suggestions(result.text, metrics)
        if preferences is not None:
            suggestions += self._recommendations(preferences)

        return SpeechFeedback(
            overall_score=overall,
            clarity_score=clarity,
            pace_score=pace,
            filler_score=fillers,
            pace_assessment=self._pace_assessment(metrics.words_per_minute),
            tone=tone,
            tone_guidance=self._tone_guidance(preferences, tone) if preferences else "",
            suggestions=suggestions[:MAX_RECOMMENDATIONS],
            strengths=self._strengths(result.text, clarity, pace, metrics, preferences),
            priority_areas=self._priority_areas(clarity, pace, metrics),
        )

    def _pace_score(self, wpm: float) -> int:
        low, high = IDEAL_PACE_WPM
        if wpm > high:
            return 60
        if wpm < low:
            return 65
        return 85

    def _pace_assessment(self, wpm: float) -> str:
        low, high = IDEAL_PACE_WPM
        if wpm > high:
            return "Too fast"
        if wpm < low:
            return "Slow"
        return "Natural pace"

    def _suggestions(self, text: str, metrics: DerivedMetrics) -> list[str]:
        lowered = text.lower()
        suggestions: list[str] = []

        if metrics.filler_count > 3:
            suggestions.append(
                'Practice pausing instead of using filler words like "um" and "uh"'
            )
        elif metrics.filler_count > 0:
            suggestions.append("Try to minimize filler words for clearer communication")

        low, high = IDEAL_PACE_WPM
        if metrics.words_per_minute > high:
            suggestions.append(
                "Slow down your speaking pace to improve clarity and comprehension"
            )
        elif metrics.words_per_minute < low:
            suggestions.append(
                "Consider increasing your speaking pace to maintain engagement"
            )

        if any(phrase in lowered for phrase in HEDGING_PHRASES):
            suggestions.append("Use more confident language to strengthen your message")

        if not any(mark in text for mark in ".!?"):
            suggestions.append("Structure your speech with clear sentences and pauses")

        return suggestions[:MAX_SUGGESTIONS]

    def _recommendations(self, preferences: SpeakerPreferences) -> list[str]:
        goal = (preferences.speaking_goal or "").lower()
        audience = (preferences.target_audience or "").lower()
        recommendations: list[str] = []

        if "presentation" in goal:
            recommendations.append(
                "Practice your presentation structure. Use clear transitions between sections."
            )
        if "business" in audience:
            recommendations.append(
                "Use professional language and maintain confident delivery for business audiences."
            )
        if (preferences.confidence_level or "").lower() == "low":
            recommendations.append(
                "Build confidence through regular practice. Start with shorter speeches "
                "and gradually increase length."
            )
        return recommendations

    def _tone_guidance(self, preferences: SpeakerPreferences, tone: str) -> str:
        preferred = (preferences.tone_preference or DEFAULT_TONE_PREFERENCE).lower()

        if preferred == "conversational" and "confident" in tone:
            return "Your current tone aligns well with your conversational preference."
        if preferred == "professional" and "neutral" in tone:
            return (
                "Consider adding more authority and confidence to match your "
                "professional tone preference."
            )
        if preferred == "enthusiastic" and "positive" not in tone:
            return "Try to inject more energy and enthusiasm into your delivery."
        return "Continue developing your natural speaking style."

    def _strengths(
        self,
        text: str,
        clarity: int,
        pace: int,
        metrics: DerivedMetrics,
        preferences: SpeakerPreferences | None,
    ) -> list[str]:
        strengths: list[str] = []
        if clarity > 80:
            strengths.append("Excellent clarity and articulation")
        elif clarity > 70:
            strengths.append("Good overall clarity in delivery")
        if pace >= 85:
            strengths.append("Well-controlled speaking pace")
        if metrics.filler_count == 0 and metrics.word_count > 0:
            strengths.append("Fluent delivery without filler words")
        if len(text) > 50:
            strengths.append("Comprehensive coverage of the topic")

        native = (preferences.native_language or "") if preferences else ""
        if native and native.lower() != "english":
            strengths.append("Good command of English as a second language")

        if not strengths:
            strengths.append("Willingness to practice and improve")
        return strengths

    def _priority_areas(
        self, clarity: int, pace: int, metrics: DerivedMetrics
    ) -> list[str]:
        areas: list[str] = []
        if metrics.filler_count > 3:
            areas.append("Reducing filler words")
        if pace < 70:
            areas.append("Speaking pace")
        if clarity < 80:
            areas.append("Articulation and clarity")
        return areas
