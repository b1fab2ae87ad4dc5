"""Derived speech metrics computed from transcript text."""

import re
from collections import Counter

from speech_coach.domain.models import DerivedMetrics, FillerLexicon

MIN_DURATION_SECONDS = 1.0

_PUNCTUATION = re.compile(r"[^\w\s']")
_SENTENCE_END = re.compile(r"[.!?]+")


def tokenize(text: str) -> list[str]:
    """Lowercases text, strips punctuation except apostrophes and splits it."""
    cleaned = _PUNCTUATION.sub(" ", text.lower())
    return [token.strip("'") for token in cleaned.split() if token.strip("'")]


class MetricsCalculator:
    """Computes rate, filler and keyword metrics for a transcript."""

    def __init__(
        self,
        lexicon: FillerLexicon,
        max_filler_examples: int = 5,
        min_duration_seconds: float = MIN_DURATION_SECONDS,
        keyword_count: int = 5,
    ):
        self._lexicon = lexicon
        self._max_examples = max_filler_examples
        self._min_duration = min_duration_seconds
        self._keyword_count = keyword_count
        # Longest phrases first so "you know" wins over a single "you".
        self._phrases = sorted(
            {tuple(tokenize(entry)) for entry in lexicon.words if tokenize(entry)},
            key=len,
            reverse=True,
        )

    def calculate(self, text: str, duration_seconds: float | None) -> DerivedMetrics:
        """
        Computes metrics for a transcript.

        Args:
            text: The transcript text.
            duration_seconds: Wall-clock recording length. ``None`` or a
                non-positive value falls back to the minimum duration floor.

        Returns:
            DerivedMetrics for the transcript.
        """
        tokens = tokenize(text)
        word_count = len(tokens)
        duration = self._effective_duration(duration_seconds)
        fillers = self._find_fillers(tokens)

        return DerivedMetrics(
            word_count=word_count,
            words_per_minute=round(word_count / (duration / 60.0), 1),
            filler_count=len(fillers),
            filler_examples=tuple(fillers[: self._max_examples]),
            filler_percentage=(
                round(len(fillers) / word_count * 100, 1) if word_count else 0.0
            ),
            sentence_count=self._count_sentences(text),
            keywords=self._extract_keywords(tokens),
            duration_seconds=duration,
            lexicon_version=self._lexicon.version,
        )

    def _effective_duration(self, duration_seconds: float | None) -> float:
        if duration_seconds is None or duration_seconds <= 0:
            return self._min_duration
        return max(float(duration_seconds), self._min_duration)

    def _find_fillers(self, tokens: list[str]) -> list[str]:
        """Returns non-overlapping filler matches in transcript order."""
        found: list[str] = []
        i = 0
        while i < len(tokens):
            for phrase in self._phrases:
                if tuple(tokens[i : i + len(phrase)]) == phrase:
                    found.append(" ".join(phrase))
                    i += len(phrase)
                    break
            else:
                i += 1
        return found

    def _count_sentences(self, text: str) -> int:
        return len([s for s in _SENTENCE_END.split(text) if s.strip()])

    def _extract_keywords(self, tokens: list[str]) -> tuple[str, ...]:
        # Counter.most_common keeps first-seen order for equal counts.
        counts = Counter(t for t in tokens if len(t) > 3)
        return tuple(word for word, _ in counts.most_common(self._keyword_count))
