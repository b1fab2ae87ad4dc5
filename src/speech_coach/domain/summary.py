"""Local fallback summary for transcripts without a provider summary."""

import re

MIN_SENTENCE_CHARS = 10
MAX_SUMMARY_CHARS = 100

_SENTENCE_END = re.compile(r"[.!?]+")


def extractive_summary(text: str) -> str:
    """
    Returns the first sentence longer than ten characters.

    Falls back to the first hundred characters, with an ellipsis when the
    transcript is cut.
    """
    text = text.strip()
    for sentence in _SENTENCE_END.split(text):
        sentence = sentence.strip()
        if len(sentence) > MIN_SENTENCE_CHARS:
            return sentence
    if len(text) > MAX_SUMMARY_CHARS:
        return text[:MAX_SUMMARY_CHARS] + "..."
    return text
