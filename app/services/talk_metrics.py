"""Talk-ratio and filler-word statistics for a parsed transcript."""

import math
import re
from collections.abc import Sequence

from app.models.analysis import ParsedTranscript, TalkMetrics

# Habitual low-content words per language, in reporting order.
FILLER_WORDS: dict[str, tuple[str, ...]] = {
    "cs": (
        "jako",
        "takže",
        "ehm",
        "em",
        "vlastně",
        "jakoby",
        "prostě",
        "no",
        "hele",
        "v podstatě",
        "tak nějak",
        "víceméně",
    ),
    "en": (
        "um",
        "uh",
        "like",
        "you know",
        "basically",
        "actually",
        "literally",
        "sort of",
        "kind of",
        "i mean",
    ),
}

DEFAULT_LANGUAGE = "cs"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for non-negatives."""
    return int(math.floor(value + 0.5))


def percentage(part: int, whole: int) -> int:
    """Integer percentage of ``part`` in ``whole``; 0 when ``whole`` is 0."""
    if whole <= 0:
        return 0
    return round_half_up(100 * part / whole)


def count_words(text: str) -> int:
    return len(text.split())


def filler_vocabulary(language: str | None = None) -> tuple[str, ...]:
    """Built-in filler list for ``language``, falling back to Czech."""
    return FILLER_WORDS.get((language or DEFAULT_LANGUAGE).lower(), FILLER_WORDS[DEFAULT_LANGUAGE])


def _term_pattern(term: str) -> re.Pattern:
    # whitespace inside multi-word terms matches any run of whitespace
    body = r"\s+".join(re.escape(part) for part in term.split())
    return re.compile(rf"(?<!\w){body}(?!\w)", re.IGNORECASE)


def count_fillers(texts: Sequence[str], vocabulary: Sequence[str]) -> dict[str, int]:
    """
    Count filler terms across ``texts``.

    Matching is case-insensitive on word boundaries. Only terms that occur are
    returned, in vocabulary order.
    """
    counts: dict[str, int] = {}
    for term in vocabulary:
        if not term.strip():
            continue
        pattern = _term_pattern(term)
        occurrences = sum(len(pattern.findall(text)) for text in texts)
        if occurrences:
            key = term.lower()
            counts[key] = counts.get(key, 0) + occurrences
    return counts


def compute_talk_metrics(
    parsed: ParsedTranscript,
    vocabulary: Sequence[str] | None = None,
    language: str | None = None,
) -> TalkMetrics:
    """
    Compute talk ratio and filler-word statistics.

    Every turn whose speaker equals ``parsed.me_speaker`` counts for the rep;
    all other speakers are pooled as the prospect. Empty transcripts yield
    all-zero metrics.

    Args:
        parsed: Parsed transcript
        vocabulary: Filler terms to look for; overrides ``language``
        language: Selects a built-in filler list when no vocabulary is given

    Returns:
        Talk metrics
    """
    words_me = 0
    words_prospect = 0
    rep_texts: list[str] = []

    for turn in parsed.turns:
        words = count_words(turn.text)
        if turn.speaker == parsed.me_speaker:
            words_me += words
            rep_texts.append(turn.text)
        else:
            words_prospect += words

    total = words_me + words_prospect
    ratio_me = percentage(words_me, total)
    ratio_prospect = 100 - ratio_me if total else 0

    terms = vocabulary if vocabulary is not None else filler_vocabulary(language)
    fillers = count_fillers(rep_texts, terms)

    return TalkMetrics(
        talk_ratio_me=ratio_me,
        talk_ratio_prospect=ratio_prospect,
        total_words_me=words_me,
        total_words_prospect=words_prospect,
        filler_words=fillers,
        filler_word_rate=percentage(sum(fillers.values()), words_me),
        turn_count=parsed.turn_count,
    )
