"""Tests for talk metrics."""

from app.models.analysis import TalkMetrics
from app.services.talk_metrics import (
    compute_talk_metrics,
    count_fillers,
    percentage,
    round_half_up,
)
from app.services.transcript_parser import build_parsed_transcript


def test_talk_ratio_by_word_count() -> None:
    """Test that the ratio counts words, not turns."""
    parsed = build_parsed_transcript("Rep: Hello there my friend\nClient: Hi")

    metrics = compute_talk_metrics(parsed, vocabulary=[])

    assert metrics.total_words_me == 4
    assert metrics.total_words_prospect == 1
    assert metrics.talk_ratio_me == 80
    assert metrics.talk_ratio_prospect == 20
    assert metrics.turn_count == 2


def test_other_speakers_are_pooled_as_prospect() -> None:
    """Test that every non-rep speaker counts for the prospect."""
    parsed = build_parsed_transcript("Rep: one two\nAnna: three\nPetr: four five six")

    metrics = compute_talk_metrics(parsed, vocabulary=[])

    assert metrics.total_words_me == 2
    assert metrics.total_words_prospect == 4
    assert metrics.talk_ratio_me == 33
    assert metrics.talk_ratio_prospect == 67


def test_ratios_round_half_up_and_sum_to_100() -> None:
    """Test rounding of a .5 ratio."""
    parsed = build_parsed_transcript("Rep: one\nClient: two three four five six seven eight")

    metrics = compute_talk_metrics(parsed, vocabulary=[])

    assert metrics.talk_ratio_me == 13  # 12.5
    assert metrics.talk_ratio_prospect == 87
    assert metrics.talk_ratio_me + metrics.talk_ratio_prospect == 100


def test_empty_transcript_yields_zero_metrics() -> None:
    """Test that empty input does not divide by zero."""
    metrics = compute_talk_metrics(build_parsed_transcript(""))

    assert metrics == TalkMetrics()


def test_czech_fillers_counted_for_rep_only() -> None:
    """Test filler detection in the rep's speech."""
    parsed = build_parsed_transcript("Rep: No jako takže jako to je\nClient: jako ne")

    metrics = compute_talk_metrics(parsed, language="cs")

    assert metrics.filler_words == {"jako": 2, "takže": 1, "no": 1}
    assert list(metrics.filler_words) == ["jako", "takže", "no"]
    assert metrics.filler_word_rate == 67  # 4 of 6 words


def test_filler_matching_is_case_insensitive_and_whole_word() -> None:
    """Test case folding and word boundaries."""
    parsed = build_parsed_transcript("Rep: JAKO jakoby emoce ehm")

    metrics = compute_talk_metrics(parsed, language="cs")

    assert metrics.filler_words == {"jako": 1, "ehm": 1, "jakoby": 1}


def test_english_multi_word_fillers() -> None:
    """Test multi-word filler terms."""
    parsed = build_parsed_transcript("Rep: you know, it is kind of like that")

    metrics = compute_talk_metrics(parsed, language="en")

    assert list(metrics.filler_words) == ["like", "you know", "kind of"]
    assert metrics.filler_word_rate == 38  # 3 of 8 words


def test_custom_vocabulary_overrides_language() -> None:
    """Test an explicit vocabulary."""
    parsed = build_parsed_transcript("Rep: well well, okay")

    metrics = compute_talk_metrics(parsed, vocabulary=["well", "okay"], language="cs")

    assert metrics.filler_words == {"well": 2, "okay": 1}


def test_rep_absent_from_transcript() -> None:
    """Test an override that matches no speaker."""
    parsed = build_parsed_transcript("Client: jako hello", me_speaker_override="Me")

    metrics = compute_talk_metrics(parsed)

    assert metrics.total_words_me == 0
    assert metrics.talk_ratio_me == 0
    assert metrics.talk_ratio_prospect == 100
    assert metrics.filler_words == {}
    assert metrics.filler_word_rate == 0


def test_count_fillers_skips_blank_terms() -> None:
    """Test that empty vocabulary entries are ignored."""
    assert count_fillers(["um okay"], ["", "  ", "um"]) == {"um": 1}


def test_percentage_helpers() -> None:
    """Test rounding helpers."""
    assert round_half_up(2.5) == 3
    assert round_half_up(2.49) == 2
    assert percentage(1, 0) == 0
    assert percentage(1, 3) == 33
    assert percentage(3, 3) == 100
