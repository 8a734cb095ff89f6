"""Tests for the local coaching narrative and summary."""

import pytest

from app.models.analysis import (
    CategoryScore,
    Interpretation,
    ObjectionItem,
    SpinPhaseDetail,
    TalkMetrics,
)
from app.services.coaching import (
    COPY,
    build_fallback_coaching_narrative,
    build_fallback_summary,
    score_level,
)


def test_high_talk_ratio_adds_high_priority_action() -> None:
    """Test the talking-ratio rule."""
    metrics = TalkMetrics(talk_ratio_me=75, talk_ratio_prospect=25, filler_word_rate=1)

    coaching = build_fallback_coaching_narrative(Interpretation(score=50), metrics, language="en")

    assert len(coaching.actions) == 1
    action = coaching.actions[0]
    assert action.title == "Reduce talking ratio"
    assert action.priority == "high"
    assert "75%" in action.description
    assert "30-40%" in action.description


def test_talk_ratio_at_limit_adds_no_action() -> None:
    """Test that exactly 60% does not trigger the rule."""
    coaching = build_fallback_coaching_narrative(
        Interpretation(score=50), TalkMetrics(talk_ratio_me=60), language="en"
    )

    assert coaching.actions == []


def test_high_filler_rate_names_top_fillers() -> None:
    """Test the filler rule with a rate above 5%."""
    metrics = TalkMetrics(talk_ratio_me=45, filler_word_rate=6, filler_words={"ehm": 3, "jako": 10})

    coaching = build_fallback_coaching_narrative(Interpretation(score=50), metrics, language="cs")

    assert len(coaching.actions) == 1
    action = coaching.actions[0]
    assert action.title == "Redukovat parazitní slova"
    assert action.priority == "high"
    assert "6%" in action.description
    assert action.description.index("jako") < action.description.index("ehm")


@pytest.mark.parametrize("rate,expected", [(4, "medium"), (5, "medium"), (6, "high")])
def test_filler_priority_bands(rate: int, expected: str) -> None:
    """Test filler action priority around the 5% threshold."""
    metrics = TalkMetrics(filler_word_rate=rate, filler_words={"um": 1})

    coaching = build_fallback_coaching_narrative(Interpretation(score=50), metrics, language="en")

    assert coaching.actions[0].priority == expected


def test_filler_rate_at_limit_adds_no_action() -> None:
    """Test that exactly 3% does not trigger the rule."""
    metrics = TalkMetrics(filler_word_rate=3, filler_words={"um": 3})

    coaching = build_fallback_coaching_narrative(Interpretation(score=50), metrics, language="en")

    assert coaching.actions == []


def test_top_fillers_ties_keep_insertion_order() -> None:
    """Test that the three most frequent fillers are listed, ties in original order."""
    metrics = TalkMetrics(
        filler_word_rate=4, filler_words={"takže": 2, "jako": 2, "ehm": 5, "no": 1}
    )

    coaching = build_fallback_coaching_narrative(Interpretation(score=50), metrics, language="en")

    assert 'Most frequent: "ehm", "takže", "jako".' in coaching.actions[0].description
    assert '"no"' not in coaching.actions[0].description


def test_weaknesses_become_medium_actions() -> None:
    """Test that at most two weaknesses turn into actions."""
    interpretation = Interpretation(score=50, weaknesses=["No close", "Few questions", "Too fast"])

    coaching = build_fallback_coaching_narrative(interpretation, TalkMetrics(), language="en")

    assert [(a.title, a.description, a.priority) for a in coaching.actions] == [
        ("Area to improve", "No close", "medium"),
        ("Area to improve", "Few questions", "medium"),
    ]


def test_practice_scenarios_from_weak_and_missed_objections() -> None:
    """Test that only weak and missed objections are replayed, in order."""
    response = "Well, our price reflects the quality and I think you will see that it is worth it"
    interpretation = Interpretation(
        score=50,
        objections_handled=[
            ObjectionItem(objection="too expensive", response=response, quality="weak"),
            ObjectionItem(objection="no time", response="", quality="missed"),
            ObjectionItem(objection="we use a competitor", response="Sure", quality="strong"),
        ],
    )

    coaching = build_fallback_coaching_narrative(interpretation, TalkMetrics(), language="en")

    scenarios = coaching.practice_scenarios
    assert len(scenarios) == 2
    assert scenarios[0].situation == 'Client said: "too expensive"'
    assert response[:60] in scenarios[0].better_approach
    assert response[:61] not in scenarios[0].better_approach
    assert scenarios[1].situation == 'Client said: "no time"'
    assert scenarios[1].better_approach == COPY["en"]["missed_approach"]


def test_practice_scenarios_capped_at_two() -> None:
    """Test the scenario cap."""
    interpretation = Interpretation(
        score=50,
        objections_handled=[
            ObjectionItem(objection=f"objection {i}", response="hmm", quality="weak")
            for i in range(4)
        ],
    )

    coaching = build_fallback_coaching_narrative(interpretation, TalkMetrics())

    assert len(coaching.practice_scenarios) == 2
    assert "objection 0" in coaching.practice_scenarios[0].situation
    assert "objection 1" in coaching.practice_scenarios[1].situation


def test_high_score_narrative_and_close() -> None:
    """Test the narrative for a strong call."""
    interpretation = Interpretation(
        score=85, strengths=["Great rapport.", "Clear agenda"], weaknesses=["Weak close"]
    )

    coaching = build_fallback_coaching_narrative(interpretation, TalkMetrics(), language="en")

    assert coaching.narrative == (
        "Overall call quality: solid (85/100). "
        "Strength: Great rapport. "
        "Biggest opportunity to improve: Weak close. "
        "Focus on the 1 concrete action below."
    )
    assert coaching.motivational_close == COPY["en"]["close_high"]


def test_czech_narrative_uses_plural_forms() -> None:
    """Test Czech wording for two actions."""
    interpretation = Interpretation(score=55, weaknesses=["Málo otázek", "Chybí uzavření"])

    coaching = build_fallback_coaching_narrative(interpretation, TalkMetrics(), language="cs")

    assert coaching.narrative.startswith("Celkově průměrný hovor (55/100).")
    assert coaching.narrative.endswith("Zaměř se na 2 konkrétní akce níže.")
    assert coaching.motivational_close == COPY["cs"]["close_mid"]


def test_empty_inputs_produce_clean_narrative() -> None:
    """Test totality on an all-empty interpretation and zero metrics."""
    coaching = build_fallback_coaching_narrative(Interpretation(score=0), TalkMetrics(), language="en")

    assert coaching.narrative == "Overall call quality: weak (0/100)."
    assert coaching.actions == []
    assert coaching.practice_scenarios == []
    assert coaching.motivational_close == COPY["en"]["close_low"]


def test_blank_strength_is_omitted() -> None:
    """Test that blank list items do not leave empty clauses."""
    interpretation = Interpretation(score=40, strengths=["  "], weaknesses=[])

    coaching = build_fallback_coaching_narrative(interpretation, TalkMetrics(), language="en")

    assert coaching.narrative == "Overall call quality: average (40/100)."


def test_unknown_language_falls_back_to_czech() -> None:
    """Test the default copy."""
    coaching = build_fallback_coaching_narrative(Interpretation(score=90), TalkMetrics(), language="de")

    assert coaching.narrative == "Celkově solidní hovor (90/100)."


@pytest.mark.parametrize(
    "score,band", [(100, "high"), (70, "high"), (69, "mid"), (40, "mid"), (39, "low"), (0, "low")]
)
def test_score_level(score: int, band: str) -> None:
    """Test score band thresholds."""
    assert score_level(score) == band


def test_fallback_summary() -> None:
    """Test the local summary."""
    interpretation = Interpretation(
        score=85,
        strengths=["Great rapport."],
        weaknesses=["Weak close"],
        category_scores={
            "rapport": CategoryScore(score=80, note="warm"),
            "closing": CategoryScore(score=40),
        },
        spin_coverage={
            "situation": SpinPhaseDetail(count=3, quality="good"),
            "implication": SpinPhaseDetail(count=0),
            "problem": SpinPhaseDetail(count=1),
        },
    )

    summary = build_fallback_summary(interpretation, language="en")

    assert summary.headline == "Solid call (85/100)"
    assert summary.key_moments == ["Great rapport", "Weak close"]
    assert summary.score_explanation == "rapport: 80/100; closing: 40/100"
    assert summary.spin_notes_pipedrive == (
        "situation: 3 question(s), good\nproblem: 1 question(s), -"
    )


def test_blank_weaknesses_do_not_become_actions() -> None:
    """Test that empty weaknesses are skipped and the action count stays consistent."""
    interpretation = Interpretation(score=50, weaknesses=["   ", "", "No close", "Few questions"])

    coaching = build_fallback_coaching_narrative(interpretation, TalkMetrics(), language="en")

    assert [a.description for a in coaching.actions] == ["No close", "Few questions"]
    assert "Biggest opportunity to improve: No close." in coaching.narrative
    assert coaching.narrative.endswith("Focus on the 2 concrete actions below.")


def test_czech_high_close_keeps_product_wording() -> None:
    """Test the Czech closing line for a strong call."""
    coaching = build_fallback_coaching_narrative(Interpretation(score=80), TalkMetrics(), language="cs")

    assert coaching.motivational_close == "Dobrá práce — drž tenhle standard a posouvej se dál."
