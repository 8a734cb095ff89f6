"""Deterministic coaching feedback used when the LLM narrative is unavailable."""

from typing import Literal

from app.models.analysis import (
    AnalysisSummary,
    CoachingAction,
    CoachingNarrative,
    Interpretation,
    PracticeScenario,
    TalkMetrics,
)

ScoreBand = Literal["high", "mid", "low"]

TALK_RATIO_LIMIT = 60
FILLER_RATE_LIMIT = 3
FILLER_RATE_HIGH = 5
MAX_WEAKNESS_ACTIONS = 2
MAX_PRACTICE_SCENARIOS = 2
QUOTED_RESPONSE_CHARS = 60
TOP_FILLERS = 3

COPY: dict[str, dict[str, str]] = {
    "cs": {
        "talk_title": "Snížit poměr mluvení",
        "talk_description": (
            "Mluvíš {ratio}% času. Ideál je 30-40%. "
            "Zkus po každé otázce počkat 3 sekundy déle."
        ),
        "filler_title": "Redukovat parazitní slova",
        "filler_description": "Filler rate {rate}%. Nejčastější: {top}. Nahraď tiché pauzy.",
        "filler_quote": "„{word}\"",
        "weakness_title": "Oblast ke zlepšení",
        "situation": "Klient řekl: „{objection}\"",
        "missed_approach": "Příště reaguj validací pocitu a otevřenou otázkou.",
        "weak_approach": "Místo „{response}…\" zkus validovat a přerámovat.",
        "level_high": "solidní",
        "level_mid": "průměrný",
        "level_low": "slabý",
        "overall": "Celkově {level} hovor ({score}/100).",
        "strength": "Silná stránka: {item}.",
        "weakness": "Největší příležitost ke zlepšení: {item}.",
        "focus": "Zaměř se na {count} {noun} níže.",
        "close_high": "Dobrá práce — drž tenhle standard a posouvej se dál.",
        "close_mid": "Základ máš, teď to dotáhni na další level.",
        "close_low": "Každý skvělý obchodník začínal na nule. Začni s jednou věcí a zlepšuj se.",
        "headline": "{level} hovor ({score}/100)",
        "category": "{name}: {score}/100",
        "spin_line": "{phase}: {count}× ({quality})",
    },
    "en": {
        "talk_title": "Reduce talking ratio",
        "talk_description": (
            "You talk {ratio}% of the time. The ideal is 30-40%. "
            "Try waiting 3 seconds longer after each question."
        ),
        "filler_title": "Reduce filler words",
        "filler_description": "Filler rate {rate}%. Most frequent: {top}. Replace them with silent pauses.",
        "filler_quote": "\"{word}\"",
        "weakness_title": "Area to improve",
        "situation": "Client said: \"{objection}\"",
        "missed_approach": "Next time respond by validating the feeling and asking an open question.",
        "weak_approach": "Instead of \"{response}…\" try validating and reframing.",
        "level_high": "solid",
        "level_mid": "average",
        "level_low": "weak",
        "overall": "Overall call quality: {level} ({score}/100).",
        "strength": "Strength: {item}.",
        "weakness": "Biggest opportunity to improve: {item}.",
        "focus": "Focus on the {count} {noun} below.",
        "close_high": "Good work, keep this standard and keep moving forward.",
        "close_mid": "The basics are there, now take it to the next level.",
        "close_low": "Every great salesperson started from zero. Pick one thing and improve it.",
        "headline": "{level} call ({score}/100)",
        "category": "{name}: {score}/100",
        "spin_line": "{phase}: {count} question(s), {quality}",
    },
}

DEFAULT_LANGUAGE = "cs"


def _language(language: str | None) -> str:
    code = (language or DEFAULT_LANGUAGE).lower()
    return code if code in COPY else DEFAULT_LANGUAGE


def _copy(language: str | None) -> dict[str, str]:
    return COPY[_language(language)]


def score_level(score: float) -> ScoreBand:
    """Map a 0-100 score onto the coaching band."""
    if score >= 70:
        return "high"
    if score >= 40:
        return "mid"
    return "low"


def _action_noun(count: int, language: str | None) -> str:
    if _language(language) == "cs":
        if count == 1:
            return "konkrétní akci"
        if 2 <= count <= 4:
            return "konkrétní akce"
        return "konkrétních akcí"
    return "concrete action" if count == 1 else "concrete actions"


def _clause_item(item: str) -> str:
    # the clause template supplies its own full stop
    return item.strip().rstrip(".!?…").strip()


def _first_item(items: list[str]) -> str:
    for item in items:
        clause = _clause_item(item)
        if clause:
            return clause
    return ""


def _top_fillers(fillers: dict[str, int], limit: int = TOP_FILLERS) -> list[str]:
    # sorted() is stable, so equal counts keep insertion order
    ranked = sorted(fillers.items(), key=lambda entry: entry[1], reverse=True)
    return [word for word, _count in ranked[:limit]]


def _build_actions(
    interpretation: Interpretation, metrics: TalkMetrics, text: dict[str, str]
) -> list[CoachingAction]:
    actions: list[CoachingAction] = []

    if metrics.talk_ratio_me > TALK_RATIO_LIMIT:
        actions.append(
            CoachingAction(
                title=text["talk_title"],
                description=text["talk_description"].format(ratio=metrics.talk_ratio_me),
                priority="high",
            )
        )

    if metrics.filler_word_rate > FILLER_RATE_LIMIT:
        top = ", ".join(
            text["filler_quote"].format(word=word) for word in _top_fillers(metrics.filler_words)
        )
        actions.append(
            CoachingAction(
                title=text["filler_title"],
                description=text["filler_description"].format(
                    rate=metrics.filler_word_rate, top=top
                ),
                priority="high" if metrics.filler_word_rate > FILLER_RATE_HIGH else "medium",
            )
        )

    weaknesses = [w.strip() for w in interpretation.weaknesses if w.strip()]
    for weakness in weaknesses[:MAX_WEAKNESS_ACTIONS]:
        actions.append(
            CoachingAction(title=text["weakness_title"], description=weakness, priority="medium")
        )

    return actions


def _build_practice_scenarios(
    interpretation: Interpretation, text: dict[str, str]
) -> list[PracticeScenario]:
    flagged = [o for o in interpretation.objections_handled if o.quality in ("weak", "missed")]

    scenarios = []
    for objection in flagged[:MAX_PRACTICE_SCENARIOS]:
        if objection.quality == "missed":
            approach = text["missed_approach"]
        else:
            approach = text["weak_approach"].format(
                response=objection.response[:QUOTED_RESPONSE_CHARS]
            )
        scenarios.append(
            PracticeScenario(
                situation=text["situation"].format(objection=objection.objection),
                better_approach=approach,
            )
        )
    return scenarios


def build_fallback_coaching_narrative(
    interpretation: Interpretation,
    metrics: TalkMetrics,
    language: str | None = None,
) -> CoachingNarrative:
    """
    Build coaching feedback from the interpretation and local metrics.

    Pure and total: empty strengths, weaknesses or objections simply leave
    the corresponding parts out.

    Args:
        interpretation: Call evaluation
        metrics: Talk metrics of the same call
        language: Copy language ("cs" or "en")

    Returns:
        Coaching narrative
    """
    text = _copy(language)
    actions = _build_actions(interpretation, metrics, text)
    band = score_level(interpretation.score)

    strength = _first_item(interpretation.strengths)
    weakness = _first_item(interpretation.weaknesses)

    parts = [text["overall"].format(level=text[f"level_{band}"], score=interpretation.score)]
    if strength:
        parts.append(text["strength"].format(item=strength))
    if weakness:
        parts.append(text["weakness"].format(item=weakness))
    if actions:
        parts.append(
            text["focus"].format(count=len(actions), noun=_action_noun(len(actions), language))
        )

    return CoachingNarrative(
        narrative=" ".join(parts),
        actions=actions,
        practice_scenarios=_build_practice_scenarios(interpretation, text),
        motivational_close=text[f"close_{band}"],
    )


def build_fallback_summary(
    interpretation: Interpretation,
    language: str | None = None,
) -> AnalysisSummary:
    """Build a summary locally when the external stage returned none."""
    text = _copy(language)
    level = text[f"level_{score_level(interpretation.score)}"]

    key_moments = [
        item
        for item in (_first_item(interpretation.strengths), _first_item(interpretation.weaknesses))
        if item
    ]

    score_explanation = "; ".join(
        text["category"].format(name=name, score=category.score)
        for name, category in interpretation.category_scores.items()
    )
    spin_notes = "\n".join(
        text["spin_line"].format(phase=phase, count=detail.count, quality=detail.quality or "-")
        for phase, detail in interpretation.spin_coverage.items()
        if detail.count > 0
    )

    return AnalysisSummary(
        headline=text["headline"].format(level=level.capitalize(), score=interpretation.score),
        key_moments=key_moments,
        score_explanation=score_explanation,
        spin_notes_pipedrive=spin_notes,
    )
