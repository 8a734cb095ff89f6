"""Aggregate statistics over a set of analysed calls."""

from collections import defaultdict
from datetime import date, timedelta

from app.models.analysis import (
    AnalyzedCall,
    DashboardStats,
    ObjectionStats,
    QuestionStats,
    TrendPoint,
)
from app.services.talk_metrics import round_half_up

GOOD_QUALITIES = ("strong", "good")


def _mean(values: list[int]) -> int:
    if not values:
        return 0
    return round_half_up(sum(values) / len(values))


def _build_trend(calls: list[AnalyzedCall]) -> list[TrendPoint]:
    by_day: dict[date, list[AnalyzedCall]] = defaultdict(list)
    for call in calls:
        if call.call_date is not None:
            by_day[call.call_date].append(call)

    return [
        TrendPoint(
            day=day,
            score=_mean([c.result.interpretation.score for c in day_calls]),
            talk_ratio=_mean([c.result.metrics.talk_ratio_me for c in day_calls]),
            filler_rate=_mean([c.result.metrics.filler_word_rate for c in day_calls]),
        )
        for day, day_calls in sorted(by_day.items())
    ]


def within_window(calls: list[AnalyzedCall], days: int, today: date) -> list[AnalyzedCall]:
    """Keep dated calls from the last ``days`` calendar days, ``today`` included."""
    start = today - timedelta(days=days - 1)
    return [c for c in calls if c.call_date is not None and start <= c.call_date <= today]


def aggregate_dashboard_stats(
    calls: list[AnalyzedCall],
    days: int | None = None,
    today: date | None = None,
) -> DashboardStats:
    """
    Summarise analysed calls for the analytics dashboard.

    Questions are grouped by their ``type``. Objections answered with a
    ``strong`` or ``good`` response count as good. With ``days`` set, only
    calls dated inside the reporting window ending at ``today`` are counted;
    undated calls fall outside every window.

    Args:
        calls: Analysed calls, in any order
        days: Reporting window length in days, or None for all calls
        today: Last day of the window, defaults to the current date

    Returns:
        Dashboard statistics; all zero for an empty input
    """
    if days is not None:
        calls = within_window(calls, days, today or date.today())

    question_stats: dict[str, QuestionStats] = {}
    objection_stats = ObjectionStats()

    for call in calls:
        interpretation = call.result.interpretation

        for question in interpretation.questions_asked:
            stats = question_stats.setdefault(question.type or "other", QuestionStats())
            stats.total += 1
            if question.quality in GOOD_QUALITIES:
                stats.strong += 1
            elif question.quality == "weak":
                stats.weak += 1

        for objection in interpretation.objections_handled:
            objection_stats.total += 1
            if objection.quality in GOOD_QUALITIES:
                objection_stats.good += 1
            elif objection.quality == "weak":
                objection_stats.weak += 1
            elif objection.quality == "missed":
                objection_stats.missed += 1

    return DashboardStats(
        total_calls=len(calls),
        avg_score=_mean([c.result.interpretation.score for c in calls]),
        avg_talk_ratio=_mean([c.result.metrics.talk_ratio_me for c in calls]),
        avg_filler_rate=_mean([c.result.metrics.filler_word_rate for c in calls]),
        trend=_build_trend(calls),
        question_stats=question_stats,
        objection_stats=objection_stats,
    )
