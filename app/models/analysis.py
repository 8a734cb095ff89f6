"""Domain models for call-transcript analysis."""

from dataclasses import dataclass, field
from datetime import date
from typing import Literal

Priority = Literal["high", "medium", "low"]
StageSource = Literal["llm", "fallback"]


@dataclass
class TranscriptTurn:
    """One contiguous utterance by a single speaker."""

    speaker: str
    text: str
    timestamp: str | None = None  # "H:MM" or "H:MM:SS", kept as written


@dataclass
class ParsedTranscript:
    """Ordered turns plus the speakers found in them."""

    turns: list[TranscriptTurn]
    speakers: list[str]  # distinct, first-seen order
    me_speaker: str  # label treated as the sales rep
    turn_count: int


@dataclass(frozen=True)
class TalkMetrics:
    """Call-shape statistics computed locally from a parsed transcript."""

    talk_ratio_me: int = 0
    talk_ratio_prospect: int = 0
    total_words_me: int = 0
    total_words_prospect: int = 0
    filler_words: dict[str, int] = field(default_factory=dict)
    filler_word_rate: int = 0
    turn_count: int = 0


@dataclass
class CategoryScore:
    """Score and short note for one evaluation category."""

    score: int
    note: str = ""


@dataclass
class QuestionItem:
    """A question the rep asked, classified by the interpretation stage."""

    text: str
    type: str = ""
    phase: str = ""
    quality: str = ""


@dataclass
class ObjectionItem:
    """A prospect objection and how the rep answered it."""

    objection: str
    response: str = ""
    quality: str = ""  # e.g. "strong", "weak", "missed"


@dataclass
class SpinPhaseDetail:
    """Coverage of one SPIN phase (situation, problem, implication, need_payoff)."""

    count: int = 0
    examples: list[str] = field(default_factory=list)
    quality: str = ""


@dataclass
class Interpretation:
    """
    Structured call evaluation produced by the external LLM stage.

    Arrives already validated; the core only reads it.
    """

    score: int
    category_scores: dict[str, CategoryScore] = field(default_factory=dict)
    strengths: list[str] = field(default_factory=list)  # most important first
    weaknesses: list[str] = field(default_factory=list)  # most important first
    filler_words_analysis: str = ""
    talk_ratio_analysis: str = ""
    spin_coverage: dict[str, SpinPhaseDetail] = field(default_factory=dict)
    questions_asked: list[QuestionItem] = field(default_factory=list)
    objections_handled: list[ObjectionItem] = field(default_factory=list)


@dataclass
class AnalysisSummary:
    """Short human-readable summary of one analysed call."""

    headline: str
    key_moments: list[str] = field(default_factory=list)
    score_explanation: str = ""
    spin_notes_pipedrive: str = ""


@dataclass
class CoachingAction:
    """One concrete improvement step."""

    title: str
    description: str
    priority: Priority
    example: str | None = None


@dataclass
class PracticeScenario:
    """A call moment worth replaying with a better approach."""

    situation: str
    better_approach: str


@dataclass
class CoachingNarrative:
    """Coaching feedback for the rep."""

    narrative: str
    actions: list[CoachingAction] = field(default_factory=list)
    practice_scenarios: list[PracticeScenario] = field(default_factory=list)
    motivational_close: str = ""


@dataclass(frozen=True)
class LocalAnalysis:
    """Output of the purely local stages (parsing and metrics)."""

    parsed: ParsedTranscript
    metrics: TalkMetrics


@dataclass(frozen=True)
class FullAnalysisResult:
    """One completed analysis of one call transcript."""

    parsed: ParsedTranscript
    metrics: TalkMetrics
    interpretation: Interpretation
    summary: AnalysisSummary
    coaching: CoachingNarrative
    summary_source: StageSource = "llm"
    coaching_source: StageSource = "llm"


@dataclass
class AnalyzedCall:
    """A previously completed analysis handed in for dashboard aggregation."""

    result: FullAnalysisResult
    call_date: date | None = None


@dataclass
class TrendPoint:
    """Daily averages for the dashboard trend line."""

    day: date
    score: int
    talk_ratio: int
    filler_rate: int


@dataclass
class QuestionStats:
    total: int = 0
    strong: int = 0
    weak: int = 0


@dataclass
class ObjectionStats:
    total: int = 0
    good: int = 0
    weak: int = 0
    missed: int = 0


@dataclass
class DashboardStats:
    """Rep performance across many calls."""

    total_calls: int = 0
    avg_score: int = 0
    avg_talk_ratio: int = 0
    avg_filler_rate: int = 0
    trend: list[TrendPoint] = field(default_factory=list)
    question_stats: dict[str, QuestionStats] = field(default_factory=dict)
    objection_stats: ObjectionStats = field(default_factory=ObjectionStats)
