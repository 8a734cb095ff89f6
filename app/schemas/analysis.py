"""Pydantic schemas for the transcript analysis API."""

from dataclasses import asdict
from datetime import date
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.models.analysis import (
    AnalysisSummary,
    AnalyzedCall,
    CategoryScore,
    CoachingAction,
    CoachingNarrative,
    FullAnalysisResult,
    Interpretation,
    ObjectionItem,
    ParsedTranscript,
    QuestionItem,
    SpinPhaseDetail,
    TalkMetrics,
    TranscriptTurn,
)


class CamelModel(BaseModel):
    """Base schema serialised with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def from_domain(cls, obj: Any) -> "CamelModel":
        """Build the schema from a domain dataclass."""
        return cls.model_validate(asdict(obj))


class TranscriptTurnSchema(CamelModel):
    """Schema for one transcript turn."""

    speaker: str
    text: str
    timestamp: str | None = None


class ParsedTranscriptSchema(CamelModel):
    """Schema for a parsed transcript."""

    turns: list[TranscriptTurnSchema]
    speakers: list[str]
    me_speaker: str
    turn_count: int

    def to_domain(self) -> ParsedTranscript:
        return ParsedTranscript(
            turns=[TranscriptTurn(**turn.model_dump()) for turn in self.turns],
            speakers=list(self.speakers),
            me_speaker=self.me_speaker,
            turn_count=self.turn_count,
        )


class TalkMetricsSchema(CamelModel):
    """Schema for talk metrics."""

    talk_ratio_me: int = Field(0, ge=0, le=100)
    talk_ratio_prospect: int = Field(0, ge=0, le=100)
    total_words_me: int = Field(0, ge=0)
    total_words_prospect: int = Field(0, ge=0)
    filler_words: dict[str, int] = Field(default_factory=dict)
    filler_word_rate: int = Field(0, ge=0)
    turn_count: int = Field(0, ge=0)

    def to_domain(self) -> TalkMetrics:
        return TalkMetrics(**self.model_dump())


class CategoryScoreSchema(CamelModel):
    score: int
    note: str = ""


class QuestionItemSchema(CamelModel):
    text: str
    type: str = ""
    phase: str = ""
    quality: str = ""


class ObjectionItemSchema(CamelModel):
    objection: str
    response: str = ""
    quality: str = ""


class SpinPhaseDetailSchema(CamelModel):
    count: int = 0
    examples: list[str] = Field(default_factory=list)
    quality: str = ""


class InterpretationSchema(CamelModel):
    """Schema for the interpretation returned by the LLM stage."""

    score: int = Field(..., ge=0, le=100, description="Overall call score")
    category_scores: dict[str, CategoryScoreSchema] = Field(default_factory=dict)
    strengths: list[str] = Field(default_factory=list, description="Most important first")
    weaknesses: list[str] = Field(default_factory=list, description="Most important first")
    filler_words_analysis: str = ""
    talk_ratio_analysis: str = ""
    spin_coverage: dict[str, SpinPhaseDetailSchema] = Field(default_factory=dict)
    questions_asked: list[QuestionItemSchema] = Field(default_factory=list)
    objections_handled: list[ObjectionItemSchema] = Field(default_factory=list)

    def to_domain(self) -> Interpretation:
        return Interpretation(
            score=self.score,
            category_scores={
                name: CategoryScore(**category.model_dump())
                for name, category in self.category_scores.items()
            },
            strengths=list(self.strengths),
            weaknesses=list(self.weaknesses),
            filler_words_analysis=self.filler_words_analysis,
            talk_ratio_analysis=self.talk_ratio_analysis,
            spin_coverage={
                phase: SpinPhaseDetail(**detail.model_dump())
                for phase, detail in self.spin_coverage.items()
            },
            questions_asked=[QuestionItem(**q.model_dump()) for q in self.questions_asked],
            objections_handled=[ObjectionItem(**o.model_dump()) for o in self.objections_handled],
        )


class AnalysisSummarySchema(CamelModel):
    """Schema for the call summary."""

    headline: str
    key_moments: list[str] = Field(default_factory=list)
    score_explanation: str = ""
    spin_notes_pipedrive: str = ""

    def to_domain(self) -> AnalysisSummary:
        return AnalysisSummary(**self.model_dump())


class CoachingActionSchema(CamelModel):
    title: str
    description: str
    priority: Literal["high", "medium", "low"]
    example: str | None = None


class PracticeScenarioSchema(CamelModel):
    situation: str
    better_approach: str


class CoachingNarrativeSchema(CamelModel):
    """Schema for the coaching narrative."""

    narrative: str
    actions: list[CoachingActionSchema] = Field(default_factory=list)
    practice_scenarios: list[PracticeScenarioSchema] = Field(default_factory=list)
    motivational_close: str = ""

    def to_domain(self) -> CoachingNarrative:
        return CoachingNarrative(
            narrative=self.narrative,
            actions=[CoachingAction(**a.model_dump()) for a in self.actions],
            practice_scenarios=[
                PracticeScenario(**s.model_dump()) for s in self.practice_scenarios
            ],
            motivational_close=self.motivational_close,
        )


class TranscriptRequest(CamelModel):
    """Raw transcript with an optional rep label."""

    raw_transcript: str = Field(..., description="Transcript text in any supported layout")
    me_speaker_override: str | None = Field(
        None, description="Speaker label of the sales rep; detected when omitted"
    )


class AnalyzeTranscriptRequest(TranscriptRequest):
    """Full analysis request; stages already computed upstream may be included."""

    contact_name: str | None = None
    contact_company: str | None = None
    contact_role: str | None = None
    duration_seconds: int | None = Field(None, ge=0)
    interpretation: InterpretationSchema | None = None
    summary: AnalysisSummarySchema | None = None
    coaching: CoachingNarrativeSchema | None = None


class LocalAnalysisResponse(CamelModel):
    """Parsed transcript with its talk metrics."""

    parsed: ParsedTranscriptSchema
    metrics: TalkMetricsSchema


class FullAnalysisResponse(CamelModel):
    """All pipeline stages for one call."""

    parsed: ParsedTranscriptSchema
    metrics: TalkMetricsSchema
    interpretation: InterpretationSchema
    summary: AnalysisSummarySchema
    coaching: CoachingNarrativeSchema
    summary_source: Literal["llm", "fallback"] = "llm"
    coaching_source: Literal["llm", "fallback"] = "llm"

    def to_domain(self) -> FullAnalysisResult:
        return FullAnalysisResult(
            parsed=self.parsed.to_domain(),
            metrics=self.metrics.to_domain(),
            interpretation=self.interpretation.to_domain(),
            summary=self.summary.to_domain(),
            coaching=self.coaching.to_domain(),
            summary_source=self.summary_source,
            coaching_source=self.coaching_source,
        )


class FallbackCoachingRequest(CamelModel):
    """Inputs for the local coaching narrative."""

    interpretation: InterpretationSchema
    metrics: TalkMetricsSchema


class AnalyzedCallSchema(CamelModel):
    """One stored analysis with its call date."""

    result: FullAnalysisResponse
    call_date: date | None = None

    def to_domain(self) -> AnalyzedCall:
        return AnalyzedCall(result=self.result.to_domain(), call_date=self.call_date)


class DashboardStatsRequest(CamelModel):
    calls: list[AnalyzedCallSchema] = Field(default_factory=list)
    days: int | None = Field(None, ge=1, description="Reporting window in days; all calls when omitted")
    today: date | None = Field(None, description="Last day of the window, defaults to the current date")


class TrendPointSchema(CamelModel):
    day: date = Field(..., alias="date")
    score: int
    talk_ratio: int
    filler_rate: int


class QuestionStatsSchema(CamelModel):
    total: int = 0
    strong: int = 0
    weak: int = 0


class ObjectionStatsSchema(CamelModel):
    total: int = 0
    good: int = 0
    weak: int = 0
    missed: int = 0


class DashboardStatsSchema(CamelModel):
    """Aggregated rep performance."""

    total_calls: int
    avg_score: int
    avg_talk_ratio: int
    avg_filler_rate: int
    trend: list[TrendPointSchema] = Field(default_factory=list)
    question_stats: dict[str, QuestionStatsSchema] = Field(default_factory=dict)
    objection_stats: ObjectionStatsSchema = Field(default_factory=ObjectionStatsSchema)
