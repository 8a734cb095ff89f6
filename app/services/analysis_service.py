"""Service layer for the call-transcript analysis pipeline."""

from collections.abc import Sequence

from logly import logger

from app.models.analysis import (
    AnalysisSummary,
    CoachingNarrative,
    FullAnalysisResult,
    Interpretation,
    LocalAnalysis,
    TalkMetrics,
)
from app.services.coaching import build_fallback_coaching_narrative, build_fallback_summary
from app.services.interpretation import (
    CallContext,
    InterpretationProvider,
    InterpretationResult,
    InterpretationUnavailableError,
)
from app.services.talk_metrics import compute_talk_metrics
from app.services.transcript_parser import DEFAULT_ME_SPEAKER, build_parsed_transcript


class AnalysisService:
    """
    Runs the analysis pipeline.

    Local stages (parsing, metrics) always run first and never wait on the
    external interpretation stage. Missing summary or coaching is rebuilt
    locally from whatever interpretation is available.
    """

    def __init__(
        self,
        provider: InterpretationProvider | None = None,
        filler_vocabulary: Sequence[str] | None = None,
        language: str | None = None,
        default_me_speaker: str = DEFAULT_ME_SPEAKER,
    ) -> None:
        """
        Initialize the service.

        Args:
            provider: External interpretation stage (optional)
            filler_vocabulary: Filler terms overriding the language list
            language: Language for filler words and fallback copy
            default_me_speaker: Rep label used when a transcript has no turns
        """
        self.provider = provider
        self.filler_vocabulary = filler_vocabulary
        self.language = language
        self.default_me_speaker = default_me_speaker

    def analyze_local(self, raw: str, me_speaker_override: str | None = None) -> LocalAnalysis:
        """
        Parse a transcript and compute its talk metrics.

        Args:
            raw: Raw transcript text
            me_speaker_override: Explicit rep label

        Returns:
            Parsed transcript and metrics
        """
        parsed = build_parsed_transcript(
            raw,
            me_speaker_override=me_speaker_override,
            default_me_speaker=self.default_me_speaker,
        )
        metrics = compute_talk_metrics(
            parsed, vocabulary=self.filler_vocabulary, language=self.language
        )
        logger.debug(
            f"Parsed {parsed.turn_count} turns from {len(parsed.speakers)} speakers, "
            f"rep is '{parsed.me_speaker}' at {metrics.talk_ratio_me}%"
        )
        return LocalAnalysis(parsed=parsed, metrics=metrics)

    def build_coaching(
        self, interpretation: Interpretation, metrics: TalkMetrics
    ) -> CoachingNarrative:
        """Build the local coaching narrative in the service language."""
        return build_fallback_coaching_narrative(interpretation, metrics, language=self.language)

    async def analyze(
        self,
        raw: str,
        me_speaker_override: str | None = None,
        interpretation: Interpretation | None = None,
        summary: AnalysisSummary | None = None,
        coaching: CoachingNarrative | None = None,
        context: CallContext | None = None,
    ) -> FullAnalysisResult:
        """
        Run the full pipeline for one transcript.

        An interpretation passed in by the caller is used as is; otherwise the
        provider is asked. Summary and coaching fall back to local builders
        when neither the caller nor the provider supplied them.

        Args:
            raw: Raw transcript text
            me_speaker_override: Explicit rep label
            interpretation: Already available interpretation
            summary: Already available summary
            coaching: Already available coaching narrative
            context: Call metadata for the provider

        Returns:
            Full analysis result

        Raises:
            InterpretationUnavailableError: If no interpretation is available
        """
        local = self.analyze_local(raw, me_speaker_override=me_speaker_override)

        if interpretation is None:
            external = await self._interpret(local, context)
            if external is None:
                raise InterpretationUnavailableError(
                    "No interpretation supplied and the interpretation stage is unavailable"
                )
            interpretation = external.interpretation
            summary = summary or external.summary
            coaching = coaching or external.coaching

        summary_source = "llm"
        if summary is None:
            logger.info("No summary from interpretation stage, building fallback summary")
            summary = build_fallback_summary(interpretation, language=self.language)
            summary_source = "fallback"

        coaching_source = "llm"
        if coaching is None:
            logger.info("No coaching narrative from interpretation stage, using fallback")
            coaching = self.build_coaching(interpretation, local.metrics)
            coaching_source = "fallback"

        return FullAnalysisResult(
            parsed=local.parsed,
            metrics=local.metrics,
            interpretation=interpretation,
            summary=summary,
            coaching=coaching,
            summary_source=summary_source,
            coaching_source=coaching_source,
        )

    async def _interpret(
        self, local: LocalAnalysis, context: CallContext | None
    ) -> InterpretationResult | None:
        if self.provider is None:
            logger.debug("No interpretation provider configured")
            return None

        try:
            return await self.provider.interpret(local.parsed, local.metrics, context)
        except Exception as e:
            logger.warning(f"Interpretation stage failed: {e}")
            return None
