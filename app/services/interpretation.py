"""Boundary to the external, LLM-backed interpretation stage."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from app.models.analysis import (
    AnalysisSummary,
    CoachingNarrative,
    Interpretation,
    ParsedTranscript,
    TalkMetrics,
)


class InterpretationUnavailableError(Exception):
    """Raised when no interpretation was supplied and none could be obtained."""


@dataclass
class CallContext:
    """Optional call metadata forwarded to the interpretation stage."""

    contact_name: str | None = None
    contact_company: str | None = None
    contact_role: str | None = None
    duration_seconds: int | None = None


@dataclass
class InterpretationResult:
    """What the external stage returned; summary and coaching may be missing."""

    interpretation: Interpretation
    summary: AnalysisSummary | None = None
    coaching: CoachingNarrative | None = None


class InterpretationProvider(ABC):
    """Abstract base class for services that evaluate a call transcript."""

    @abstractmethod
    async def interpret(
        self,
        parsed: ParsedTranscript,
        metrics: TalkMetrics,
        context: CallContext | None = None,
    ) -> InterpretationResult:
        """
        Evaluate a parsed call.

        Implementations own their network timeouts and retries; any exception
        raised here is treated by the caller as "stage unavailable".

        Args:
            parsed: Parsed transcript
            metrics: Locally computed talk metrics
            context: Optional call metadata

        Returns:
            Interpretation with optional summary and coaching narrative
        """
        pass
