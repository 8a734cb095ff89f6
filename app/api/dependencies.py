"""Dependency injection for API endpoints."""

from app.core.config import settings
from app.services.analysis_service import AnalysisService
from app.services.interpretation import InterpretationProvider

# Global interpretation provider instance
_interpretation_provider: InterpretationProvider | None = None


def set_interpretation_provider(provider: InterpretationProvider | None) -> None:
    """
    Set the global interpretation provider.

    This should be called once during application startup by whatever
    deployment wires in the LLM-backed stage.

    Args:
        provider: InterpretationProvider instance, or None to disable the stage
    """
    global _interpretation_provider
    _interpretation_provider = provider


def get_interpretation_provider() -> InterpretationProvider | None:
    """
    Get the global interpretation provider.

    Returns:
        InterpretationProvider instance or None if not configured
    """
    return _interpretation_provider


def get_analysis_service() -> AnalysisService:
    """
    Get analysis service instance.

    Returns:
        AnalysisService configured from settings
    """
    return AnalysisService(
        provider=_interpretation_provider,
        filler_vocabulary=settings.filler_words,
        language=settings.analysis_language,
        default_me_speaker=settings.default_me_speaker,
    )
