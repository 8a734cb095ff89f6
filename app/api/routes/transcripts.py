"""API endpoints for transcript analysis."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from app.api.dependencies import get_analysis_service
from app.schemas.analysis import (
    AnalyzeTranscriptRequest,
    CoachingNarrativeSchema,
    DashboardStatsRequest,
    DashboardStatsSchema,
    FallbackCoachingRequest,
    FullAnalysisResponse,
    LocalAnalysisResponse,
    ParsedTranscriptSchema,
    TranscriptRequest,
)
from app.services.analysis_service import AnalysisService
from app.services.dashboard_stats import aggregate_dashboard_stats
from app.services.interpretation import CallContext, InterpretationUnavailableError

router = APIRouter()


@router.post("/transcript/parse", response_model=ParsedTranscriptSchema)
async def parse_transcript(
    request: TranscriptRequest,
    service: Annotated[AnalysisService, Depends(get_analysis_service)],
) -> ParsedTranscriptSchema:
    """
    Parse a raw transcript into speaker turns.

    Args:
        request: Raw transcript and optional rep label

    Returns:
        Parsed transcript
    """
    local = service.analyze_local(
        request.raw_transcript, me_speaker_override=request.me_speaker_override
    )
    return ParsedTranscriptSchema.from_domain(local.parsed)


@router.post("/transcript/metrics", response_model=LocalAnalysisResponse)
async def transcript_metrics(
    request: TranscriptRequest,
    service: Annotated[AnalysisService, Depends(get_analysis_service)],
) -> LocalAnalysisResponse:
    """
    Parse a transcript and compute its talk metrics.

    Args:
        request: Raw transcript and optional rep label

    Returns:
        Parsed transcript with talk metrics
    """
    local = service.analyze_local(
        request.raw_transcript, me_speaker_override=request.me_speaker_override
    )
    return LocalAnalysisResponse.from_domain(local)


@router.post("/transcript/analyze", response_model=FullAnalysisResponse)
async def analyze_transcript(
    request: AnalyzeTranscriptRequest,
    service: Annotated[AnalysisService, Depends(get_analysis_service)],
) -> FullAnalysisResponse:
    """
    Run the full analysis pipeline.

    Stages the caller already has (interpretation, summary, coaching) are
    used as given; the rest come from the interpretation stage or the local
    fallbacks.

    Args:
        request: Transcript, call metadata and any precomputed stages

    Returns:
        Full analysis result
    """
    context = CallContext(
        contact_name=request.contact_name,
        contact_company=request.contact_company,
        contact_role=request.contact_role,
        duration_seconds=request.duration_seconds,
    )
    try:
        result = await service.analyze(
            request.raw_transcript,
            me_speaker_override=request.me_speaker_override,
            interpretation=request.interpretation.to_domain() if request.interpretation else None,
            summary=request.summary.to_domain() if request.summary else None,
            coaching=request.coaching.to_domain() if request.coaching else None,
            context=context,
        )
    except InterpretationUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))

    return FullAnalysisResponse.from_domain(result)


@router.post("/transcript/coaching/fallback", response_model=CoachingNarrativeSchema)
async def fallback_coaching(
    request: FallbackCoachingRequest,
    service: Annotated[AnalysisService, Depends(get_analysis_service)],
) -> CoachingNarrativeSchema:
    """
    Build the local coaching narrative from an interpretation and metrics.

    Args:
        request: Interpretation and talk metrics

    Returns:
        Coaching narrative
    """
    coaching = service.build_coaching(
        request.interpretation.to_domain(), request.metrics.to_domain()
    )
    return CoachingNarrativeSchema.from_domain(coaching)


@router.post("/transcript/stats", response_model=DashboardStatsSchema)
async def transcript_stats(request: DashboardStatsRequest) -> DashboardStatsSchema:
    """
    Aggregate dashboard statistics over analysed calls.

    Args:
        request: Analysed calls with optional call dates and reporting window

    Returns:
        Dashboard statistics
    """
    stats = aggregate_dashboard_stats(
        [call.to_domain() for call in request.calls], days=request.days, today=request.today
    )
    return DashboardStatsSchema.from_domain(stats)
