"""
API routes for message triage.
"""
from fastapi import APIRouter, Depends

from partsbot.core.schema import ErrorResponse, TriageRequest, TriageResult
from partsbot.services.triage_pipeline import TriagePipeline, get_triage_pipeline

router = APIRouter()


@router.post(
    "/triage",
    response_model=TriageResult,
    responses={400: {"model": ErrorResponse}},
)
async def triage(
    request: TriageRequest,
    pipeline: TriagePipeline = Depends(get_triage_pipeline),
):
    """
    Triage a customer message for the parts chat agent.

    - **message**: User message (e.g., "Is PS11752778 compatible with WDT780SAEM1?")

    Returns the sanitized message with its tokens and entities, the scope
    decision, and, for in-scope messages, the detected intent and the tools
    the orchestrator should run.
    """
    return pipeline.run(request.message)
