"""
Generation submission endpoint.

Routes: POST /generations

Dependencies: tenx_cards.application.services, tenx_cards.application.generation_runner
System role: Generation HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, status

from tenx_cards.api.deps import (
    get_current_user_id,
    get_generation_runner,
    get_generation_service,
)
from tenx_cards.application.generation_runner import GenerationRunner
from tenx_cards.application.services import GenerationService
from tenx_cards.models.common import ErrorResponse
from tenx_cards.models.generation import GenerationAcceptedResponse, GenerationRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/generations", tags=["generations"])


@router.post(
    "",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=GenerationAcceptedResponse,
    responses={400: {"model": ErrorResponse}},
)
async def create_generation(
    request: GenerationRequest,
    background_tasks: BackgroundTasks,
    user_id: UUID = Depends(get_current_user_id),
    generation_service: GenerationService = Depends(get_generation_service),
    runner: GenerationRunner = Depends(get_generation_runner),
) -> GenerationAcceptedResponse:
    """
    Start generating flashcards from source text (non-blocking).

    Creates the draft deck and the generation session, schedules the
    background generation and returns immediately. Poll
    /generation-sessions/{generation_session_id} for the outcome.

    Args:
        request: Source text and optional deck name
        background_tasks: FastAPI background tasks
        user_id: Authenticated user
        generation_service: Injected GenerationService
        runner: Background generation runner

    Returns:
        GenerationAcceptedResponse: Session and deck ids, status in_progress
    """
    result = await generation_service.submit_generation(
        user_id=user_id,
        source_text=request.source_text,
        deck_name=request.deck_name,
    )

    background_tasks.add_task(
        runner.run,
        session_id=result["generation_session_id"],
        sanitized_text=result["sanitized_text"],
    )

    logger.info(
        "Generation scheduled",
        extra={"session_id": str(result["generation_session_id"]), "user_id": str(user_id)},
    )
    return GenerationAcceptedResponse(**result)
