from fastapi import APIRouter
from fastapi.concurrency import run_in_threadpool

from cipher_identifier.dependencies import IdentifierDep
from cipher_identifier.models.schemas import (
    ErrorResponse,
    StatisticsRequest,
    StatisticsResponse,
)
from cipher_identifier.services.pipeline.identifier import basic_stats
from cipher_identifier.services.statistics.fingerprint import run_all

router = APIRouter()


@router.post(
    "",
    response_model=StatisticsResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
    },
    summary="Compute statistics",
    description="Run the fingerprint test suite without ranking any ciphers.",
)
async def compute_statistics(
    request: StatisticsRequest,
    identifier: IdentifierDep,
) -> StatisticsResponse:
    """Basic stats and the full fingerprint of a ciphertext."""
    text = identifier.prepare(request.ciphertext)

    return StatisticsResponse(
        basic_stats=basic_stats(text),
        fingerprint=await run_in_threadpool(run_all, text),
    )
