from fastapi import APIRouter
from fastapi.concurrency import run_in_threadpool

from cipher_identifier.dependencies import IdentifierDep
from cipher_identifier.models.schemas import (
    BenchmarkRequest,
    BenchmarkResponse,
    ErrorResponse,
)
from cipher_identifier.services.benchmark.runner import run_benchmark

router = APIRouter()


@router.post(
    "",
    response_model=BenchmarkResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
    },
    summary="Run benchmark",
    description=(
        "Count how often each labelled cipher is ranked within the top N. "
        "Records the identifier rejects are listed as failures."
    ),
)
async def benchmark(
    request: BenchmarkRequest,
    identifier: IdentifierDep,
) -> BenchmarkResponse:
    """Score a batch of labelled ciphertexts."""
    report = await run_in_threadpool(
        run_benchmark, identifier, request.records, top_n=request.top_n
    )

    return BenchmarkResponse(
        correct=report.correct,
        total=report.total,
        top_n=report.top_n,
        accuracy=report.accuracy,
        failures=report.failures,
    )
