from fastapi import APIRouter
from fastapi.concurrency import run_in_threadpool

from cipher_identifier.db import history
from cipher_identifier.dependencies import CatalogDep, DbSessionDep, IdentifierDep
from cipher_identifier.models.schemas import (
    CandidateScore,
    ErrorResponse,
    IdentifyRequest,
    IdentifyResponse,
)

router = APIRouter()


@router.post(
    "",
    response_model=IdentifyResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
        404: {"model": ErrorResponse, "description": "Unknown cipher requested"},
    },
    summary="Identify cipher",
    description=(
        "Fingerprint the ciphertext with the statistical test suite and rank "
        "every known cipher family by distance to its reference profile."
    ),
)
async def identify_cipher(
    request: IdentifyRequest,
    identifier: IdentifierDep,
    catalog: CatalogDep,
    db: DbSessionDep,
) -> IdentifyResponse:
    """
    Identify the most likely ciphers for a ciphertext.

    The pipeline:
    1. Strip whitespace and encode the ciphertext
    2. Run the eleven fingerprint tests
    3. Rank the reference profiles (lower score is better)
    4. Store the ranking in the identification history
    """
    top_n = identifier.top_n if request.top_n is None else request.top_n

    # Fingerprinting is CPU bound; keep it off the event loop
    result = await run_in_threadpool(
        identifier.identify,
        request.ciphertext,
        top_n=top_n,
        highlight=request.highlight,
        candidate_names=request.candidates,
    )

    candidates = [
        CandidateScore(
            name=c.name,
            score=c.score,
            rank=c.rank,
            highlighted=c.highlighted,
            cipher_type=catalog.primary_type(c.name),
        )
        for c in result.candidates
    ]
    fingerprint = result.fingerprint.to_dict()

    record = await history.save_identification(
        db,
        result.text,
        fingerprint,
        candidates,
        top_n=top_n,
        highlight=request.highlight,
    )

    return IdentifyResponse(
        id=record.id,
        basic_stats=result.basic_stats,
        fingerprint=fingerprint,
        candidates=candidates,
        top_n=top_n,
        highlight=request.highlight,
    )
