from fastapi import APIRouter, Query

from cipher_identifier.db import history
from cipher_identifier.dependencies import DbSessionDep
from cipher_identifier.models.schemas import (
    ErrorResponse,
    HistoryResponse,
    IdentificationDetailResponse,
    IdentificationHistoryItem,
)

router = APIRouter()


@router.get(
    "",
    response_model=HistoryResponse,
    summary="Get identification history",
    description="Previous identifications, most recent first.",
)
async def list_history(
    db: DbSessionDep,
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(20, ge=1, le=100, description="Items per page"),
) -> HistoryResponse:
    records = await history.list_identifications(db, page, page_size)
    items = [
        IdentificationHistoryItem(
            id=record.id,
            ciphertext_hash=record.ciphertext_hash,
            ciphertext_preview=history.preview(record.ciphertext),
            best_cipher=record.best_cipher,
            best_score=record.best_score,
            created_at=record.created_at,
        )
        for record in records
    ]
    return HistoryResponse(
        items=items,
        total=await history.count_identifications(db),
        page=page,
        page_size=page_size,
    )


@router.get(
    "/{identification_id}",
    response_model=IdentificationDetailResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Identification not found"},
    },
    summary="Get specific identification",
    description="Full ranking and fingerprint of one stored identification.",
)
async def get_identification(
    identification_id: int,
    db: DbSessionDep,
) -> IdentificationDetailResponse:
    record = await history.get_identification(db, identification_id)
    return IdentificationDetailResponse.model_validate(record)
