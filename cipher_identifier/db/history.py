"""Queries over the stored identification history."""

import hashlib
from collections.abc import Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from cipher_identifier.core.exceptions import IdentificationNotFoundError
from cipher_identifier.models.database import Identification
from cipher_identifier.models.schemas import CandidateScore

PREVIEW_LENGTH = 100


def ciphertext_hash(text: str) -> str:
    return hashlib.sha256(text.encode()).hexdigest()


def preview(text: str, length: int = PREVIEW_LENGTH) -> str:
    """Leading part of a ciphertext, marked with an ellipsis when cut."""
    return text if len(text) <= length else text[:length] + "..."


async def save_identification(
    session: AsyncSession,
    text: str,
    fingerprint: dict[str, float],
    candidates: Sequence[CandidateScore],
    top_n: int,
    highlight: str | None,
) -> Identification:
    """Store one ranking and return the row with its id assigned."""
    best = candidates[0] if candidates else None
    record = Identification(
        ciphertext_hash=ciphertext_hash(text),
        ciphertext=text,
        fingerprint=fingerprint,
        candidates=[c.model_dump() for c in candidates],
        top_n=top_n,
        highlight=highlight,
        best_cipher=best.name if best else None,
        best_score=best.score if best else None,
    )
    session.add(record)
    await session.commit()
    return record


async def count_identifications(session: AsyncSession) -> int:
    result = await session.execute(select(func.count()).select_from(Identification))
    return result.scalar() or 0


async def list_identifications(
    session: AsyncSession,
    page: int,
    page_size: int,
) -> Sequence[Identification]:
    """One page of identifications, newest first."""
    query = (
        select(Identification)
        .order_by(Identification.created_at.desc(), Identification.id.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
    )
    result = await session.execute(query)
    return result.scalars().all()


async def get_identification(session: AsyncSession, identification_id: int) -> Identification:
    """
    Fetch one identification.

    Raises:
        IdentificationNotFoundError: If no row has this id
    """
    record = await session.get(Identification, identification_id)
    if record is None:
        raise IdentificationNotFoundError(identification_id)
    return record
