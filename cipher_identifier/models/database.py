from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Float, Integer, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all database models."""

    pass


class Identification(Base):
    """Stores identification history and rankings."""

    __tablename__ = "identifications"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    ciphertext_hash: Mapped[str] = mapped_column(String(64), index=True)
    ciphertext: Mapped[str] = mapped_column(Text)

    # Fingerprint keyed by metric name
    fingerprint: Mapped[dict[str, float]] = mapped_column(JSON, default=dict)

    # Ranked candidates as returned to the caller
    candidates: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)
    top_n: Mapped[int] = mapped_column(Integer, default=5)
    highlight: Mapped[str | None] = mapped_column(String(64), nullable=True)

    best_cipher: Mapped[str | None] = mapped_column(String(64), nullable=True)
    best_score: Mapped[float | None] = mapped_column(Float, nullable=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )
