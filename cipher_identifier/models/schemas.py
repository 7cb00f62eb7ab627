from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Reference Data Schemas
# ============================================================================


class ProfileEntry(BaseModel):
    """Expected value (and optional spread) of each classifying metric."""

    mean: list[float]
    sd: list[float] | None = None


class ProfileTable(BaseModel):
    """On-disk layout of the reference profile table."""

    metrics: list[str]
    profiles: dict[str, ProfileEntry]


class CipherTypeMetadata(BaseModel):
    """Human-facing classification tags for one cipher."""

    types: list[str] = []
    subtypes: list[str] = []
    subtypes2: list[str] = []
    table: list[str] = []
    size: str = ""
    notes: str = ""

    @property
    def primary_type(self) -> str:
        return self.types[0] if self.types else "unknown"


# ============================================================================
# Statistics Schemas
# ============================================================================


class BasicStats(BaseModel):
    """Summary statistics shown alongside an identification."""

    length: int
    unique_chars: int
    missing_letters: str
    ignored_chars: dict[str, int] = Field(default_factory=dict)
    index_of_coincidence: float
    shannon_entropy: float
    binary_random: str
    has_digits: str
    has_hash: str


# ============================================================================
# Identification Schemas
# ============================================================================


class CandidateScore(BaseModel):
    """One ranked cipher candidate."""

    model_config = ConfigDict(from_attributes=True)

    name: str
    score: float = Field(ge=0.0)
    rank: int = Field(ge=1)
    highlighted: bool = False
    cipher_type: str = "unknown"


# ============================================================================
# Benchmark Schemas
# ============================================================================


class BenchmarkRecord(BaseModel):
    """A labelled ciphertext from a benchmark dataset."""

    ciphertype: str
    ciphertext: str


class RecordFailure(BaseModel):
    """A dataset record that could not be evaluated."""

    line: int
    reason: str


# ============================================================================
# Request Schemas
# ============================================================================


class IdentifyRequest(BaseModel):
    """Request schema for /identify endpoint."""

    ciphertext: str = Field(min_length=1, max_length=100_000)
    # Server default (DEFAULT_TOP_N) when omitted
    top_n: int | None = Field(default=None, ge=1, le=100)
    highlight: str | None = None
    candidates: list[str] | None = None


class StatisticsRequest(BaseModel):
    """Request schema for /statistics endpoint."""

    ciphertext: str = Field(min_length=1, max_length=100_000)


class BenchmarkRequest(BaseModel):
    """Request schema for /benchmark endpoint."""

    records: list[BenchmarkRecord]
    # Server default (DEFAULT_TOP_N) when omitted
    top_n: int | None = Field(default=None, ge=1, le=100)


# ============================================================================
# Response Schemas
# ============================================================================


class IdentifyResponse(BaseModel):
    """Response schema for /identify endpoint."""

    id: int | None = None
    basic_stats: BasicStats
    fingerprint: dict[str, float]
    candidates: list[CandidateScore]
    top_n: int
    highlight: str | None = None


class StatisticsResponse(BaseModel):
    """Response schema for /statistics endpoint."""

    basic_stats: BasicStats
    fingerprint: dict[str, float]


class CipherInfo(BaseModel):
    """A cipher known to the reference profile store."""

    name: str
    primary_type: str
    metadata: CipherTypeMetadata
    expected: dict[str, float]


class CiphersResponse(BaseModel):
    """Response schema for /ciphers endpoint."""

    items: list[CipherInfo]
    total: int


class BenchmarkResponse(BaseModel):
    """Response schema for /benchmark endpoint."""

    correct: int = Field(ge=0)
    total: int = Field(ge=0)
    top_n: int
    accuracy: float = Field(ge=0.0, le=100.0)
    failures: list[RecordFailure] = []


class IdentificationHistoryItem(BaseModel):
    """Single history item."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    ciphertext_hash: str
    ciphertext_preview: str
    best_cipher: str | None
    best_score: float | None
    created_at: datetime


class HistoryResponse(BaseModel):
    """Response schema for /history endpoint."""

    items: list[IdentificationHistoryItem]
    total: int
    page: int
    page_size: int


class IdentificationDetailResponse(BaseModel):
    """Full identification detail response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    ciphertext_hash: str
    ciphertext: str
    fingerprint: dict[str, float]
    candidates: list[dict[str, Any]]
    top_n: int
    highlight: str | None
    best_cipher: str | None
    best_score: float | None
    created_at: datetime
    updated_at: datetime


# ============================================================================
# Error Schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)
