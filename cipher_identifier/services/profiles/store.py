import json
import logging
import math
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path

import numpy as np
from pydantic import ValidationError as PydanticValidationError

from cipher_identifier.core.exceptions import ProfileStoreError, UnknownCipherError
from cipher_identifier.models.schemas import ProfileEntry, ProfileTable
from cipher_identifier.services.statistics.fingerprint import (
    CLASSIFYING_METRICS,
    FingerprintVector,
)

logger = logging.getLogger(__name__)

RESOURCES_DIR = Path(__file__).resolve().parents[2] / "resources"
DEFAULT_PROFILES_PATH = RESOURCES_DIR / "cipher_profiles.json"


@dataclass(frozen=True)
class CipherProfile:
    """Reference fingerprint for one cipher family."""

    name: str
    mean: tuple[float, ...]
    sd: tuple[float, ...] | None = None

    def expected(self, metric: str) -> float:
        return self.mean[CLASSIFYING_METRICS.index(metric)]

    def spread(self, metric: str) -> float | None:
        if self.sd is None:
            return None
        return self.sd[CLASSIFYING_METRICS.index(metric)]

    def as_dict(self) -> dict[str, float]:
        """Expected values keyed by metric name."""
        return dict(zip(CLASSIFYING_METRICS, self.mean))


class ProfileStore:
    """
    Read-only table of cipher profiles.

    The store is built once and handed to the classifier; its iteration
    order is the default candidate order, which also settles ties.
    """

    def __init__(self, profiles: Iterable[CipherProfile]):
        self._profiles: dict[str, CipherProfile] = {}
        for profile in profiles:
            if profile.name in self._profiles:
                raise ProfileStoreError("<memory>", f"duplicate profile '{profile.name}'")
            self._profiles[profile.name] = profile

    def lookup(self, cipher_name: str) -> CipherProfile:
        """
        Get the profile for a cipher.

        Raises:
            UnknownCipherError: If the cipher has no profile
        """
        try:
            return self._profiles[cipher_name]
        except KeyError:
            raise UnknownCipherError(cipher_name) from None

    def all_names(self) -> list[str]:
        """All cipher names in table order."""
        return list(self._profiles)

    def __contains__(self, cipher_name: object) -> bool:
        return cipher_name in self._profiles

    def __len__(self) -> int:
        return len(self._profiles)

    def __iter__(self) -> Iterator[CipherProfile]:
        return iter(self._profiles.values())

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @classmethod
    def from_table(cls, table: ProfileTable, source: str = "<memory>") -> "ProfileStore":
        """Build a store from a parsed profile table, checking its shape."""
        if tuple(table.metrics) != CLASSIFYING_METRICS:
            raise ProfileStoreError(
                source,
                f"metrics must be {list(CLASSIFYING_METRICS)}, got {table.metrics}",
            )
        if not table.profiles:
            raise ProfileStoreError(source, "no profiles defined")

        profiles = [
            _profile_from_entry(name, entry, source)
            for name, entry in table.profiles.items()
        ]
        store = cls(profiles)
        logger.info("Loaded %d cipher profiles from %s", len(store), source)
        return store

    @classmethod
    def from_dict(cls, data: Mapping, source: str = "<memory>") -> "ProfileStore":
        """Build a store from the resource layout held in memory."""
        try:
            table = ProfileTable.model_validate(data)
        except PydanticValidationError as e:
            raise ProfileStoreError(source, str(e)) from e
        return cls.from_table(table, source)

    @classmethod
    def from_json(cls, path: str | Path) -> "ProfileStore":
        """
        Load a store from a JSON profile table.

        Raises:
            ProfileStoreError: If the file is missing or malformed
        """
        path = Path(path)
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ProfileStoreError(str(path), e.strerror or str(e)) from e

        try:
            table = ProfileTable.model_validate_json(raw)
        except PydanticValidationError as e:
            raise ProfileStoreError(str(path), str(e)) from e
        return cls.from_table(table, str(path))

    @classmethod
    def load_default(cls) -> "ProfileStore":
        """Load the packaged reference table."""
        return cls.from_json(DEFAULT_PROFILES_PATH)

    # ------------------------------------------------------------------
    # Calibration
    # ------------------------------------------------------------------

    @classmethod
    def from_samples(
        cls,
        samples: Iterable[tuple[str, FingerprintVector]],
    ) -> "ProfileStore":
        """
        Build profiles by averaging labelled fingerprints.

        Each label gets the population mean and standard deviation of its
        samples. Labels keep the order in which they first appear.
        """
        grouped: dict[str, list[tuple[float, ...]]] = {}
        for label, vector in samples:
            grouped.setdefault(label, []).append(vector.classifying_values())

        if not grouped:
            raise ProfileStoreError("<samples>", "no samples to calibrate from")

        profiles = []
        for label, rows in grouped.items():
            matrix = np.asarray(rows, dtype=np.float64)
            profiles.append(CipherProfile(
                name=label,
                mean=tuple(float(v) for v in matrix.mean(axis=0)),
                sd=tuple(float(v) for v in matrix.std(axis=0)),
            ))
            logger.debug("Calibrated %s from %d samples", label, len(rows))

        return cls(profiles)

    def to_table(self) -> ProfileTable:
        """Export the store in the resource layout."""
        return ProfileTable(
            metrics=list(CLASSIFYING_METRICS),
            profiles={
                profile.name: ProfileEntry(
                    mean=[round(v, 4) for v in profile.mean],
                    sd=[round(v, 4) for v in profile.sd] if profile.sd is not None else None,
                )
                for profile in self
            },
        )

    def to_json(self, path: str | Path) -> None:
        """Write the store to a JSON profile table."""
        data = self.to_table().model_dump(exclude_none=True)
        Path(path).write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")


def _profile_from_entry(name: str, entry: ProfileEntry, source: str) -> CipherProfile:
    """Validate one resource entry and turn it into a profile."""
    expected_len = len(CLASSIFYING_METRICS)

    if len(entry.mean) != expected_len:
        raise ProfileStoreError(
            source, f"profile '{name}' has {len(entry.mean)} means, expected {expected_len}"
        )
    if not all(math.isfinite(v) for v in entry.mean):
        raise ProfileStoreError(source, f"profile '{name}' has non-finite means")

    sd = None
    if entry.sd is not None:
        if len(entry.sd) != expected_len:
            raise ProfileStoreError(
                source, f"profile '{name}' has {len(entry.sd)} deviations, expected {expected_len}"
            )
        if not all(math.isfinite(v) and v >= 0 for v in entry.sd):
            raise ProfileStoreError(source, f"profile '{name}' has invalid deviations")
        sd = tuple(entry.sd)

    return CipherProfile(name=name, mean=tuple(entry.mean), sd=sd)
