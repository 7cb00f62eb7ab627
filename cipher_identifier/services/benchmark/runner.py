"""
Benchmark harness.

Datasets are JSON lines files, one labelled ciphertext per line:

    {"ciphertype": "playfair", "ciphertext": "HELLOWORLD"}

A record counts as correct when its label is among the top N candidates.
Records the identifier rejects (too long, say) are reported as failures and
leave the rest of the run unaffected.
"""

import json
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from cipher_identifier.core.exceptions import DatasetError, ValidationError
from cipher_identifier.models.schemas import BenchmarkRecord, RecordFailure
from cipher_identifier.services.pipeline.identifier import CipherIdentifier, fingerprint_many

logger = logging.getLogger(__name__)


@dataclass
class Dataset:
    """Records parsed from a dataset file and the lines that were rejected."""

    records: list[BenchmarkRecord] = field(default_factory=list)
    # Source line of each record
    lines: list[int] = field(default_factory=list)
    failures: list[RecordFailure] = field(default_factory=list)


@dataclass
class BenchmarkReport:
    """Outcome of a benchmark run."""

    correct: int
    total: int
    top_n: int
    failures: list[RecordFailure] = field(default_factory=list)

    @property
    def accuracy(self) -> float:
        """Percentage of records identified within the top N."""
        if self.total == 0:
            return 0.0
        return 100.0 * self.correct / self.total


def parse_records(lines: Iterable[str]) -> Dataset:
    """
    Parse JSON lines into benchmark records.

    Blank lines are ignored. Lines that are not valid records are reported
    as failures with their 1-based line number.
    """
    dataset = Dataset()
    for number, line in enumerate(lines, start=1):
        line = line.strip()
        if not line:
            continue
        try:
            dataset.records.append(BenchmarkRecord.model_validate(json.loads(line)))
            dataset.lines.append(number)
        except json.JSONDecodeError as e:
            dataset.failures.append(RecordFailure(line=number, reason=f"invalid JSON: {e.msg}"))
        except PydanticValidationError as e:
            reason = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'record'}: {err['msg']}"
                for err in e.errors()
            )
            dataset.failures.append(RecordFailure(line=number, reason=reason))

    for failure in dataset.failures:
        logger.warning("Skipping dataset line %d: %s", failure.line, failure.reason)
    return dataset


def load_dataset(path: str | Path) -> Dataset:
    """
    Read a JSON lines dataset.

    Raises:
        DatasetError: If the file cannot be read
    """
    path = Path(path)
    try:
        with path.open(encoding="utf-8") as f:
            dataset = parse_records(f)
    except OSError as e:
        raise DatasetError(
            f"Cannot read dataset {path}: {e.strerror or e}",
            {"path": str(path)},
        ) from e

    logger.info(
        "Loaded %d records from %s (%d skipped)",
        len(dataset.records), path, len(dataset.failures),
    )
    return dataset


def run_benchmark(
    identifier: CipherIdentifier,
    records: Sequence[BenchmarkRecord],
    top_n: int | None = None,
    failures: Iterable[RecordFailure] = (),
    line_numbers: Sequence[int] | None = None,
) -> BenchmarkReport:
    """
    Measure how often the true cipher is ranked within the top N.

    Args:
        identifier: Identifier holding the profile store
        records: Labelled ciphertexts
        top_n: Rank cut-off for a correct answer; the identifier's default when None
        failures: Rejected records to carry into the report
        line_numbers: Source line of each record; 1-based positions when None

    Returns:
        BenchmarkReport with correct and total counts

    Raises:
        ValueError: If top_n is less than 1
    """
    if top_n is None:
        top_n = identifier.top_n
    if top_n < 1:
        raise ValueError(f"top_n must be at least 1, got {top_n}")
    if line_numbers is None:
        line_numbers = range(1, len(records) + 1)

    failures = list(failures)
    accepted: list[tuple[BenchmarkRecord, str]] = []
    for number, record in zip(line_numbers, records):
        try:
            accepted.append((record, identifier.prepare(record.ciphertext)))
        except ValidationError as e:
            logger.warning("Skipping record %d: %s", number, e.message)
            failures.append(RecordFailure(line=number, reason=e.message))
    failures.sort(key=lambda failure: failure.line)

    vectors = fingerprint_many([text for _, text in accepted], identifier.max_workers)

    correct = 0
    for (record, _), vector in zip(accepted, vectors):
        if record.ciphertype not in identifier.store:
            logger.debug("Label '%s' has no profile and cannot match", record.ciphertype)
            continue
        candidates = identifier.classifier.classify(vector, top_n=top_n)
        if any(candidate.name == record.ciphertype for candidate in candidates):
            correct += 1

    report = BenchmarkReport(
        correct=correct,
        total=len(accepted),
        top_n=top_n,
        failures=failures,
    )
    logger.info(
        "Benchmark: %d/%d correct in top %d (%.2f%%)",
        report.correct, report.total, top_n, report.accuracy,
    )
    return report
