"""Accuracy benchmark over labelled ciphertext datasets."""

from cipher_identifier.services.benchmark.runner import (
    BenchmarkReport,
    Dataset,
    load_dataset,
    parse_records,
    run_benchmark,
)

__all__ = [
    "BenchmarkReport",
    "Dataset",
    "load_dataset",
    "parse_records",
    "run_benchmark",
]
