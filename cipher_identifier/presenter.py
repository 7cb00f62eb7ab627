"""Terminal rendering of identification results."""

from collections.abc import Sequence

from rich import box
from rich.markup import escape
from rich.table import Table

from cipher_identifier.models.schemas import BasicStats
from cipher_identifier.services.benchmark.runner import BenchmarkReport
from cipher_identifier.services.classification.classifier import RankedCandidate
from cipher_identifier.services.profiles.metadata import CipherCatalog

HIGHLIGHT_STYLE = "bold yellow"


def format_basic_stats(stats: BasicStats) -> Table:
    table = Table(box=box.ASCII, header_style="bold")
    table.add_column("Stat")
    table.add_column("Value")

    ignored = escape("".join(sorted(stats.ignored_chars))) or "-"
    rows = [
        ("Length", str(stats.length)),
        ("Number of unique characters", str(stats.unique_chars)),
        ("Missing letters", stats.missing_letters or "-"),
        ("Ignored characters", ignored),
        ("IoC", f"{stats.index_of_coincidence:.6f}"),
        ("Shannon entropy", f"{stats.shannon_entropy:.6f}"),
        ("Binary random test", stats.binary_random),
        ("Has digits", stats.has_digits),
        ("Has #", stats.has_hash),
    ]
    for row in rows:
        table.add_row(*row)
    return table


def candidates_title(top_n: int) -> str:
    return f"Top {top_n} most likely ciphers (lower is better)"


def format_candidates(
    candidates: Sequence[RankedCandidate],
    catalog: CipherCatalog,
) -> Table:
    """
    Ranking table, best first.

    The highlighted cipher's row is styled; when it ranks outside the top N
    its true rank shows in the first column.
    """
    table = Table(box=box.ASCII, header_style="bold")
    table.add_column("Rank", justify="right")
    table.add_column("Cipher")
    table.add_column("Score", justify="right")
    table.add_column("Cipher type")

    for candidate in candidates:
        table.add_row(
            str(candidate.rank),
            candidate.name,
            f"{candidate.score:.3f}",
            catalog.primary_type(candidate.name),
            style=HIGHLIGHT_STYLE if candidate.highlighted else None,
        )
    return table


def format_report(report: BenchmarkReport) -> str:
    lines = [
        f"{report.correct}/{report.total} correct",
        f"{report.accuracy:.2f}% accuracy",
    ]
    if report.failures:
        lines.append(f"{len(report.failures)} records skipped")
    return "\n".join(lines)
