"""Command-line interface for donordedupe.

Provides CLI commands for the three duplicate detection modes.
"""

import importlib.metadata
import json
import sys
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click

from donordedupe.audit import AuditLogger
from donordedupe.engine import EngineResult
from donordedupe.utils import calculate_file_sha256

__all__ = ["cli"]

try:
    __version__ = importlib.metadata.version("donordedupe")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.1.0"  # Fallback for development


def _common_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the options shared by every detection command."""
    options = [
        click.option(
            "--donors",
            "-d",
            "donors_path",
            type=click.Path(exists=True, dir_okay=False),
            required=True,
            help="Donor snapshot file (.csv, .json, .jsonl)",
        ),
        click.option(
            "--min-score",
            type=float,
            default=None,
            help="Minimum score in [0, 100] (default: 50)",
        ),
        click.option(
            "--output",
            "-o",
            type=click.Path(dir_okay=False),
            default=None,
            help="Write the JSON result to this file instead of stdout",
        ),
        click.option(
            "--log",
            "log_path",
            type=click.Path(dir_okay=False),
            default=None,
            help="Append JSONL audit events to this file",
        ),
        click.option(
            "--verbose",
            "-v",
            is_flag=True,
            help="Enable verbose output",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _emit(result: EngineResult, output: str | None, logger: AuditLogger | None) -> None:
    text = json.dumps(result.to_dict(), ensure_ascii=False, indent=2)
    if output is None:
        click.echo(text)
        return

    output_path = Path(output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(text + "\n", encoding="utf-8")
    if logger:
        logger.artifact_written(
            path=str(output_path),
            sha256=calculate_file_sha256(output_path),
            bytes_written=output_path.stat().st_size,
        )


def _run(
    command: str,
    parameters: dict[str, Any],
    output: str | None,
    log_path: str | None,
    verbose: bool,
    call: Callable[[AuditLogger | None], EngineResult],
) -> EngineResult:
    """Run one detection call with optional audit logging, then report it."""
    if verbose:
        click.echo(f"Running {command}...", err=True)
        for name, value in parameters.items():
            click.echo(f"  {name}: {value}", err=True)

    start = time.perf_counter()
    logger = AuditLogger(Path(log_path)) if log_path else None
    try:
        if logger:
            logger.run_started(command=sys.argv, parameters=parameters)
        result = call(logger)
        if result.success:
            _emit(result, output, logger)
        if logger:
            logger.run_finished(
                status="success" if result.success else "failed",
                duration_seconds=time.perf_counter() - start,
            )
    except Exception as e:
        click.secho(f"✗ Error: {e}", fg="red", err=True)
        if verbose:
            import traceback

            click.echo(traceback.format_exc(), err=True)
        sys.exit(1)
    finally:
        if logger:
            logger.close()

    if not result.success:
        kind = result.error_kind.value if result.error_kind else "error"
        click.secho(f"✗ {kind}: {result.error_message}", fg="red", err=True)
        sys.exit(1)

    if verbose:
        elapsed = time.perf_counter() - start
        click.echo(f"✓ {command} completed in {elapsed:.2f}s", err=True)
        if output:
            click.echo(f"  Output: {output}", err=True)
    return result


@click.group()
@click.version_option(version=__version__, prog_name="donordedupe")
def cli() -> None:
    """Fuzzy duplicate detection for donor records.

    Use 'donordedupe COMMAND --help' for command-specific help.
    """


@cli.command()
@click.argument("record_id")
@_common_options
def find(
    record_id: str,
    donors_path: str,
    min_score: float | None,
    output: str | None,
    log_path: str | None,
    verbose: bool,
) -> None:
    """Find the probable duplicates of the donor RECORD_ID.

    Compares the donor against every other donor of the snapshot and
    prints up to 20 matches, best first.

    Examples
    --------
        donordedupe find d-0042 --donors donors.csv
        donordedupe find d-0042 -d donors.json --min-score 70 -o dupes.json
    """
    from donordedupe.api import find_duplicates

    result = _run(
        "find",
        {"record_id": record_id, "donors": donors_path, "min_score": min_score},
        output,
        log_path,
        verbose,
        lambda logger: find_duplicates(
            donors_path, record_id, min_score=min_score, logger=logger
        ),
    )
    if output and not verbose:
        click.secho(f"✓ Found {result.value.total_found} duplicate(s)", fg="green")


@cli.command()
@_common_options
def scan(
    donors_path: str,
    min_score: float | None,
    output: str | None,
    log_path: str | None,
    verbose: bool,
) -> None:
    """Scan every pair of donors for duplicates.

    Cost grows with the square of the snapshot size; up to 100 pairs are
    reported, best first.

    Examples
    --------
        donordedupe scan --donors donors.csv
        donordedupe scan -d donors.jsonl --min-score 80 --log audit.jsonl
    """
    from donordedupe.api import scan_duplicates

    result = _run(
        "scan",
        {"donors": donors_path, "min_score": min_score},
        output,
        log_path,
        verbose,
        lambda logger: scan_duplicates(donors_path, min_score=min_score, logger=logger),
    )
    if output and not verbose:
        click.secho(
            f"✓ Scanned {result.value.total_records_scanned} donors, "
            f"{result.value.total_found} duplicate pair(s)",
            fg="green",
        )


@cli.command()
@click.argument("import_path", type=click.Path(exists=True, dir_okay=False))
@_common_options
def check(
    import_path: str,
    donors_path: str,
    min_score: float | None,
    output: str | None,
    log_path: str | None,
    verbose: bool,
) -> None:
    """Check the rows of IMPORT_PATH against stored donors.

    Import files may use English or French column headers. Only rows with
    probable duplicates are reported, each with its top 5 matches.

    Examples
    --------
        donordedupe check import.csv --donors donors.csv
        donordedupe check import.json -d donors.csv -o precheck.json
    """
    from donordedupe.api import check_import

    result = _run(
        "check",
        {"import": import_path, "donors": donors_path, "min_score": min_score},
        output,
        log_path,
        verbose,
        lambda logger: check_import(
            import_path, donors_path, min_score=min_score, logger=logger
        ),
    )
    if output and not verbose:
        click.secho(
            f"✓ {result.value.duplicates_found} of {result.value.total_checked} "
            "import row(s) have probable duplicates",
            fg="green",
        )


if __name__ == "__main__":
    cli()
