"""Command-line interface for litdedupe.

Provides CLI commands for batch deduplication, incremental matching and
pairwise inspection.
"""

import json
import sys
from pathlib import Path

import click

from litdedupe.audit import AuditLogger, generate_run_id, get_package_version
from litdedupe.clustering import DEFAULT_THRESHOLD

__all__ = ["cli"]

EVENTS_LOG_NAME = "events.jsonl"

threshold_option = click.option(
    "--threshold",
    "-t",
    type=click.FloatRange(0.0, 1.0),
    default=DEFAULT_THRESHOLD,
    show_default=True,
    help="Minimum similarity for two records to count as duplicates",
)
output_dir_option = click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False),
    default="out",
    help="Output directory for results (default: out)",
)
strict_option = click.option(
    "--strict",
    is_flag=True,
    help="Fail on the first invalid input line instead of skipping it",
)
verbose_option = click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)


def _open_logger(output_dir: Path) -> AuditLogger:
    return AuditLogger(generate_run_id(), output_dir / EVENTS_LOG_NAME)


def _echo_outputs(output_files: dict[str, str]) -> None:
    click.echo("\nOutputs:", err=True)
    for name, path in output_files.items():
        click.echo(f"  {name}: {path}", err=True)


@click.group()
@click.version_option(version=get_package_version(), prog_name="litdedupe")
def cli() -> None:
    """Duplicate detection for bibliographic references.

    Use 'litdedupe COMMAND --help' for command-specific help.
    """


@cli.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@output_dir_option
@threshold_option
@click.option(
    "--no-merge",
    is_flag=True,
    help="Only detect duplicate groups; do not write merged records",
)
@click.option(
    "--workers",
    "-w",
    type=click.IntRange(min=1),
    default=None,
    help="Score candidates on a thread pool of this size",
)
@strict_option
@verbose_option
def deduplicate(
    input_path: str,
    output_dir: str,
    threshold: float,
    no_merge: bool,
    workers: int | None,
    strict: bool,
    verbose: bool,
) -> None:
    """Find and merge duplicate records in a JSONL file.

    Records are grouped around anchors: each group holds one record plus
    the later records that match it directly. Every group is merged into
    one record unless --no-merge is given.

    Outputs and an events.jsonl audit log are written to OUTPUT_DIR.

    Examples
    --------
        litdedupe deduplicate records.jsonl
        litdedupe deduplicate records.jsonl -o results --threshold 0.85
        litdedupe deduplicate records.jsonl --no-merge --workers 4
    """
    from litdedupe.engine import DetectionConfig, run_detection

    output_dir_obj = Path(output_dir)

    if verbose:
        click.echo("Starting duplicate detection...", err=True)
        click.echo(f"  Input: {input_path}", err=True)
        click.echo(f"  Output: {output_dir}", err=True)
        click.echo(f"  Threshold: {threshold}", err=True)
        click.echo(f"  Merge: {'no' if no_merge else 'yes'}", err=True)

    try:
        config = DetectionConfig(
            threshold=threshold,
            output_dir=output_dir_obj,
            merge_duplicates=not no_merge,
            max_workers=workers,
            strict=strict,
        )

        with _open_logger(output_dir_obj) as logger:
            result = run_detection(input_path=Path(input_path), config=config, logger=logger)

        if not result.success:
            click.secho(f"✗ Detection failed: {result.error_message}", fg="red", err=True)
            sys.exit(1)

        if verbose:
            click.echo("\n✓ Detection completed successfully!", err=True)
            click.echo("\nResults:", err=True)
            click.echo(f"  Total records: {result.total_records}", err=True)
            click.echo(f"  Rejected lines: {result.rejected_records}", err=True)
            click.echo(f"  Duplicate groups: {result.duplicate_groups}", err=True)
            click.echo(f"  Records in groups: {result.duplicate_records}", err=True)
            click.echo(f"  Unique records: {result.unique_records}", err=True)
            _echo_outputs(result.output_files)
        else:
            click.secho(
                f"✓ Processed {result.total_records} records "
                f"({result.duplicate_groups} duplicate groups, "
                f"{result.output_records} records after deduplication)",
                fg="green",
            )

    except Exception as e:
        click.secho(f"✗ Error: {e}", fg="red", err=True)
        sys.exit(1)


@cli.command()
@click.argument("new_path", type=click.Path(exists=True, dir_okay=False))
@click.argument("pool_path", type=click.Path(exists=True, dir_okay=False))
@output_dir_option
@threshold_option
@strict_option
@verbose_option
def match(
    new_path: str,
    pool_path: str,
    output_dir: str,
    threshold: float,
    strict: bool,
    verbose: bool,
) -> None:
    """Match newly imported records against an existing pool.

    Each record in NEW_PATH is scored against every record in POOL_PATH.
    Matches are written to OUTPUT_DIR/detections.jsonl, best match first.

    Examples
    --------
        litdedupe match new.jsonl library.jsonl
        litdedupe match new.jsonl library.jsonl --threshold 0.9 -o review
    """
    from litdedupe.engine import DetectionConfig, run_matching

    output_dir_obj = Path(output_dir)

    if verbose:
        click.echo("Starting incremental matching...", err=True)
        click.echo(f"  New records: {new_path}", err=True)
        click.echo(f"  Pool: {pool_path}", err=True)
        click.echo(f"  Threshold: {threshold}", err=True)

    try:
        config = DetectionConfig(threshold=threshold, output_dir=output_dir_obj, strict=strict)

        with _open_logger(output_dir_obj) as logger:
            result = run_matching(Path(new_path), Path(pool_path), config=config, logger=logger)

        if not result.success:
            click.secho(f"✗ Matching failed: {result.error_message}", fg="red", err=True)
            sys.exit(1)

        if verbose:
            click.echo("\n✓ Matching completed successfully!", err=True)
            click.echo("\nResults:", err=True)
            click.echo(f"  New records: {result.new_records}", err=True)
            click.echo(f"  Pool records: {result.pool_records}", err=True)
            click.echo(f"  Rejected lines: {result.rejected_records}", err=True)
            click.echo(f"  Detections: {result.detections}", err=True)
            _echo_outputs(result.output_files)
        else:
            click.secho(
                f"✓ Found {result.detections} potential duplicates "
                f"for {result.records_with_matches} of {result.new_records} new records",
                fg="green",
            )

    except Exception as e:
        click.secho(f"✗ Error: {e}", fg="red", err=True)
        sys.exit(1)


@cli.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@click.argument("id_a")
@click.argument("id_b")
def compare(input_path: str, id_a: str, id_b: str) -> None:
    """Show the similarity breakdown of two records.

    ID_A and ID_B are record ids from INPUT_PATH. Prints field scores,
    matched fields, the overall score and the strictest detection rule
    the pair satisfies, as JSON.

    Examples
    --------
        litdedupe compare records.jsonl rec-1 rec-7
    """
    from litdedupe import parse_file
    from litdedupe.rules import classify_pair
    from litdedupe.scoring import compare_records

    try:
        records = {record.id: record for record in parse_file(input_path, strict=False)}

        missing = [rid for rid in (id_a, id_b) if rid not in records]
        if missing:
            click.secho(f"✗ Unknown record id(s): {', '.join(missing)}", fg="red", err=True)
            sys.exit(1)

        record_a = records[id_a]
        record_b = records[id_b]
        similarity = compare_records(record_a, record_b)

        output = {
            "record_a": id_a,
            "record_b": id_b,
            **similarity.to_dict(),
            "rule": classify_pair(record_a, record_b),
        }
        click.echo(json.dumps(output, indent=2, ensure_ascii=False))

    except Exception as e:
        click.secho(f"✗ Error: {e}", fg="red", err=True)
        sys.exit(1)


if __name__ == "__main__":
    cli()
