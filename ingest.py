from __future__ import annotations

# Purpose: Collect CDA files from disk and report corpus statistics.
# Date: 2026-10-19
# Related tests: tests/test_ingest.py
# AI-assisted: Portions of this file were generated with AI assistance.

"""Command-line batch ingestion for CDA documents."""

import argparse
import logging
import zipfile
from pathlib import Path
from typing import Any, Iterator, Sequence

from services.cda_parser import CDAParser
from services.config import load_config
from services.reporting import render_statistics

logger = logging.getLogger(__name__)

VALID_EXTENSIONS = (".xml", ".cda")
SKIPPED_NAMES = {"metadata.xml"}

FileEntry = tuple[str, bytes]


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for the ingestion workflow."""
    parser = argparse.ArgumentParser(
        description="Extract patient, diagnosis and medication statistics from CDA files."
    )
    parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="CDA files, directories (searched recursively) or ZIP archives.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="YAML settings file. Defaults to config.yaml in the repository.",
    )
    parser.add_argument(
        "--format",
        default="table",
        choices=("table", "json"),
        help="Output format for the statistics. Default is 'table'.",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Number of worker threads used to parse the batch.",
    )
    parser.add_argument(
        "--reference-year",
        type=int,
        help="Override the year used to derive patient ages.",
    )
    parser.add_argument(
        "--log-level",
        default="info",
        choices=("error", "warning", "info", "debug"),
        help=(
            "Logging verbosity. Use 'debug' for detailed troubleshooting output. "
            "Default is 'info', which avoids logging patient-identifying details."
        ),
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        help=(
            "Optional file path to write logs. When omitted, logs emit to the console."
        ),
    )
    return parser.parse_args(argv)


def configure_logging(level_name: str, log_file: Path | None) -> None:
    """Configure logging outputs according to runtime preferences."""
    level = getattr(logging, level_name.upper(), logging.INFO)
    handlers: list[logging.Handler] = []
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    handlers.append(logging.StreamHandler())
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=handlers,
        force=True,
    )


def is_candidate(name: str) -> bool:
    lowered = name.lower()
    if Path(lowered).name in SKIPPED_NAMES:
        return False
    return lowered.endswith(VALID_EXTENSIONS)


def _read_archive(archive_path: Path, max_bytes: int) -> Iterator[FileEntry]:
    """Yield CDA members of a ZIP archive without extracting to disk."""
    try:
        with zipfile.ZipFile(archive_path, "r") as zip_ref:
            for info in zip_ref.infolist():
                if info.is_dir() or not is_candidate(info.filename):
                    continue
                if info.file_size > max_bytes:
                    logger.warning("Skipping %s; larger than %d bytes.", info.filename, max_bytes)
                    continue
                yield f"{archive_path.name}/{info.filename}", zip_ref.read(info)
    except (zipfile.BadZipFile, OSError) as exc:
        logger.warning("Failed to read archive %s: %s", archive_path, exc)


def _read_file(file_path: Path, max_bytes: int) -> Iterator[FileEntry]:
    try:
        size = file_path.stat().st_size
        if size > max_bytes:
            logger.warning("Skipping %s; larger than %d bytes.", file_path.name, max_bytes)
            return
        yield file_path.name, file_path.read_bytes()
    except OSError as exc:
        logger.warning("Unable to read %s: %s", file_path, exc)


def collect_files(paths: Sequence[Path], *, max_bytes: int) -> list[FileEntry]:
    """Gather ``(name, content)`` pairs from files, directories and archives.

    Args:
        paths: Input locations supplied on the command line.
        max_bytes: Files larger than this are skipped with a warning.

    Returns:
        list[FileEntry]: Candidate documents in discovery order.
    """
    entries: list[FileEntry] = []
    for path in paths:
        if path.is_dir():
            for child in sorted(path.rglob("*")):
                if child.is_file() and child.suffix.lower() == ".zip":
                    entries.extend(_read_archive(child, max_bytes))
                elif child.is_file() and is_candidate(child.name):
                    entries.extend(_read_file(child, max_bytes))
        elif path.suffix.lower() == ".zip":
            entries.extend(_read_archive(path, max_bytes))
        elif path.is_file() and is_candidate(path.name):
            entries.extend(_read_file(path, max_bytes))
        else:
            logger.warning("Ignoring %s; not a CDA file, directory or ZIP archive.", path)
    logger.debug("Collected %d candidate documents.", len(entries))
    return entries


def run(args: argparse.Namespace) -> int:
    config: dict[str, Any] = load_config(args.config)
    reference_year = args.reference_year or config["reference_year"]
    parser = CDAParser(reference_year=reference_year, top_n=config["top_n"])

    entries = collect_files(args.paths, max_bytes=config["max_file_size_mb"] * 1024 * 1024)
    if not entries:
        logger.error("No CDA files found in %s.", ", ".join(str(p) for p in args.paths))
        return 2

    stats = parser.parse_batch(entries, max_workers=args.workers)
    if parser.last_batch_errors:
        logger.warning(
            "%d of %d files could not be parsed: %s",
            len(parser.last_batch_errors),
            len(entries),
            ", ".join(sorted(parser.last_batch_errors)),
        )
    print(render_statistics(stats, args.format))
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level, args.log_file)
    return run(args)


if __name__ == "__main__":
    raise SystemExit(main())
