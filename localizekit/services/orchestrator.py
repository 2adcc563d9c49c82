from __future__ import annotations

import logging
from dataclasses import replace
from datetime import UTC, datetime
from pathlib import Path

from ..config.loader import BatchConfig
from ..logging.error_log import ErrorLogBuffer
from ..logging.sink import DiagnosticSink, LoggerSink
from ..models.diagnostic import DiagnosticRecord
from ..models.documents import ParseResult
from ..models.errors import ParseError
from ..models.processing_result import BatchResult, FileStat
from ..models.source_file import FileStatus, SourceFile
from ..readers.base import RowSource
from ..readers.csv_reader import CsvRowSource
from ..readers.excel_reader import ExcelRowSource
from .parser import parse_table
from .progress import ProgressTracker
from .serialize import serialize

logger = logging.getLogger(__name__)

"""Batch conversion of a directory of localization tables.

process_all scans the configured directory, converts every table with the
configured ParseOptions, writes the documents and aggregates a BatchResult. A
failing file is recorded (error log + FileStat) and never stops the run.
"""

__all__ = [
    "ProcessingError",
    "SUPPORTED_SUFFIXES",
    "scan_source_files",
    "open_row_source",
    "write_outputs",
    "process_all",
]

SUPPORTED_SUFFIXES = {
    ".csv": "csv",
    ".xlsx": "excel",
    ".xls": "excel",
}


class ProcessingError(Exception):
    """Fatal batch error (the run cannot start)."""
    pass


def scan_source_files(directory: Path) -> list[Path]:
    """Scan directory for table files (non-recursive, sorted by name).

    Raises:
        ProcessingError: If directory doesn't exist or can't be read
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")

    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")

    try:
        return sorted(
            p for p in directory.iterdir() if p.is_file() and p.suffix.lower() in SUPPORTED_SUFFIXES
        )
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def open_row_source(path: Path) -> RowSource:
    try:
        data = path.read_bytes()
    except OSError as e:
        raise ParseError.io_error(f"failed to read {path.name}: {e}") from e
    if SUPPORTED_SUFFIXES.get(path.suffix.lower()) == "csv":
        return CsvRowSource(data)
    return ExcelRowSource(data)


def write_outputs(result: ParseResult, path: Path, config: BatchConfig) -> list[Path]:
    """Write the documents converted from ``path``.

    split_languages: ``<output>/<stem>/<lang>.<ext>`` per language
    otherwise:       ``<output>/<stem>.<ext>`` holding the whole result
    """
    fmt = config.options.output_format
    out_dir = Path(config.output_directory)
    written: list[Path] = []
    try:
        if config.split_languages:
            target_dir = out_dir / path.stem
            target_dir.mkdir(parents=True, exist_ok=True)
            for lang in sorted(result.data):
                target = target_dir / f"{lang}.{fmt.extension}"
                target.write_text(serialize(result.data[lang], fmt, indent=2) + "\n", encoding="utf-8")
                written.append(target)
        else:
            out_dir.mkdir(parents=True, exist_ok=True)
            target = out_dir / f"{path.stem}.{fmt.extension}"
            target.write_text(serialize(result.to_dict(), fmt, indent=2) + "\n", encoding="utf-8")
            written.append(target)
    except OSError as e:
        raise ParseError.io_error(f"failed to write output for {path.name}: {e}") from e
    return written


def process_all(config: BatchConfig, sink: DiagnosticSink | None = None) -> BatchResult:
    """Convert every table file of ``config.source_directory``.

    Returns:
        BatchResult with aggregated metrics and file stats

    Raises:
        ProcessingError: the source directory is missing or unreadable
    """
    start_time = datetime.now(UTC)
    error_log = ErrorLogBuffer(Path(config.logs_directory))
    if sink is None:
        sink = LoggerSink()

    file_paths = scan_source_files(Path(config.source_directory))

    file_stats: list[FileStat] = []
    success_count = 0
    failed_count = 0
    total_rows = 0
    languages: set[str] = set()

    if file_paths:
        with ProgressTracker(len(file_paths)) as progress:
            for file_path in file_paths:
                progress.start_file(file_path)

                file_start = datetime.now(UTC)
                source_file = _process_single_file(file_path, config, error_log, sink)
                file_elapsed = (datetime.now(UTC) - file_start).total_seconds()

                if source_file.status == FileStatus.SUCCESS:
                    success_count += 1
                    total_rows += source_file.row_count
                    languages.update(source_file.languages)
                else:
                    failed_count += 1

                progress.finish_file(source_file)

                file_stats.append(
                    FileStat(
                        file_name=source_file.name,
                        status=source_file.status.value,
                        row_count=source_file.row_count,
                        languages=len(source_file.languages),
                        elapsed_seconds=file_elapsed,
                        error_kind=source_file.error_kind,
                    )
                )

    log_path = error_log.flush()
    if log_path is not None:
        logger.info(f"error log written: {log_path}")

    end_time = datetime.now(UTC)
    return BatchResult(
        success_files=success_count,
        failed_files=failed_count,
        total_rows=total_rows,
        languages=len(languages),
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        file_stats=file_stats,
    )


def _process_single_file(
    file_path: Path,
    config: BatchConfig,
    error_log: ErrorLogBuffer,
    sink: DiagnosticSink,
) -> SourceFile:
    """Convert one file; failures are recorded and returned as a FAILED SourceFile."""
    source_file = SourceFile(
        path=file_path,
        name=file_path.name,
        kind=SUPPORTED_SUFFIXES[file_path.suffix.lower()],
    )
    try:
        result = parse_table(open_row_source(file_path), config.options, sink)
        outputs = write_outputs(result, file_path, config)
    except ParseError as e:
        logger.error(f"{file_path.name}: {e}")
        error_log.append(DiagnosticRecord.from_error(file_path.name, e))
        return replace(
            source_file,
            status=FileStatus.FAILED,
            error=e.full_message,
            error_kind=str(e.kind),
        )

    logger.debug(f"{file_path.name}: rows={result.row_count} languages={result.languages}")
    return replace(
        source_file,
        status=FileStatus.SUCCESS,
        row_count=result.row_count,
        languages=list(result.languages),
        outputs=outputs,
    )
