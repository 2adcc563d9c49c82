from __future__ import annotations

import json
from pathlib import Path

import pytest

from localizekit.config.loader import BatchConfig
from localizekit.logging.sink import WarningBuffer
from localizekit.models.options import OutputFormat, ParseOptions
from localizekit.readers import CsvRowSource, ExcelRowSource
from localizekit.services.orchestrator import (
    ProcessingError,
    open_row_source,
    process_all,
    scan_source_files,
)


def _config(root: Path, **kwargs) -> BatchConfig:
    return BatchConfig(
        source_directory=str(root / "data"),
        output_directory=str(root / "out"),
        options=kwargs.pop("options", ParseOptions()),
        logs_directory=str(root / "logs"),
        **kwargs,
    )


def test_scan_source_files_filters_and_sorts(temp_workdir: Path):
    data = temp_workdir / "data"
    for name in ["b.csv", "a.xlsx", "c.xls", "notes.txt", "D.CSV"]:
        (data / name).write_bytes(b"")
    (data / "sub").mkdir()
    (data / "sub" / "x.csv").write_bytes(b"")
    assert [p.name for p in scan_source_files(data)] == ["D.CSV", "a.xlsx", "b.csv", "c.xls"]


def test_scan_missing_directory(temp_workdir: Path):
    with pytest.raises(ProcessingError):
        scan_source_files(temp_workdir / "missing")


def test_scan_file_instead_of_directory(temp_workdir: Path):
    f = temp_workdir / "file.csv"
    f.write_text("key,en\n", encoding="utf-8")
    with pytest.raises(ProcessingError):
        scan_source_files(f)


def test_open_row_source_by_suffix(temp_workdir: Path, xlsx_factory):
    csv_path = temp_workdir / "data" / "a.csv"
    csv_path.write_text("key,en\n", encoding="utf-8")
    xlsx_path = temp_workdir / "data" / "b.xlsx"
    xlsx_path.write_bytes(xlsx_factory([["key", "en"]]))
    assert isinstance(open_row_source(csv_path), CsvRowSource)
    assert isinstance(open_row_source(xlsx_path), ExcelRowSource)


def test_process_all_empty_directory(temp_workdir: Path):
    result = process_all(_config(temp_workdir))
    assert (result.success_files, result.failed_files, result.total_rows) == (0, 0, 0)
    assert result.file_stats == []
    assert not (temp_workdir / "logs").exists()


def test_process_all_writes_split_documents(temp_workdir: Path, sample_csv: str):
    (temp_workdir / "data" / "app.csv").write_text(sample_csv, encoding="utf-8")
    result = process_all(_config(temp_workdir))
    assert result.success_files == 1
    assert result.total_rows == 3
    assert result.languages == 2
    en = json.loads((temp_workdir / "out" / "app" / "en.json").read_text(encoding="utf-8"))
    assert en["common"]["greeting"] == "Hello"
    ko_text = (temp_workdir / "out" / "app" / "ko.json").read_text(encoding="utf-8")
    assert "안녕하세요" in ko_text


def test_process_all_single_document_yaml(temp_workdir: Path, sample_csv: str):
    (temp_workdir / "data" / "app.csv").write_text(sample_csv, encoding="utf-8")
    options = ParseOptions(output_format=OutputFormat.YAML, nested=False)
    process_all(_config(temp_workdir, options=options, split_languages=False))
    text = (temp_workdir / "out" / "app.yaml").read_text(encoding="utf-8")
    assert "common.greeting: Hello" in text
    assert "row_count: 3" in text


def test_process_all_records_failures_and_continues(temp_workdir: Path, sample_csv: str):
    data = temp_workdir / "data"
    (data / "bad.csv").write_text("id,en\na,A\n", encoding="utf-8")
    (data / "good.csv").write_text(sample_csv, encoding="utf-8")
    result = process_all(_config(temp_workdir))

    assert (result.success_files, result.failed_files) == (1, 1)
    stats = {s.file_name: s for s in result.file_stats}
    assert stats["bad.csv"].status == "failed"
    assert stats["bad.csv"].error_kind == "INVALID_KEY_COLUMN"
    assert stats["good.csv"].status == "success"

    logs = list((temp_workdir / "logs").glob("errors-*.log"))
    assert len(logs) == 1
    record = json.loads(logs[0].read_text(encoding="utf-8").strip())
    assert record["file"] == "bad.csv"
    assert record["row"] == 1
    assert record["error_type"] == "INVALID_KEY_COLUMN"


def test_process_all_passes_sink(temp_workdir: Path):
    (temp_workdir / "data" / "x.csv").write_text("key,xx\na,A\n", encoding="utf-8")
    sink = WarningBuffer()
    result = process_all(_config(temp_workdir), sink=sink)
    assert result.success_files == 1
    assert len(sink) == 1
    assert "xx" in sink.messages[0]


def test_process_all_keeps_empty_warning_buffer(temp_workdir: Path, monkeypatch):
    # an empty buffer has len 0 and must still be used as the sink
    (temp_workdir / "data" / "y.csv").write_text("key,zz\na,A\n", encoding="utf-8")
    sink = WarningBuffer()
    assert not sink
    forwarded: list[str] = []
    monkeypatch.setattr("localizekit.services.orchestrator.LoggerSink.warn", lambda self, msg: forwarded.append(msg))

    process_all(_config(temp_workdir), sink=sink)

    assert [m for m in sink.messages if "zz" in m]
    assert forwarded == []


def test_process_all_missing_directory(temp_workdir: Path):
    cfg = BatchConfig(
        source_directory=str(temp_workdir / "missing"),
        output_directory=str(temp_workdir / "out"),
        options=ParseOptions(),
    )
    with pytest.raises(ProcessingError):
        process_all(cfg)
