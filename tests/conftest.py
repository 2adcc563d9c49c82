# Shared pytest fixtures
from __future__ import annotations
import io
import tempfile
from pathlib import Path

import pandas as pd
import pytest

from localizekit.logging.init import reset_logging


SAMPLE_CSV = """key,en,ko
common.greeting,Hello,안녕하세요
common.farewell,Goodbye,안녕히 가세요
menu.file,File,파일
"""


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "data").mkdir()
        (p / "out").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("LOCALIZEKIT_CONFIG", raising=False)
        yield p


@pytest.fixture()
def sample_csv() -> str:
    return SAMPLE_CSV


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
output_directory: ./out
separator: "."
nested: true
process_escapes: true
output_format: json
split_languages: true
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "localizekit.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


def make_xlsx(rows: list[list], sheet_name: str = "Sheet1") -> bytes:
    """Build workbook bytes whose first sheet holds ``rows`` verbatim (row 0 = header)."""
    buf = io.BytesIO()
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        pd.DataFrame(rows).to_excel(writer, sheet_name=sheet_name, index=False, header=False)
    return buf.getvalue()


@pytest.fixture()
def xlsx_factory():
    return make_xlsx
