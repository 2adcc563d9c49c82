from __future__ import annotations

import json
import os
from pathlib import Path

import yaml

from localizekit.cli.__main__ import main as cli_main


def test_batch_converts_csv_and_excel(write_config: Path, temp_workdir: Path, sample_csv: str, xlsx_factory, capsys):
    data = temp_workdir / "data"
    (data / "web.csv").write_text(sample_csv, encoding="utf-8")
    (data / "mobile.xlsx").write_bytes(
        xlsx_factory([["key", "en", "ja"], ["tab.home", "Home", "ホーム"], ["tab.count", 3, None]])
    )

    code = cli_main(["batch"])
    assert code == 0

    web_ko = json.loads((temp_workdir / "out" / "web" / "ko.json").read_text(encoding="utf-8"))
    assert web_ko == {
        "common": {"farewell": "안녕히 가세요", "greeting": "안녕하세요"},
        "menu": {"file": "파일"},
    }
    mobile_en = json.loads((temp_workdir / "out" / "mobile" / "en.json").read_text(encoding="utf-8"))
    assert mobile_en == {"tab": {"count": "3", "home": "Home"}}
    mobile_ja = json.loads((temp_workdir / "out" / "mobile" / "ja.json").read_text(encoding="utf-8"))
    assert mobile_ja == {"tab": {"home": "ホーム"}}

    out = capsys.readouterr().out
    assert "SUMMARY files=2/2 success=2 failed=0 rows=5 languages=3" in out
    assert not (temp_workdir / "logs").exists()


def test_batch_yaml_flat_output(temp_workdir: Path, sample_csv: str):
    (temp_workdir / "localizekit.yml").write_text(
        "source_directory: data\noutput_directory: out\nnested: false\n"
        "output_format: yaml\nsplit_languages: false\n",
        encoding="utf-8",
    )
    (temp_workdir / "data" / "web.csv").write_text(sample_csv, encoding="utf-8")
    assert cli_main(["batch"]) == 0
    doc = yaml.safe_load((temp_workdir / "out" / "web.yaml").read_text(encoding="utf-8"))
    assert doc["languages"] == ["en", "ko"]
    assert doc["data"]["en"]["common.greeting"] == "Hello"
    assert doc["row_count"] == 3


def test_batch_partial_failure_writes_error_log(write_config: Path, temp_workdir: Path, sample_csv: str, capsys):
    data = temp_workdir / "data"
    (data / "good.csv").write_text(sample_csv, encoding="utf-8")
    (data / "mixed.csv").write_text("key,en\na.b,x\nc/d,y\n", encoding="utf-8")

    assert cli_main(["batch"]) == 2

    (log_file,) = list((temp_workdir / "logs").glob("errors-*.log"))
    (record,) = [json.loads(l) for l in log_file.read_text(encoding="utf-8").splitlines()]
    assert record["file"] == "mixed.csv"
    assert record["error_type"] == "MIXED_SEPARATORS"
    assert record["row"] == 3
    assert (temp_workdir / "out" / "good" / "en.json").exists()
    assert not (temp_workdir / "out" / "mixed").exists()

    out = capsys.readouterr().out
    assert "SUMMARY files=2/2 success=1 failed=1 rows=3 languages=2" in out


def test_batch_unknown_language_warns(write_config: Path, temp_workdir: Path, capsys):
    (temp_workdir / "data" / "x.csv").write_text("key,en,xx\na,A,B\n", encoding="utf-8")
    assert cli_main(["batch"]) == 0
    assert "WARN Unknown language code 'xx'" in capsys.readouterr().out
    assert (temp_workdir / "out" / "x" / "xx.json").exists()


def test_dotenv_supplies_config_path(temp_workdir: Path, sample_config_yaml: str, sample_csv: str, monkeypatch):
    # load_dotenv writes into os.environ; keep it away from other tests
    monkeypatch.setattr(os, "environ", dict(os.environ))
    (temp_workdir / "conf").mkdir()
    (temp_workdir / "conf" / "batch.yml").write_text(sample_config_yaml, encoding="utf-8")
    (temp_workdir / ".env").write_text("LOCALIZEKIT_CONFIG=conf/batch.yml\n", encoding="utf-8")
    (temp_workdir / "data" / "a.csv").write_text(sample_csv, encoding="utf-8")
    assert cli_main(["batch"]) == 0
    assert (temp_workdir / "out" / "a" / "en.json").exists()
