"""
Tests for the batch conversion entry point and the Excel export.
"""

import json

import pandas as pd
import pytest

import main
from utils import OperationLogger

GOOD_HTML = """
<table>
  <tr><td>Match Score Item</td><td>Blue</td><td>Red</td></tr>
  <tr><td>Teams</td><td>1<br>2<br>3</td><td>4<br>5<br>6</td></tr>
  <tr><td>Final Score</td><td>100</td><td>80</td></tr>
  <tr><td>Ranking Points</td><td>3</td><td>1</td></tr>
</table>
"""

BAD_HTML = GOOD_HTML.replace("<td>80</td>", "<td>eighty</td>")


@pytest.fixture
def report_dir(tmp_path):
    d = tmp_path / "reports"
    d.mkdir()
    (d / "Q1.html").write_text(GOOD_HTML, encoding="utf-8")
    (d / "Q2.html").write_text(BAD_HTML, encoding="utf-8")
    (d / "notes.txt").write_text("not a report", encoding="utf-8")
    return d


@pytest.fixture(autouse=True)
def no_log_file(monkeypatch):
    monkeypatch.setattr(main, "setup_logging", lambda **kwargs: None)


class TestCollectReportPaths:

    def test_directory_uses_glob(self, report_dir):
        paths = main.collect_report_paths([str(report_dir)])
        assert [p.name for p in paths] == ["Q1.html", "Q2.html"]

    def test_files_kept_as_given(self, report_dir):
        paths = main.collect_report_paths([str(report_dir / "Q2.html"), str(report_dir / "Q1.html")])
        assert [p.name for p in paths] == ["Q2.html", "Q1.html"]


class TestConvertReports:

    def test_writes_json_and_collects_failures(self, report_dir, tmp_path):
        out_dir = tmp_path / "out"
        logger = OperationLogger(verbosity=2, print_output=False)

        result = main.convert_reports(
            main.collect_report_paths([str(report_dir)]),
            out_dir=str(out_dir),
            logger=logger,
        )

        assert len(result["reports"]) == 1
        assert list(result["failed"]) == ["Q2.html"]
        assert result["failed"]["Q2.html"].startswith("Parse error (1):")

        written = json.loads((out_dir / "Q1.json").read_text(encoding="utf-8"))
        assert set(written) == {"alliances", "score_breakdown"}
        assert written["alliances"]["blue"]["teams"] == ["frc1", "frc2", "frc3"]
        assert written["score_breakdown"]["red"]["adjustPoints"] == 80
        assert not (out_dir / "Q2.json").exists()

        totals = logger.totals()
        assert totals["success"] == 1
        assert totals["failed"] == 1
        assert totals["warning"] == 1
        assert logger.processed == 2

    def test_json_next_to_report_by_default(self, report_dir):
        main.convert_reports([report_dir / "Q1.html"])
        assert (report_dir / "Q1.json").exists()

    def test_missing_report_is_skipped(self, tmp_path):
        logger = OperationLogger(print_output=False)
        result = main.convert_reports([tmp_path / "missing.html"], logger=logger)
        assert result["reports"] == []
        assert result["failed"] == {}
        assert logger.totals()["skipped"] == 1


class TestMain:

    def test_exit_code_and_excel(self, report_dir, tmp_path):
        excel = tmp_path / "breakdowns.xlsx"

        code = main.main([str(report_dir), "--out-dir", str(tmp_path / "out"), "--excel", str(excel)])

        assert code == 1
        df = pd.read_excel(excel, sheet_name="Breakdowns")
        assert list(df["alliance"]) == ["blue", "red"]
        assert list(df["score"]) == [100, 80]
        failed = pd.read_excel(excel, sheet_name="Failed")
        assert list(failed["source"]) == ["Q2.html"]
        logs = pd.read_excel(excel, sheet_name="All_Logs")
        assert list(logs["status"]) == ["success", "warning", "error"]
        assert list(logs["report"]) == ["Q1.html", "Q2.html", "Q2.html"]
        assert logs["row"].iloc[1] == "final score"

    def test_playoff(self, report_dir, tmp_path):
        out_dir = tmp_path / "out"
        code = main.main([str(report_dir / "Q1.html"), "--playoff", "--out-dir", str(out_dir)])

        assert code == 0
        written = json.loads((out_dir / "Q1.json").read_text(encoding="utf-8"))
        assert written["score_breakdown"]["blue"]["rp"] == 0
        assert written["score_breakdown"]["blue"]["cargoBonusRankingPoint"] is False
