"""
Tests for reading FMS HTML reports and their .extrajson side files.
"""

import json

import pytest

from exceptions import ReportParseError, ReportReadError
from models.alliance import Side
from parsers.read_fms_report import extract_rows, extra_info_path, load_extra_info, parse_report_file

REPORT_HTML = """
<html><body>
<table>
  <tr><th>Match Score Item</th><th>Blue</th><th>Red</th></tr>
  <tr><td colspan="3">Autonomous</td></tr>
  <tr><td>Teams</td><td>254<br>1678<br>971</td><td>118<br/>
      148<br/>
      2056</td></tr>
  <tr><td>Mobility</td><td>Yes<br>Yes<br>No</td><td>No<br>No<br>No</td></tr>
  <tr><td>Game Piece Count</td><td> 3 </td><td>2</td></tr>
  <tr><td>Charge Station</td><td>Docked<br>None<br>None</td><td>None<br>None<br>None</td></tr>
  <tr><td>Autonomous Points</td><td>21</td><td>9</td></tr>
  <tr><td colspan="3">Teleop</td></tr>
  <tr><td>Game Piece Count</td><td>7</td><td>6</td></tr>
  <tr><td>Charge Station</td><td>Park<br>Docked<br>Docked</td><td>None<br>Park<br>None</td></tr>
  <tr><td>Teleop Points</td><td>50</td><td>40</td></tr>
  <tr><td>Fouls/Techs Committed</td><td><span>1</span> • <span>0</span></td><td>2 • 1</td></tr>
  <tr><td>Foul Points</td><td>10</td><td>5</td></tr>
  <tr><td>Final Score</td><td>81</td><td>59</td></tr>
  <tr><td>Ranking Points</td><td>2</td><td>0</td></tr>
</table>
</body></html>
"""


@pytest.fixture
def report_file(tmp_path):
    path = tmp_path / "Qualification 1.html"
    path.write_text(REPORT_HTML, encoding="utf-8")
    return path


class TestExtractRows:

    def test_rows_in_document_order(self):
        rows = extract_rows(REPORT_HTML)
        assert [r.row_name for r in rows][:4] == ["match score item", "autonomous", "teams", "mobility"]
        assert rows[1].cells == ()

    def test_robot_lists_split_on_line_breaks(self):
        rows = extract_rows(REPORT_HTML)
        teams = next(r for r in rows if r.row_name == "teams")
        assert teams.side_text(Side.BLUE) == "254\n1678\n971"
        assert teams.side_text(Side.RED) == "118\n148\n2056"

    def test_nested_markup(self):
        rows = extract_rows(REPORT_HTML)
        fouls = next(r for r in rows if r.row_name == "fouls/techs committed")
        assert fouls.side_text(Side.BLUE).replace("\n", "") == "1•0"


class TestExtraInfo:

    def test_path(self, report_file):
        assert extra_info_path(report_file).name == "Qualification 1.extrajson"

    def test_missing_file_gives_defaults(self, report_file):
        extra = load_extra_info(report_file)
        assert extra[Side.BLUE].dqs == []
        assert extra[Side.RED].surrogates == []
        assert extra[Side.RED].g405_penalty is False

    def test_reads_file(self, report_file):
        extra_info_path(report_file).write_text(json.dumps({
            "blue": {"dqs": ["frc971"], "surrogates": [], "g405_penalty": True, "h111_penalty": False},
        }), encoding="utf-8")

        extra = load_extra_info(report_file)
        assert extra[Side.BLUE].dqs == ["frc971"]
        assert extra[Side.BLUE].g405_penalty is True
        assert extra[Side.RED].dqs == []

    def test_bad_json(self, report_file):
        extra_info_path(report_file).write_text("{not json", encoding="utf-8")
        with pytest.raises(ReportReadError) as exc_info:
            load_extra_info(report_file)
        assert "extrajson" in exc_info.value.message

    def test_not_an_object(self, report_file):
        extra_info_path(report_file).write_text("[]", encoding="utf-8")
        with pytest.raises(ReportReadError):
            load_extra_info(report_file)


class TestParseReportFile:

    def test_parses_report(self, report_file):
        extra_info_path(report_file).write_text(json.dumps({
            "red": {"surrogates": ["frc148"]},
        }), encoding="utf-8")

        d = parse_report_file(report_file).to_dict()

        assert d["alliances"]["blue"]["teams"] == ["frc254", "frc1678", "frc971"]
        assert d["alliances"]["red"]["surrogates"] == ["frc148"]
        assert d["alliances"]["red"]["score"] == 59
        blue = d["score_breakdown"]["blue"]
        red = d["score_breakdown"]["red"]
        assert blue["autoGamePieceCount"] == 3
        assert blue["teleopGamePieceCount"] == 7
        assert blue["autoChargeStationRobot1"] == "Docked"
        assert red["endGameChargeStationRobot2"] == "Park"
        assert blue["foulCount"] == 1
        assert red["techFoulCount"] == 1
        assert blue["adjustPoints"] == 0
        assert red["adjustPoints"] == 5

    def test_playoff_flag(self, report_file):
        d = parse_report_file(report_file, playoff=True).to_dict()
        assert d["score_breakdown"]["blue"]["rp"] == 0

    def test_missing_file(self, tmp_path):
        with pytest.raises(ReportReadError):
            parse_report_file(tmp_path / "nope.html")

    def test_no_table(self, tmp_path):
        path = tmp_path / "empty.html"
        path.write_text("<html><body><p>nothing</p></body></html>", encoding="utf-8")
        with pytest.raises(ReportReadError) as exc_info:
            parse_report_file(path)
        assert "no table rows" in exc_info.value.message

    def test_invalid_utf8(self, tmp_path):
        path = tmp_path / "damaged.html"
        path.write_bytes(REPORT_HTML.encode("utf-8").replace(b"Final Score", b"Final \xffScore"))
        with pytest.raises(ReportReadError) as exc_info:
            parse_report_file(path)
        assert "UTF-8" in exc_info.value.message

    def test_bad_row(self, tmp_path):
        path = tmp_path / "bad.html"
        path.write_text(REPORT_HTML.replace("<td>81</td>", "<td>8l</td>"), encoding="utf-8")
        with pytest.raises(ReportParseError) as exc_info:
            parse_report_file(path)
        assert exc_info.value.errors[0].row_name == "final score"
        assert exc_info.value.errors[0].side == "blue"
