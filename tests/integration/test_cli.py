"""End-to-end tests of the polyop command line."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from polyop import __version__
from polyop.cli.app import app
from polyop.io import read_polygon

runner = CliRunner()


def write_square(path: Path, x: float, y: float, size: float) -> Path:
    ring = [[x, y], [x + size, y], [x + size, y + size], [x, y + size]]
    path.write_text(json.dumps({"rings": [ring]}), encoding="utf-8")
    return path


@pytest.fixture
def squares(tmp_path):
    """Overlapping squares (0,0)-(4,4) and (2,2)-(6,6)."""
    a = write_square(tmp_path / "a.json", 0, 0, 4)
    b = write_square(tmp_path / "b.json", 2, 2, 4)
    return a, b


class TestOperationCommands:
    """Tests for intersect, union, xor and difference."""

    def test_intersect_to_file(self, squares, tmp_path):
        a, b = squares
        out = tmp_path / "out.json"

        result = runner.invoke(app, ["intersect", str(a), str(b), "-o", str(out), "-q"])

        assert result.exit_code == 0
        assert read_polygon(out).area == pytest.approx(4.0)

    def test_union_to_stdout(self, squares):
        a, b = squares

        result = runner.invoke(app, ["union", str(a), str(b)])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert len(data["rings"]) == 1
        assert len(data["rings"][0]) == 8

    @pytest.mark.parametrize(
        ("command", "area"),
        [("intersect", 4.0), ("union", 28.0), ("xor", 24.0), ("difference", 12.0)],
    )
    def test_every_operation(self, squares, tmp_path, command, area):
        a, b = squares
        out = tmp_path / f"{command}.json"

        result = runner.invoke(app, [command, str(a), str(b), "-o", str(out)])

        assert result.exit_code == 0
        assert "complete" in result.stdout
        assert read_polygon(out).area == pytest.approx(area)

    def test_geojson_output(self, squares, tmp_path):
        a, b = squares
        out = tmp_path / "out.geojson"

        result = runner.invoke(app, ["xor", str(a), str(b), "-o", str(out), "-f", "geojson", "-q"])

        assert result.exit_code == 0
        data = json.loads(out.read_text(encoding="utf-8"))
        assert data["type"] == "MultiPolygon"
        assert len(data["coordinates"]) == 2

    def test_empty_result(self, tmp_path):
        a = write_square(tmp_path / "a.json", 0, 0, 1)
        b = write_square(tmp_path / "b.json", 5, 5, 1)

        result = runner.invoke(app, ["intersect", str(a), str(b)])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"rings": []}

    def test_log_file(self, squares, tmp_path):
        a, b = squares
        log_file = tmp_path / "polyop.log"

        result = runner.invoke(
            app, ["union", str(a), str(b), "-o", str(tmp_path / "out.json"), "--log-file", str(log_file), "-q"]
        )

        assert result.exit_code == 0
        assert "Operation complete" in log_file.read_text(encoding="utf-8")

    def test_missing_input(self, squares, tmp_path):
        a, _ = squares
        result = runner.invoke(app, ["union", str(a), str(tmp_path / "missing.json")])
        assert result.exit_code == 1

    def test_invalid_format(self, squares):
        a, b = squares
        result = runner.invoke(app, ["union", str(a), str(b), "-f", "svg"])
        assert result.exit_code == 1


class TestInspectionCommands:
    """Tests for crossings and info."""

    def test_crossings_json(self, squares):
        a, b = squares

        result = runner.invoke(app, ["crossings", str(a), str(b), "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [entry["point"] for entry in data] == [[4.0, 2.0], [2.0, 4.0]]
        assert data[0]["a"]["kind"] == "ENTRY"

    def test_crossings_table(self, squares):
        a, b = squares
        result = runner.invoke(app, ["crossings", str(a), str(b)])
        assert result.exit_code == 0
        assert "2 crossings" in result.stdout

    def test_info(self, squares):
        a, _ = squares
        result = runner.invoke(app, ["info", str(a)])
        assert result.exit_code == 0
        assert "1 outer" in result.stdout

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout
