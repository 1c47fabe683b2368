"""Tests for the jar-capacity CLI."""

import json

import pytest

from cli import capacity as capacity_cli

ROWS = [
    {"id": "c1", "date": "2026-10-19", "type": "Rock"},
    {"id": "c2", "date": "2026-10-20", "type": "Rock"},
    {"id": "c3", "date": "2026-10-20", "type": "Pebble"},
]


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    """Leave the root logger alone so caplog keeps working."""
    monkeypatch.setattr(capacity_cli, "configure_logging", lambda *args, **kwargs: None)


@pytest.fixture
def export(tmp_path):
    def _write(data, name="export.json"):
        path = tmp_path / name
        path.write_text(json.dumps(data))
        return str(path)

    return _write


class TestSummary:
    def test_text_summary(self, export, capsys):
        assert capacity_cli.main([export(ROWS), "--week", "2026-10-19"]) == capacity_cli.EXIT_OK
        out = capsys.readouterr().out
        assert "week of 2026-10-19" in out
        assert "31% Full" in out
        assert "Available - 22h remaining" in out
        assert "SHIELD UP" not in out
        assert "Load 10h of 32h real capacity" in out

    def test_bar_has_fixed_width(self, export, capsys):
        capacity_cli.main([export(ROWS), "--week", "2026-10-19"])
        bar_line = next(line for line in capsys.readouterr().out.splitlines() if "% Full" in line)
        bar = bar_line.strip().split("]")[0] + "]"
        assert len(bar) == capacity_cli.BAR_WIDTH + 2
        assert bar.startswith("[~~~~~~~~########oo")

    def test_shield_up(self, export, capsys):
        data = {"profile": {"capacity_hours": 10}, "commitments": ROWS}
        capacity_cli.main([export(data), "--week", "2026-10-19"])
        out = capsys.readouterr().out
        assert "SHIELD UP" in out
        assert "Overloaded" in out

    def test_overloaded_day_marked(self, export, capsys):
        rows = ROWS + [{"id": "c4", "date": "2026-10-20", "type": "Rock"}]
        capacity_cli.main([export(rows), "--week", "2026-10-19"])
        day_line = next(line for line in capsys.readouterr().out.splitlines() if "Tue 20" in line)
        assert "OVERLOAD" in day_line


class TestJsonOutput:
    def test_json(self, export, capsys):
        assert capacity_cli.main([export(ROWS), "--week", "2026-10-21", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["weekly_load"] == 10
        assert data["week_start"] == "2026-10-19"
        assert sum(data["bar_segments"].values()) == pytest.approx(100)

    def test_hours_override(self, export, capsys):
        data = {"profile": {"capacity_hours": 40}, "commitments": ROWS}
        capacity_cli.main([export(data), "--hours", "30", "--json"])
        assert json.loads(capsys.readouterr().out)["nominal_hours"] == 30

    def test_hours_without_profile(self, export, capsys):
        capacity_cli.main([export(ROWS), "--hours", "20", "--json"])
        assert json.loads(capsys.readouterr().out)["real_capacity"] == 16


class TestErrors:
    def test_invalid_commitment(self, export, capsys):
        rows = [{"id": "c1", "date": "2026-10-19", "type": "Boulder"}]
        assert capacity_cli.main([export(rows)]) == capacity_cli.EXIT_INVALID
        assert "error [invalid_commitment]" in capsys.readouterr().err

    def test_invalid_hours_flag(self, export, capsys):
        assert capacity_cli.main([export(ROWS), "--hours", "0"]) == capacity_cli.EXIT_INVALID
        assert "error [invalid_capacity_profile]" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        assert capacity_cli.main([str(tmp_path / "missing.json")]) == capacity_cli.EXIT_INVALID
        assert "error:" in capsys.readouterr().err

    def test_not_json(self, tmp_path, capsys):
        path = tmp_path / "export.json"
        path.write_text("not json")
        assert capacity_cli.main([str(path)]) == capacity_cli.EXIT_INVALID

    @pytest.mark.parametrize(
        "data, message",
        [
            ({"commitments": None}, "commitments must be a list"),
            ({"commitments": {"id": "c1"}}, "commitments must be a list"),
            ({"profile": 40, "commitments": []}, "profile must be an object"),
            (["c1", "c2"], "every commitment must be an object"),
        ],
    )
    def test_malformed_export_sections(self, export, capsys, data, message):
        assert capacity_cli.main([export(data)]) == capacity_cli.EXIT_INVALID
        assert message in capsys.readouterr().err

    def test_malformed_profile_with_hours_flag(self, export, capsys):
        data = {"profile": "forty", "commitments": ROWS}
        assert capacity_cli.main([export(data), "--hours", "30"]) == capacity_cli.EXIT_INVALID
        assert "profile must be an object" in capsys.readouterr().err

    def test_wrong_shape(self, export, capsys):
        assert capacity_cli.main([export("just a string")]) == capacity_cli.EXIT_INVALID
        assert "expected an object" in capsys.readouterr().err

    def test_bad_week_flag_exits(self, export):
        with pytest.raises(SystemExit):
            capacity_cli.main([export(ROWS), "--week", "soon"])
