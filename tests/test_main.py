import json

import pytest

from circuitgrow.main import main


class TestDump:
    def test_prints_one_json_line_per_level(self, capsys) -> None:
        assert main(["dump", "4", "4", "--levels", "3", "--seed", "5"]) == 0
        lines = capsys.readouterr().out.strip().splitlines()
        assert 1 <= len(lines) <= 3
        first = json.loads(lines[0])
        assert first["level"] == 0
        assert len(first["segments"]) == 4
        assert "trace" not in first

    def test_seeded_dumps_repeat(self, capsys) -> None:
        main(["dump", "12", "8", "--seed", "3"])
        a = capsys.readouterr().out
        main(["dump", "12", "8", "--seed", "3"])
        b = capsys.readouterr().out
        assert a == b

    def test_trace_output(self, capsys) -> None:
        main(["dump", "6", "6", "--levels", "1", "--seed", "1", "--trace"])
        line = json.loads(capsys.readouterr().out)
        assert [n["orientation"] for n in line["trace"]] == ["Up", "Right", "Down", "Left"]


class TestCheck:
    def test_summary(self, capsys) -> None:
        assert main(["check"]) == 0
        out = capsys.readouterr().out
        assert out.startswith("split:")
        assert "Up=0.5" in out

    def test_bad_tuning_exits_with_2(self, tmp_path, capsys) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("growth:\n  split_chance: 3\n", encoding="utf-8")
        assert main(["check", "--tuning", str(path)]) == 2
        assert "Config error" in capsys.readouterr().err

    @pytest.mark.parametrize(
        "viewer",
        ["speed: fast", "circuit_color: [a, b, c]", "fps: fast"],
    )
    def test_bad_viewer_setting_exits_with_2(self, tmp_path, capsys, viewer: str) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text(f"viewer:\n  {viewer}\n", encoding="utf-8")
        assert main(["check", "--tuning", str(path)]) == 2
        assert "Config error: viewer." in capsys.readouterr().err
