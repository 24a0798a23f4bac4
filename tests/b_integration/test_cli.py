"""Integration tests for the measured command-line interface."""

from __future__ import annotations

import re
from pathlib import Path

import pytest

from measured.cli import create_parser, format_elapsed, main

LINE_RE = re.compile(r"^(?P<label>\S+): (?P<count>\d+) evals in (?P<ns>\d+) ns$")

SUITE_YAML = """\
name: cli-suite
count: 20
loops:
  - name: new-dict
    target: builtins:dict
  - name: sum-small
    target: builtins:sum
    state: [1, 2, 3]
    count: 3
  - name: len-of-list
    target: builtins:len
    state_fn: builtins:list
    enabled: false
"""


def timing_lines(output: str) -> list[re.Match[str]]:
    return [m for line in output.splitlines() if (m := LINE_RE.match(line))]


@pytest.fixture
def suite_file(tmp_path: Path) -> Path:
    path = tmp_path / "suite.yaml"
    path.write_text(SUITE_YAML)
    return path


class TestFormatElapsed:
    """Tests for format_elapsed function."""

    def test_format(self) -> None:
        assert format_elapsed("fn", 10, 1234) == "fn: 10 evals in 1234 ns"

    def test_negative_count_shown_as_zero(self) -> None:
        assert format_elapsed("fn", -4, 0) == "fn: 0 evals in 0 ns"


class TestRunCommand:
    """Tests for `measured run`."""

    def test_run_target(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["run", "builtins:dict", "-n", "100"]) == 0

        (match,) = timing_lines(capsys.readouterr().out)
        assert match["label"] == "builtins:dict"
        assert match["count"] == "100"
        assert int(match["ns"]) >= 0

    def test_run_with_state_fn(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["run", "builtins:len", "--state-fn", "builtins:list", "-n", "5"]) == 0
        assert len(timing_lines(capsys.readouterr().out)) == 1

    def test_zero_count(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["run", "builtins:dict", "-n", "0"]) == 0
        (match,) = timing_lines(capsys.readouterr().out)
        assert match["count"] == "0"

    def test_bad_target(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["run", "builtins:nope"]) == 1
        assert "Error:" in capsys.readouterr().out

    def test_bad_state_fn(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["run", "builtins:len", "--state-fn", "nomodule"]) == 1
        assert "module:attribute" in capsys.readouterr().out

    def test_workload_failure_propagates(self) -> None:
        """A failing benchmark body is not turned into an exit code."""
        with pytest.raises(TypeError):
            main(["run", "builtins:len", "-n", "3"])

    def test_verbose_logging(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level("DEBUG", logger="measured"):
            assert main(["-v", "run", "builtins:dict", "-n", "2"]) == 0
        assert "Running builtins:dict x2" in caplog.text


class TestSuiteCommand:
    """Tests for `measured suite`."""

    def test_runs_enabled_loops(
        self, suite_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main(["suite", str(suite_file)]) == 0

        out = capsys.readouterr().out
        assert "Suite: cli-suite" in out
        matches = timing_lines(out)
        assert [(m["label"], m["count"]) for m in matches] == [
            ("new-dict", "20"),
            ("sum-small", "3"),
        ]

    def test_single_loop_even_if_disabled(
        self, suite_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main(["suite", str(suite_file), "--loop", "len-of-list"]) == 0
        (match,) = timing_lines(capsys.readouterr().out)
        assert match["label"] == "len-of-list"

    def test_count_override(
        self, suite_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main(["suite", str(suite_file), "-n", "7"]) == 0
        counts = [m["count"] for m in timing_lines(capsys.readouterr().out)]
        assert counts == ["7", "7"]

    def test_unknown_loop(
        self, suite_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main(["suite", str(suite_file), "--loop", "nope"]) == 1
        assert "not found" in capsys.readouterr().out

    def test_missing_file(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main(["suite", str(tmp_path / "absent.yaml")]) == 1
        assert "not found" in capsys.readouterr().out

    def test_invalid_suite(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("name: bad\n")
        assert main(["suite", str(path)]) == 1
        assert "Error loading suite configuration" in capsys.readouterr().out

    def test_unresolvable_target(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = tmp_path / "suite.yaml"
        path.write_text("loops:\n  - name: x\n    target: builtins:nope\n")
        assert main(["suite", str(path)]) == 1
        out = capsys.readouterr().out
        assert "no attribute 'nope'" in out
        assert "Suite:" not in out

    def test_directory_path(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main(["suite", str(tmp_path)]) == 1
        assert "not found" in capsys.readouterr().out

    def test_not_utf8(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = tmp_path / "suite.yaml"
        path.write_bytes(b"name: caf\xe9\nloops: []\n")
        assert main(["suite", str(path)]) == 1
        assert "not valid UTF-8" in capsys.readouterr().out

    @pytest.mark.parametrize("state_fn", ["5", "[builtins:list]"])
    def test_non_string_state_fn(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str], state_fn: str
    ) -> None:
        path = tmp_path / "suite.yaml"
        path.write_text(
            "loops:\n"
            "  - name: x\n"
            "    target: builtins:len\n"
            f"    state_fn: {state_fn}\n"
        )
        assert main(["suite", str(path)]) == 1
        assert "state_fn must be a 'module:attribute' string" in capsys.readouterr().out

    def test_quoted_enabled_rejected(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = tmp_path / "suite.yaml"
        path.write_text(
            "loops:\n"
            "  - name: x\n"
            "    target: builtins:len\n"
            '    enabled: "false"\n'
        )
        assert main(["suite", str(path)]) == 1
        assert "enabled must be true or false" in capsys.readouterr().out


class TestParser:
    """Tests for argument parsing."""

    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([]) == 0
        assert "usage: measured" in capsys.readouterr().out

    def test_bad_count_is_usage_error(self) -> None:
        with pytest.raises(SystemExit) as excinfo:
            create_parser().parse_args(["run", "builtins:dict", "-n", "many"])
        assert excinfo.value.code == 2
