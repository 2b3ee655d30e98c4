"""Integration tests for the chainlist command.

These run `main()` end to end with standard input replaced by an
in-memory stream, checking printed results, exit status, and that every
path leaves no heap blocks behind.
"""

from __future__ import annotations

import io
from pathlib import Path

import pytest

import chainlist.cli
from chainlist.cli import main
from chainlist.heap import Heap


@pytest.fixture
def tracked_heaps(monkeypatch: pytest.MonkeyPatch) -> list[Heap]:
    """Record every heap the command creates."""
    heaps: list[Heap] = []

    def make_heap(limit: int | None = None) -> Heap:
        heap = Heap(limit)
        heaps.append(heap)
        return heap

    monkeypatch.setattr(chainlist.cli, "Heap", make_heap)
    return heaps


def run(monkeypatch: pytest.MonkeyPatch, argv: list[str], stdin: str) -> int:
    monkeypatch.setattr("sys.stdin", io.StringIO(stdin))
    return main(argv)


class TestMaxMin:
    def test_max(self, monkeypatch, capsys, tracked_heaps) -> None:
        assert run(monkeypatch, ["max"], "3\n11\n") == 0
        assert capsys.readouterr().out == "Max number: 11\n"
        assert tracked_heaps[0].live_blocks == 0

    def test_min_with_count(self, monkeypatch, capsys) -> None:
        assert run(monkeypatch, ["--count", "4", "min"], "3\n-2\n8\n0\n") == 0
        assert capsys.readouterr().out == "Min number: -2\n"

    def test_non_numeric_input(self, monkeypatch, capsys, tracked_heaps) -> None:
        assert run(monkeypatch, ["max"], "3\nabc\n") == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == "chainlist: Invalid argument\n"
        assert tracked_heaps[0].live_blocks == 0

    def test_short_input(self, monkeypatch, capsys, tracked_heaps) -> None:
        assert run(monkeypatch, ["--count", "3", "max"], "1\n2\n") == 1
        assert capsys.readouterr().err == "chainlist: Input/output error\n"
        assert tracked_heaps[0].live_blocks == 0

    def test_heap_limit(self, monkeypatch, capsys) -> None:
        assert run(monkeypatch, ["--heap-limit", "2", "max"], "1\n2\n") == 1
        assert capsys.readouterr().err == "chainlist: Cannot allocate memory\n"


class TestDedupShow:
    def test_dedup(self, monkeypatch, capsys, tracked_heaps) -> None:
        stdin = "5\n3\n5\n2\n3\n5\n"
        assert run(monkeypatch, ["--count", "6", "dedup"], stdin) == 0
        lines = capsys.readouterr().out.splitlines()
        values = [line.split(",")[0].removeprefix("{ value: ") for line in lines]
        assert values == ["5", "3", "2"]
        assert tracked_heaps[0].live_blocks == 0

    def test_show_escapes_newlines(self, monkeypatch, capsys) -> None:
        assert run(monkeypatch, ["show"], "hi\nyo\n") == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[0].startswith('{ value: "hi\\n", next: 0x')
        assert lines[1] == '{ value: "yo\\n", next: (nil) }'


class TestConfigFile:
    def test_config_sets_count(self, monkeypatch, capsys, tmp_path: Path) -> None:
        config = tmp_path / "chainlist.yaml"
        config.write_text("count: 3\nmax_input_size: 8\n")
        assert run(monkeypatch, ["--config", str(config), "max"], "1\n9\n4\n") == 0
        assert capsys.readouterr().out == "Max number: 9\n"

    def test_bad_config(self, monkeypatch, capsys, tmp_path: Path) -> None:
        config = tmp_path / "chainlist.yaml"
        config.write_text("count: -1\n")
        assert run(monkeypatch, ["--config", str(config), "max"], "1\n") == 1
        assert "Error loading configuration" in capsys.readouterr().err

    def test_missing_config(self, monkeypatch, capsys, tmp_path: Path) -> None:
        missing = tmp_path / "absent.yaml"
        assert run(monkeypatch, ["--config", str(missing), "max"], "1\n") == 1

    def test_ownership_mode_is_not_configurable(
        self, monkeypatch, capsys, tmp_path: Path, tracked_heaps
    ) -> None:
        config = tmp_path / "chainlist.yaml"
        config.write_text("mode: weak\n")
        assert run(monkeypatch, ["--config", str(config), "dedup"], "1\n1\n") == 1
        assert "unknown setting(s): mode" in capsys.readouterr().err
        assert tracked_heaps == []


@pytest.mark.parametrize("command", ["max", "min", "dedup", "show"])
@pytest.mark.parametrize(
    "settings",
    ["", "count: 3\n", "count: 4\n", "heap_limit: 5\n", "max_input_size: 3\n"],
)
def test_no_blocks_left_behind(
    monkeypatch, capsys, tmp_path: Path, tracked_heaps, settings: str, command: str
) -> None:
    """Whatever the outcome, the command returns every heap block."""
    config = tmp_path / "chainlist.yaml"
    config.write_text(settings)
    run(monkeypatch, ["--config", str(config), command], "5\n5\nabc\n")
    capsys.readouterr()
    assert len(tracked_heaps) == 1
    assert tracked_heaps[0].live_blocks == 0


def test_no_command_prints_help(capsys) -> None:
    assert main([]) == 0
    assert "usage: chainlist" in capsys.readouterr().out
