"""Tests for the command-line interface."""

import pathlib
from unittest import mock

import orjson
import pytest

from bundle_size.cli import get_parser, main
from bundle_size.models import PageSize
from bundle_size.sizes import load_snapshot, save_snapshot


class TestArgs:
    """Test cases for argument parsing."""

    def test_measure_defaults(self) -> None:
        """Test the measure subcommand defaults."""
        args = get_parser().parse_args(["measure"])
        assert args.command == "measure"
        assert args.working_dir == "."
        assert args.kind == "static"
        assert args.output is None

    def test_compare_requires_current(self) -> None:
        """Test that compare fails without a current snapshot."""
        with pytest.raises(SystemExit):
            get_parser().parse_args(["compare", "--name", "Pages"])

    def test_no_command(self) -> None:
        """Test that running without a subcommand prints help and fails."""
        with mock.patch("bundle_size.cli.argparse.ArgumentParser.print_help") as print_help:
            assert main([]) == 1
        print_help.assert_called_once()


def test_measure_writes_snapshot(build_dir: pathlib.Path, tmp_path: pathlib.Path) -> None:
    """Test measuring a build into a snapshot file."""
    output = tmp_path / "out" / "static.json"

    assert main(["measure", "--working-dir", "app", "--output", str(output)]) == 0

    pages = [entry.page for entry in load_snapshot(output)]
    assert pages == ["/", "/_app", "/about", "/dashboard/page"]


def test_measure_dynamic_to_stdout(build_dir: pathlib.Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Test measuring dynamic chunks to stdout."""
    assert main(["measure", "-w", "app", "--kind", "dynamic"]) == 0

    content = orjson.loads(capsys.readouterr().out)
    assert [item["page"] for item in content] == ["components/Chart.tsx -> ./ChartImpl"]


def test_measure_missing_build(tmp_path: pathlib.Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that a missing build exits with status 1."""
    monkeypatch.chdir(tmp_path)
    assert main(["measure", "-w", "app"]) == 1


def test_compare_writes_report(tmp_path: pathlib.Path) -> None:
    """Test comparing two snapshots into a markdown file."""
    reference = tmp_path / "reference.json"
    current = tmp_path / "current.json"
    output = tmp_path / "report.md"
    save_snapshot([PageSize("/a", 1000)], reference)
    save_snapshot([PageSize("/b", 1000)], current)

    code = main(["compare", "-n", "Pages", "-r", str(reference), "-c", str(current), "-o", str(output)])

    assert code == 0
    assert output.read_text(encoding="utf-8") == (
        "| Pages | Size (gzipped) | Diff |\n"
        "| --- | --- | --- |\n"
        "| `/b` | 1000 B | added |\n"
        "| `/a` | no change | removed |\n"
    )


def test_compare_without_reference(tmp_path: pathlib.Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Test that a first build lists every page."""
    current = tmp_path / "current.json"
    save_snapshot([PageSize("/a", 500)], current)

    assert main(["compare", "-n", "Pages", "-c", str(current)]) == 0

    assert capsys.readouterr().out == "| Pages | Size (gzipped) |\n| --- | --- |\n| `/a` | 500 B |\n"


def test_compare_nothing_to_report(tmp_path: pathlib.Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Test that nothing is written when there are no significant changes."""
    reference = tmp_path / "reference.json"
    current = tmp_path / "current.json"
    output = tmp_path / "report.md"
    save_snapshot([PageSize("/a", 100)], reference)
    save_snapshot([PageSize("/a", 100)], current)

    assert main(["compare", "-n", "Pages", "-r", str(reference), "-c", str(current), "-o", str(output)]) == 0

    assert not output.exists()
    assert capsys.readouterr().out == ""


def test_compare_invalid_snapshot(tmp_path: pathlib.Path) -> None:
    """Test that an unreadable snapshot exits with status 1."""
    current = tmp_path / "current.json"
    current.write_text("not json", encoding="utf-8")
    assert main(["compare", "-n", "Pages", "-c", str(current)]) == 1


def test_table(tmp_path: pathlib.Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Test rendering a single snapshot."""
    snapshot = tmp_path / "sizes.json"
    save_snapshot([PageSize("/", 1536)], snapshot)

    assert main(["table", "-n", "Static pages", str(snapshot)]) == 0

    assert capsys.readouterr().out == "| Static pages | Size (gzipped) |\n| --- | --- |\n| `/` | 1.5 KB |\n"
