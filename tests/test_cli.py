from pathlib import Path

import pytest
from typer.testing import CliRunner

from svgready.cli import app

runner = CliRunner()


@pytest.fixture()
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "config.toml"
    path.write_text(
        f'[runtime]\nlog_file = "{(tmp_path / "log.jsonl").as_posix()}"\n', encoding="utf-8"
    )
    return path


def test_convert_prints_outputs(tmp_path: Path, config_file: Path) -> None:
    source = tmp_path / "icon.svg"
    source.write_text('<svg width="4" height="4"><rect/></svg>', encoding="utf-8")
    result = runner.invoke(app, ["convert", str(source), "--strip-wh", "--config", str(config_file)])
    assert result.exit_code == 0, result.output
    assert '<svg xmlns="http://www.w3.org/2000/svg"><rect/></svg>' in result.output
    assert "data:image/svg+xml,%3Csvg" in result.output
    assert "background-image: url(" in result.output
    assert (tmp_path / "log.jsonl").exists()


def test_convert_writes_output_file(tmp_path: Path, config_file: Path) -> None:
    source = tmp_path / "icon.svg"
    source.write_text("<svg><rect/></svg>", encoding="utf-8")
    target = tmp_path / "out" / "clean.svg"
    result = runner.invoke(
        app, ["convert", str(source), "-o", str(target), "--base64", "--config", str(config_file)]
    )
    assert result.exit_code == 0, result.output
    assert target.read_text(encoding="utf-8") == '<svg xmlns="http://www.w3.org/2000/svg"><rect/></svg>\n'
    assert "data:image/svg+xml;base64," in result.output


def test_convert_reads_stdin(config_file: Path) -> None:
    result = runner.invoke(app, ["convert", "-", "--config", str(config_file)], input="<svg/>")
    assert result.exit_code == 0, result.output
    assert '<svg xmlns="http://www.w3.org/2000/svg"/>' in result.output


def test_convert_failure_exits_nonzero(tmp_path: Path, config_file: Path) -> None:
    source = tmp_path / "page.svg"
    source.write_text("<html/>", encoding="utf-8")
    result = runner.invoke(app, ["convert", str(source), "--config", str(config_file)])
    assert result.exit_code == 1
    assert "invalid_root" in result.output


def test_convert_missing_file(tmp_path: Path, config_file: Path) -> None:
    result = runner.invoke(app, ["convert", str(tmp_path / "nope.svg"), "--config", str(config_file)])
    assert result.exit_code == 2


def test_batch_reports_failures(tmp_path: Path, config_file: Path) -> None:
    icons = tmp_path / "icons"
    icons.mkdir()
    (icons / "a.svg").write_text("<svg/>", encoding="utf-8")
    (icons / "b.svg").write_text("", encoding="utf-8")
    result = runner.invoke(app, ["batch", str(icons), "--config", str(config_file)])
    assert result.exit_code == 1
    assert "Processed 2 files: 1 succeeded, 1 failed." in result.output


def test_whitelist_lists_names() -> None:
    result = runner.invoke(app, ["whitelist"])
    assert result.exit_code == 0
    assert "lineargradient" in result.output
    assert "stroke-width" in result.output


def test_show_config_reports_effective_limit(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text("[limits]\nmax_input_bytes = 999999999\n", encoding="utf-8")
    result = runner.invoke(app, ["show-config", "--config", str(path)])
    assert result.exit_code == 0, result.output
    assert '"max_input_bytes": 250000' in result.output
