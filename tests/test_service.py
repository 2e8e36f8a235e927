from pathlib import Path

import pytest

from svgready.config import AppConfig, RuntimeConfig
from svgready.core import ConversionService
from svgready.errors import ConversionError
from svgready.logging import ConversionLogger
from svgready.models import ConversionResult


def build_config(tmp_path: Path, **runtime: object) -> AppConfig:
    return AppConfig(runtime=RuntimeConfig(log_file=tmp_path / "logs" / "log.jsonl", **runtime))


def test_success_is_logged(tmp_path: Path) -> None:
    config = build_config(tmp_path)
    service = ConversionService(config)
    outcome = service.convert_text("<svg><script/><rect/></svg>", request_id="req-1")
    assert isinstance(outcome, ConversionResult)
    entries = ConversionLogger(config.runtime.log_file).read_entries()
    assert len(entries) == 1
    entry = entries[0]
    assert entry["request_id"] == "req-1"
    assert entry["status"] == "success"
    assert entry["output_length"] == outcome.size_after
    assert entry["warnings"] == ["removed element <script>"]
    assert "svg_input" not in entry


def test_failure_logs_snippet_only_when_enabled(tmp_path: Path) -> None:
    raw = "<svg>" + "<rect>" * 100 + "</svg>"
    quiet = ConversionService(build_config(tmp_path / "quiet"))
    assert isinstance(quiet.convert_text(raw), ConversionError)
    entry = ConversionLogger(tmp_path / "quiet" / "logs" / "log.jsonl").read_entries()[0]
    assert entry["status"] == "failure"
    assert entry["category"] == "invalid_svg"
    assert entry["error_code"] == "xml_parse_error"
    assert entry["input_length"] == len(raw)
    assert "svg_input" not in entry

    verbose = ConversionService(build_config(tmp_path / "verbose", log_svg_content=True))
    verbose.convert_text(raw)
    entry = ConversionLogger(tmp_path / "verbose" / "logs" / "log.jsonl").read_entries()[0]
    assert entry["svg_input"] == raw[:500] + "... [truncated]"


def test_empty_input_never_logs_content(tmp_path: Path) -> None:
    config = build_config(tmp_path, log_svg_content=True)
    ConversionService(config).convert_text("   ")
    entry = ConversionLogger(config.runtime.log_file).read_entries()[0]
    assert entry["error_code"] == "empty"
    assert "svg_input" not in entry


def test_server_error_logs_traceback(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def boom(root, whitelist):  # type: ignore[no-untyped-def]
        raise RuntimeError("sanitizer exploded")

    monkeypatch.setattr("svgready.pipeline.sanitize_tree", boom)
    config = build_config(tmp_path)
    outcome = ConversionService(config).convert_text("<svg/>")
    assert isinstance(outcome, ConversionError)
    entry = ConversionLogger(config.runtime.log_file).read_entries()[0]
    assert entry["error_code"] == "server_error"
    assert "RuntimeError: sanitizer exploded" in entry["traceback"]


def test_configured_limit_applies(tmp_path: Path) -> None:
    config = build_config(tmp_path)
    config.limits.max_input_bytes = 10
    outcome = ConversionService(config).convert_text("<svg><rect/></svg>")
    assert isinstance(outcome, ConversionError)
    assert outcome.code == "too_large"


def test_convert_file_missing(tmp_path: Path) -> None:
    service = ConversionService(build_config(tmp_path))
    with pytest.raises(FileNotFoundError):
        service.convert_file(tmp_path / "missing.svg")


@pytest.mark.parametrize("parallelism", [1, 3])
def test_batch_keeps_order(tmp_path: Path, parallelism: int) -> None:
    sources = tmp_path / "icons"
    sources.mkdir()
    (sources / "a.svg").write_text("<svg><rect/></svg>", encoding="utf-8")
    (sources / "b.svg").write_text("<html/>", encoding="utf-8")
    (sources / "c.svg").write_text("<svg><circle r='1'/></svg>", encoding="utf-8")
    (sources / "notes.txt").write_text("ignored", encoding="utf-8")
    extra = tmp_path / "d.svg"
    extra.write_text("<svg/>", encoding="utf-8")

    service = ConversionService(build_config(tmp_path))
    result = service.batch_convert([sources, extra], parallelism=parallelism)
    assert [item.source.name for item in result.items] == ["a.svg", "b.svg", "c.svg", "d.svg"]
    assert [item.ok for item in result.items] == [True, False, True, True]
    assert result.summary.total == 4
    assert result.summary.successes == 3
    assert result.summary.failures == 1
    assert result.summary.errors == {"invalid_root": 1}
    assert len(ConversionLogger(tmp_path / "logs" / "log.jsonl").read_entries()) == 4
