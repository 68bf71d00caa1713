"""Unit tests for CLI command behavior."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
from typer.testing import CliRunner

from bilicache_tool.cli import cli as cli_module
from bilicache_tool.errors import InputPathError, StageRegistryError
from bilicache_tool.infrastructure.reporters import ConsoleProgressReporter

runner = CliRunner()


def test_help_lists_options() -> None:
    """Ensure help text documents the input/output options."""
    result = runner.invoke(cli_module.app, ["--help"])
    assert result.exit_code == 0
    assert "--input" in result.output
    assert "--output" in result.output
    assert "--stage" in result.output


def test_cli_forwards_arguments_to_api(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Forward paths, stages and a console reporter to the API layer."""
    called: dict[str, object] = {}

    def fake_process(input_path: str, output_path: str, **kwargs: object) -> None:
        called["input_path"] = input_path
        called["output_path"] = output_path
        called.update(kwargs)

    import bilicache_tool.api as api_module

    monkeypatch.setattr(api_module, "process_cache_directory", fake_process)

    result = runner.invoke(
        cli_module.app,
        [
            "--input",
            str(tmp_path),
            "-o",
            str(tmp_path / "out"),
            "--stage",
            "json_document",
            "--stage-module",
            "my.stages",
        ],
    )

    assert result.exit_code == 0, result.output
    assert called["input_path"] == str(tmp_path)
    assert called["output_path"] == str(tmp_path / "out")
    assert called["stage_names"] == ["json_document"]
    assert called["stage_modules"] == ["my.stages"]
    assert isinstance(called["reporter"], ConsoleProgressReporter)


def test_cli_defaults_stages_to_none(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Leave stage selection to the API when no --stage is given."""
    called: dict[str, object] = {}

    import bilicache_tool.api as api_module

    monkeypatch.setattr(
        api_module,
        "process_cache_directory",
        lambda *args, **kwargs: called.update(kwargs),
    )

    result = runner.invoke(cli_module.app, ["-i", str(tmp_path), "-o", str(tmp_path)])

    assert result.exit_code == 0
    assert called["stage_names"] is None
    assert called["stage_modules"] is None


def test_cli_reads_paths_from_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Fall back to BILICACHE_INPUT / BILICACHE_OUTPUT."""
    called: dict[str, object] = {}

    import bilicache_tool.api as api_module

    monkeypatch.setattr(
        api_module,
        "process_cache_directory",
        lambda input_path, output_path, **_: called.update(
            {"input": input_path, "output": output_path}
        ),
    )

    result = runner.invoke(
        cli_module.app,
        [],
        env={"BILICACHE_INPUT": str(tmp_path), "BILICACHE_OUTPUT": "/tmp/out"},
    )

    assert result.exit_code == 0, result.output
    assert called == {"input": str(tmp_path), "output": "/tmp/out"}


@pytest.mark.parametrize(
    "error",
    [
        InputPathError(Path("/missing")),
        StageRegistryError("Unknown stage 'x'"),
        RuntimeError("unexpected"),
    ],
)
def test_cli_maps_fatal_errors_to_exit_code_one(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, error: Exception
) -> None:
    """Print the error type and exit with code 1."""

    def fake_process(*_: object, **__: object) -> None:
        raise error

    import bilicache_tool.api as api_module

    monkeypatch.setattr(api_module, "process_cache_directory", fake_process)

    result = runner.invoke(cli_module.app, ["-i", str(tmp_path), "-o", str(tmp_path)])

    assert result.exit_code == 1
    assert type(error).__name__ in result.output


def test_cli_logs_unexpected_failures_with_traceback(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    """Log unclassified exceptions with exc_info before exiting 1."""

    def fake_process(*_: object, **__: object) -> None:
        raise RuntimeError("kaboom")

    import bilicache_tool.api as api_module

    monkeypatch.setattr(api_module, "process_cache_directory", fake_process)

    with caplog.at_level(logging.ERROR, logger="bilicache_tool"):
        result = runner.invoke(
            cli_module.app, ["-i", str(tmp_path), "-o", str(tmp_path)]
        )

    assert result.exit_code == 1
    records = [r for r in caplog.records if r.name == cli_module.logger.name]
    assert len(records) == 1
    assert records[0].exc_info is not None
    assert isinstance(records[0].exc_info[1], RuntimeError)


def test_cli_does_not_log_known_errors_as_exceptions(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    """Report tool errors on stderr only."""

    def fake_process(*_: object, **__: object) -> None:
        raise InputPathError(tmp_path / "missing")

    import bilicache_tool.api as api_module

    monkeypatch.setattr(api_module, "process_cache_directory", fake_process)

    with caplog.at_level(logging.ERROR, logger="bilicache_tool"):
        result = runner.invoke(
            cli_module.app, ["-i", str(tmp_path), "-o", str(tmp_path)]
        )

    assert result.exit_code == 1
    assert [r for r in caplog.records if r.name == cli_module.logger.name] == []


@pytest.fixture
def package_logger() -> Iterator[logging.Logger]:
    """Restore the package logger level after the CLI reconfigures it."""
    package = logging.getLogger("bilicache_tool")
    original = package.level
    yield package
    package.setLevel(original)


@pytest.mark.parametrize(
    ("args", "env", "expected"),
    [
        (["--log-level", "INFO"], {}, logging.INFO),
        (["--log-level", "debug"], {}, logging.DEBUG),
        ([], {"BILICACHE_LOG_LEVEL": "ERROR"}, logging.ERROR),
        ([], {}, logging.WARNING),
    ],
)
def test_cli_configures_package_log_level(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    package_logger: logging.Logger,
    args: list[str],
    env: dict[str, str],
    expected: int,
) -> None:
    """Apply --log-level or BILICACHE_LOG_LEVEL to the package logger."""
    import bilicache_tool.api as api_module

    monkeypatch.delenv("BILICACHE_LOG_LEVEL", raising=False)
    monkeypatch.setattr(api_module, "process_cache_directory", lambda *a, **k: None)

    result = runner.invoke(
        cli_module.app, ["-i", str(tmp_path), "-o", str(tmp_path), *args], env=env
    )

    assert result.exit_code == 0, result.output
    assert package_logger.level == expected


def test_cli_rejects_unknown_log_level(tmp_path: Path) -> None:
    """Refuse log levels outside the accepted choices."""
    result = runner.invoke(
        cli_module.app,
        ["-i", str(tmp_path), "-o", str(tmp_path), "--log-level", "chatty"],
    )
    assert result.exit_code != 0


def test_print_run_error_debug_path(capsys: pytest.CaptureFixture[str]) -> None:
    """Print traceback details in debug mode and honor exit_code."""
    error = StageRegistryError("boom")
    error.exit_code = 7
    code = cli_module._print_run_error(error, debug=True)
    captured = capsys.readouterr()
    assert code == 7
    assert "Traceback" in captured.err
    assert "StageRegistryError: boom" in captured.err


def test_main_maps_usage_errors_to_exit_code_one(
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Return 1 when a required option is missing."""
    code = cli_module.main(["--output", "/tmp/out"])
    assert code == 1
    assert "--input" in capsys.readouterr().err


def test_main_returns_zero_on_success(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Return 0 when the run completes."""
    import bilicache_tool.api as api_module

    monkeypatch.setattr(api_module, "process_cache_directory", lambda *a, **k: None)
    assert cli_module.main(["-i", str(tmp_path), "-o", str(tmp_path)]) == 0


def test_main_returns_exit_code_from_command(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Propagate typer.Exit codes raised inside the command."""
    import bilicache_tool.api as api_module

    def fake_process(*_: object, **__: object) -> None:
        raise InputPathError(tmp_path / "missing")

    monkeypatch.setattr(api_module, "process_cache_directory", fake_process)
    assert cli_module.main(["-i", str(tmp_path / "missing"), "-o", str(tmp_path)]) == 1
