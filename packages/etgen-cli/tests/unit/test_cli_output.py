"""Unit tests for etgen_cli.output."""

from __future__ import annotations

from pathlib import Path

import pytest

from etgen_cli import output
from etgen_cli.runner import GroupResult, RunReport
from etgen_core.errors import MalformedMetadataError, PersistenceError, SchemaResolutionError
from etgen_core.validation import ConformanceDiagnostic, ValidationReport


class TestCreateConsole:
    def test_no_color(self) -> None:
        assert output.create_console(no_color=True).no_color is True


class TestMessages:
    """Tests for the message helpers."""

    def test_success(self, capsys: pytest.CaptureFixture[str]) -> None:
        output.success("Generated 2 template file(s)")
        captured = capsys.readouterr()
        assert "✓" in captured.out
        assert "Generated 2 template file(s)" in captured.out

    def test_error(self, capsys: pytest.CaptureFixture[str]) -> None:
        output.error("Failed")
        assert "✗ Failed" in capsys.readouterr().out

    def test_warning(self, capsys: pytest.CaptureFixture[str]) -> None:
        output.warning("Careful")
        assert "⚠ Careful" in capsys.readouterr().out


class TestPrintRunSummary:
    """Tests for print_run_summary."""

    def test_lists_groups_and_problems(self, capsys: pytest.CaptureFixture[str]) -> None:
        report = RunReport(
            schema_url="https://example.com/schema.json",
            groups=[
                GroupResult(
                    group="HttpTasks",
                    output_path=Path("out/HttpTasksTemplates.json"),
                    report=ValidationReport(source="HttpTasksTemplates.json"),
                    build_errors=[MalformedMetadataError("Template id must not be empty")],
                ),
                GroupResult(
                    group="MailTasks",
                    output_path=Path("out/MailTasksTemplates.json"),
                    report=ValidationReport(
                        source="MailTasksTemplates.json",
                        diagnostics=(ConformanceDiagnostic(path="$.id", message="bad id"),),
                    ),
                ),
                GroupResult(
                    group="FileTasks",
                    output_path=Path("out/FileTasksTemplates.json"),
                    persistence_error=PersistenceError("Failed to write", path="out/FileTasksTemplates.json"),
                ),
            ],
        )

        output.print_run_summary(report)
        out = capsys.readouterr().out

        assert "HttpTasks" in out
        assert "valid" in out
        assert "1 issue(s)" in out
        assert "not written" in out
        assert "Template id must not be empty" in out
        assert "MailTasksTemplates.json: $.id: bad id" in out
        assert "Failed to write out/FileTasksTemplates.json" in out

    def test_schema_error_reported(self, capsys: pytest.CaptureFixture[str]) -> None:
        report = RunReport(
            schema_url="https://example.com/schema.json",
            groups=[
                GroupResult(
                    group="HttpTasks",
                    output_path=Path("out/HttpTasksTemplates.json"),
                    report=ValidationReport(source="HttpTasksTemplates.json", skipped=True),
                )
            ],
            schema_error=SchemaResolutionError(
                "Failed to download schema",
                url="https://example.com/schema.json",
            ),
        )

        output.print_run_summary(report)
        out = capsys.readouterr().out

        assert "skipped" in out
        assert "Failed to download schema: https://example.com/schema.json" in out
