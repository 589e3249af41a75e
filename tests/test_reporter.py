"""
Tests for pmon.reporter module.

Tests console, JSON and HTML report rendering and report file output.
"""

import io
import json
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from pmon.exceptions import ReportWriteError, UnsupportedFormatError
from pmon.reporter import (
    format_megabytes,
    generate_report,
    render_console,
    render_html,
    render_json,
    report_filename,
)
from pmon.schema import (
    AnalysisCategory,
    AnalysisResult,
    BuildMetrics,
    NetworkMetrics,
    ProjectInfo,
    ProjectType,
    StaticMetrics,
)


def make_result(with_build: bool = True) -> AnalysisResult:
    result = AnalysisResult(
        project_info=ProjectInfo(
            type=ProjectType.JAVASCRIPT,
            language="JavaScript",
            root_path="/srv/web",
            framework="React",
            build_tool="Vite",
            dependencies={"react": "18"},
        ),
        timestamp=datetime(2024, 3, 1, 12, 30, 45, tzinfo=timezone.utc),
    )
    if with_build:
        result.set_metrics(AnalysisCategory.BUILD, BuildMetrics(
            build_time=timedelta(seconds=5),
            bundle_size=1048576,
            dependencies=1,
            mock=True,
        ))
    return result


class TestFormatting:
    """Tests for value formatting helpers."""

    def test_megabytes(self):
        assert format_megabytes(1048576) == "1.00 MB"
        assert format_megabytes(10 * 1048576) == "10.00 MB"
        assert format_megabytes(1572864) == "1.50 MB"
        assert format_megabytes(0) == "0.00 MB"

    def test_report_filename(self):
        assert report_filename(make_result(), "json") == (
            "performance-report-2024-03-01-12-30-45.json"
        )


class TestConsoleReport:
    """Tests for the console renderer."""

    def test_header(self):
        output = render_console(make_result())

        assert "📊 Performance Analysis Report" in output
        assert "Project: JavaScript (React)" in output
        assert "Analyzed at: 2024-03-01T12:30:45+00:00" in output

    def test_build_section(self):
        output = render_console(make_result())

        assert "Build Metrics:" in output
        assert "Build Time: 5s" in output
        assert "Bundle Size: 1.00 MB" in output
        assert "Dependencies: 1" in output
        assert "Mock data" in output

    def test_absent_sections_not_rendered(self):
        output = render_console(make_result())

        assert "Runtime Metrics" not in output
        assert "Static Analysis" not in output
        assert "Network Metrics" not in output

    def test_no_metrics(self):
        output = render_console(make_result(with_build=False))
        assert "No metrics collected" in output

    def test_warnings_count(self):
        result = make_result()
        result.build_metrics.warnings.extend(["slow chunk", "large asset"])

        assert "Warnings: 2" in render_console(result)

    def test_static_and_network_sections(self):
        result = make_result(with_build=False)
        result.set_metrics(AnalysisCategory.STATIC, StaticMetrics(
            lines_of_code=900, complexity=7, test_coverage=75.5,
        ))
        result.set_metrics(AnalysisCategory.NETWORK, NetworkMetrics(
            request_count=12, avg_latency=40.0, error_rate=1.25,
        ))

        output = render_console(result)

        assert "Test Coverage: 75.50%" in output
        assert "Avg Latency: 40.00 ms" in output
        assert "Error Rate: 1.25%" in output
        assert output.index("Static Analysis") < output.index("Network Metrics")

    def test_project_without_framework(self):
        result = AnalysisResult(
            project_info=ProjectInfo(type=ProjectType.PYTHON, language="Python", root_path="/p"),
            timestamp=datetime(2024, 3, 1, tzinfo=timezone.utc),
        )
        assert "Project: Python\n" in render_console(result)


class TestJsonReport:
    """Tests for the JSON renderer."""

    def test_two_space_indent(self):
        output = render_json(make_result())

        assert output.startswith('{\n  "project_info": {\n    "type": "JavaScript"')
        assert output.endswith("}\n")

    def test_absent_sections_omitted(self):
        data = json.loads(render_json(make_result()))

        assert set(data) == {"project_info", "build_metrics", "timestamp"}
        assert data["build_metrics"]["bundle_size"] == 1048576
        assert data["build_metrics"]["mock"] is True


class TestHtmlReport:
    """Tests for the HTML renderer."""

    def test_build_section(self):
        page = render_html(make_result())

        assert page.startswith("<!DOCTYPE html>")
        assert "<title>Performance Report - JavaScript</title>" in page
        assert "Project: JavaScript (React)" in page
        assert "1.00 MB" in page
        assert "Mock data" in page

    def test_all_present_sections_rendered(self):
        result = make_result()
        result.set_metrics(AnalysisCategory.NETWORK, NetworkMetrics(
            request_count=5, avg_latency=10.0, error_rate=0.0,
        ))

        page = render_html(result)

        assert "Build Metrics" in page
        assert "Network Metrics" in page
        assert "Runtime Metrics" not in page

    def test_text_is_escaped(self):
        result = AnalysisResult(
            project_info=ProjectInfo(
                type=ProjectType.JAVASCRIPT,
                language="JavaScript",
                root_path="/x",
                framework="<script>alert(1)</script>",
            ),
            timestamp=datetime(2024, 3, 1, tzinfo=timezone.utc),
        )

        page = render_html(result)

        assert "<script>" not in page
        assert "&lt;script&gt;" in page

    def test_mock_notice_only_for_mock_metrics(self):
        result = make_result(with_build=False)
        result.set_metrics(AnalysisCategory.BUILD, BuildMetrics(
            build_time=timedelta(seconds=3),
            bundle_size=2 * 1048576,
            dependencies=4,
        ))

        page = render_html(result)

        assert "2.00 MB" in page
        assert "Mock data" not in page

    def test_no_metrics_message(self):
        page = render_html(make_result(with_build=False))

        assert "No metrics collected for this project." in page
        assert "metric-card" not in page.split("</style>")[1]


class TestGenerateReport:
    """Tests for report delivery."""

    def test_console_writes_to_stream(self):
        stream = io.StringIO()

        path = generate_report(make_result(), "console", stream=stream)

        assert path is None
        assert "Bundle Size: 1.00 MB" in stream.getvalue()

    def test_json_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            tmppath = Path(tmpdir)

            path = generate_report(make_result(), "json", output_dir=tmppath)

            assert path == tmppath / "performance-report-2024-03-01-12-30-45.json"
            data = json.loads(path.read_text(encoding="utf-8"))
            assert AnalysisResult.from_dict(data) == make_result()

    def test_html_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            tmppath = Path(tmpdir)

            path = generate_report(make_result(), "html", output_dir=tmppath)

            assert path.name == "performance-report-2024-03-01-12-30-45.html"
            assert "1.00 MB" in path.read_text(encoding="utf-8")

    def test_creates_output_directory(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            target = Path(tmpdir) / "reports" / "nightly"

            path = generate_report(make_result(), "json", output_dir=target)

            assert path.parent == target
            assert path.exists()

    def test_defaults_to_current_directory(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        path = generate_report(make_result(), "json")

        assert path.parent.resolve() == tmp_path.resolve()
        assert path.exists()

    def test_unsupported_format_creates_no_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            tmppath = Path(tmpdir)

            with pytest.raises(UnsupportedFormatError, match="unsupported output format: xml"):
                generate_report(make_result(), "xml", output_dir=tmppath)

            assert list(tmppath.iterdir()) == []

    def test_write_failure(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            blocker = Path(tmpdir) / "not-a-dir"
            blocker.write_text("file in the way")

            with pytest.raises(ReportWriteError):
                generate_report(make_result(), "json", output_dir=blocker)
