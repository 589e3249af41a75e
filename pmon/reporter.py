"""
pmon Report Renderer

This module turns an AnalysisResult into a report in one of three formats:

    console - human-readable text written to a stream (stdout by default)
    json    - the full result, written to performance-report-<timestamp>.json
    html    - a standalone page, written to performance-report-<timestamp>.html

Design Principles:
    1. Rendering is pure: render_console/render_json/render_html return
       strings and never touch the filesystem
    2. Only present metric sections are rendered; absent means "not measured"
    3. Byte counts are always shown in MiB with two decimals ("1.00 MB")
    4. Mock metrics are labelled wherever they appear

Output Structure (console and html):
    1. Title
    2. Project type, framework and analysis time
    3. One section per present metrics category, in canonical order
"""


import json
import sys
from pathlib import Path
from typing import Any, Optional, TextIO

from jinja2 import Environment

from pmon.durations import format_duration
from pmon.exceptions import ReportWriteError, UnsupportedFormatError
from pmon.schema import AnalysisCategory, AnalysisResult

OUTPUT_FORMATS: tuple[str, ...] = ("console", "json", "html")

REPORT_FILENAME_PREFIX = "performance-report"
REPORT_TIME_FORMAT = "%Y-%m-%d-%H-%M-%S"
MIB = 1024 * 1024

MOCK_NOTICE = "Mock data: placeholder values, not measured"

# (icon, title) per metrics section
SECTION_TITLES: dict[AnalysisCategory, tuple[str, str]] = {
    AnalysisCategory.BUILD: ("🏗️", "Build Metrics"),
    AnalysisCategory.RUNTIME: ("⚡", "Runtime Metrics"),
    AnalysisCategory.STATIC: ("🔍", "Static Analysis"),
    AnalysisCategory.MEMORY: ("🧠", "Memory Metrics"),
    AnalysisCategory.NETWORK: ("🌐", "Network Metrics"),
}


def format_megabytes(num_bytes: int) -> str:
    """Format a byte count as mebibytes with two decimals, e.g. "1.00 MB"."""
    return f"{num_bytes / MIB:.2f} MB"


def format_percent(value: float) -> str:
    return f"{value:.2f}%"


def format_timestamp(result: AnalysisResult) -> str:
    """RFC 3339 timestamp of the analysis."""
    return result.timestamp.isoformat(timespec="seconds")


def project_label(result: AnalysisResult) -> str:
    """Type and framework, e.g. "JavaScript (React)"; just the type if no framework."""
    info = result.project_info
    if info.framework:
        return f"{info.type.value} ({info.framework})"
    return info.type.value


def metric_rows(category: AnalysisCategory, metrics: Any) -> list[tuple[str, str]]:
    """
    Build the (label, formatted value) rows for one metrics section.

    Shared by the console and HTML renderers so both show the same figures.
    """
    if category == AnalysisCategory.BUILD:
        rows = [
            ("Build Time", format_duration(metrics.build_time)),
            ("Bundle Size", format_megabytes(metrics.bundle_size)),
            ("Dependencies", str(metrics.dependencies)),
        ]
        if metrics.warnings:
            rows.append(("Warnings", str(len(metrics.warnings))))
        return rows

    if category == AnalysisCategory.RUNTIME:
        return [
            ("Startup Time", format_duration(metrics.startup_time)),
            ("Memory Usage", format_megabytes(metrics.memory_usage)),
            ("CPU Usage", format_percent(metrics.cpu_usage)),
        ]

    if category == AnalysisCategory.STATIC:
        rows = [
            ("Lines of Code", str(metrics.lines_of_code)),
            ("Complexity", str(metrics.complexity)),
            ("Test Coverage", format_percent(metrics.test_coverage)),
        ]
        if metrics.issues:
            rows.append(("Issues", str(len(metrics.issues))))
        return rows

    if category == AnalysisCategory.MEMORY:
        return [
            ("Heap Size", format_megabytes(metrics.heap_size)),
            ("Allocated Memory", format_megabytes(metrics.allocated_mem)),
            ("GC Count", str(metrics.gc_count)),
        ]

    return [
        ("Requests", str(metrics.request_count)),
        ("Avg Latency", f"{metrics.avg_latency:.2f} ms"),
        ("Error Rate", format_percent(metrics.error_rate)),
    ]


def _is_mock(metrics: Any) -> bool:
    return bool(getattr(metrics, "mock", False))


def render_console(result: AnalysisResult) -> str:
    """
    Render the console report.

    Returns:
        The report text, ending with a newline
    """
    lines = [
        "",
        "📊 Performance Analysis Report",
        "==============================",
        f"Project: {project_label(result)}",
        f"Analyzed at: {format_timestamp(result)}",
        "",
    ]

    categories = result.present_categories()
    if not categories:
        lines.append("No metrics collected for this project.")
        lines.append("")

    for category in categories:
        metrics = result.get_metrics(category)
        icon, title = SECTION_TITLES[category]
        lines.append(f"{icon}  {title}:")
        for label, value in metric_rows(category, metrics):
            lines.append(f"  {label}: {value}")
        if _is_mock(metrics):
            lines.append(f"  ({MOCK_NOTICE})")
        lines.append("")

    return "\n".join(lines) + "\n"


def render_json(result: AnalysisResult) -> str:
    """Serialize the result as two-space indented JSON with a trailing newline."""
    return json.dumps(result.to_dict(), indent=2, ensure_ascii=False) + "\n"


HTML_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>Performance Report - {{ project_type }}</title>
    <style>
        body { font-family: Arial, sans-serif; margin: 40px; background-color: #f5f5f5; }
        .container { max-width: 800px; margin: 0 auto; background: white; padding: 30px; border-radius: 8px; box-shadow: 0 2px 4px rgba(0,0,0,0.1); }
        .header { background: #2c3e50; color: white; padding: 20px; border-radius: 8px; margin-bottom: 20px; }
        .metric-section { margin: 20px 0; }
        .metric-card { background: #f8f9fa; padding: 15px; border-radius: 6px; margin: 10px 0; }
        .metric-value { font-size: 1.5em; font-weight: bold; color: #3498db; }
        .metric-label { color: #7f8c8d; }
        .mock-notice { color: #e67e22; font-style: italic; }
    </style>
</head>
<body>
    <div class="container">
        <div class="header">
            <h1>Performance Analysis Report</h1>
            <p>Project: {{ project }}</p>
            <p>Generated: {{ generated }}</p>
        </div>
        {% for section in sections %}
        <div class="metric-section">
            <h3>{{ section.icon }} {{ section.title }}</h3>
            {% for label, value in section.rows %}
            <div class="metric-card">
                <div class="metric-label">{{ label }}</div>
                <div class="metric-value">{{ value }}</div>
            </div>
            {% endfor %}
            {% if section.metrics.mock %}
            <p class="mock-notice">{{ mock_notice }}</p>
            {% endif %}
        </div>
        {% else %}
        <div class="metric-section">
            <p>No metrics collected for this project.</p>
        </div>
        {% endfor %}
    </div>
</body>
</html>
"""

_html_environment = Environment(autoescape=True, trim_blocks=True, lstrip_blocks=True)


class HtmlReportRenderer:
    """
    Renders an AnalysisResult as a standalone HTML page.

    Every present metrics section gets a block of metric cards. The Jinja2
    environment autoescapes all interpolated text.

    Usage:
        page = HtmlReportRenderer(result).render()
    """

    def __init__(self, result: AnalysisResult):
        self.result = result
        self.template = _html_environment.from_string(HTML_TEMPLATE)

    def render(self) -> str:
        return self.template.render(
            project_type=self.result.project_info.type.value,
            project=project_label(self.result),
            generated=format_timestamp(self.result),
            sections=self._sections(),
            mock_notice=MOCK_NOTICE,
        )

    def _sections(self) -> list[dict[str, Any]]:
        sections = []
        for category in self.result.present_categories():
            metrics = self.result.get_metrics(category)
            icon, title = SECTION_TITLES[category]
            sections.append({
                "icon": icon,
                "title": title,
                "rows": metric_rows(category, metrics),
                "metrics": metrics,
            })
        return sections


def render_html(result: AnalysisResult) -> str:
    """Convenience function to render the HTML report."""
    return HtmlReportRenderer(result).render()


def report_filename(result: AnalysisResult, extension: str) -> str:
    """performance-report-YYYY-MM-DD-HH-MM-SS.<extension>, from the result timestamp."""
    stamp = result.timestamp.strftime(REPORT_TIME_FORMAT)
    return f"{REPORT_FILENAME_PREFIX}-{stamp}.{extension}"


def _write_report(path: Path, content: str, kind: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
    except OSError as e:
        raise ReportWriteError(f"failed to write {kind} report file {path}: {e}") from e


def generate_report(
    result: AnalysisResult,
    output_format: str,
    output_dir: Optional[Path] = None,
    stream: Optional[TextIO] = None,
) -> Optional[Path]:
    """
    Render a report and deliver it.

    Args:
        result: The analysis result
        output_format: "console", "json" or "html"
        output_dir: Directory for json/html files (default: current directory)
        stream: Stream for console output (default: sys.stdout)

    Returns:
        Path of the written file, or None for console output

    Raises:
        UnsupportedFormatError: For any other format (no file is created)
        ReportWriteError: If the report file cannot be written
    """
    if output_format not in OUTPUT_FORMATS:
        raise UnsupportedFormatError(output_format)

    if output_format == "console":
        (stream or sys.stdout).write(render_console(result))
        return None

    directory = Path(output_dir) if output_dir is not None else Path.cwd()
    path = directory / report_filename(result, output_format)

    if output_format == "json":
        _write_report(path, render_json(result), "JSON")
    else:
        _write_report(path, render_html(result), "HTML")

    return path
