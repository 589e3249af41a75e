"""
pmon Command-Line Interface

This module provides the CLI entry point for pmon. It orchestrates the
full pipeline: configuration -> detection -> analysis -> report.

Usage:
    pmon
    pmon /path/to/project --output json
    pmon --build --runtime
    pmon . --output html --report-dir reports/

Exit codes:
    0 - report produced
    1 - detection, analysis or report generation failed
    2 - invalid command-line usage
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from pmon import __version__
from pmon.analysis import run_analysis
from pmon.config import DEFAULT_DURATION, DEFAULT_OUTPUT, AnalysisConfig
from pmon.detector import detect_project
from pmon.durations import format_duration
from pmon.exceptions import PmonError, UnsupportedTypeError
from pmon.providers import create_provider_registry
from pmon.reporter import OUTPUT_FORMATS, generate_report
from pmon.schema import AnalysisCategory, ProjectInfo

CATEGORY_MESSAGES: dict[AnalysisCategory, str] = {
    AnalysisCategory.BUILD: "🏗️  Running build performance analysis...",
    AnalysisCategory.RUNTIME: "⚡ Running runtime performance analysis...",
    AnalysisCategory.STATIC: "🔍 Running static code analysis...",
    AnalysisCategory.MEMORY: "🧠 Running memory profiling...",
    AnalysisCategory.NETWORK: "🌐 Running network analysis...",
}

FULL_ANALYSIS_SCOPE = [
    "Bundle size analysis",
    "Build performance",
    "Runtime metrics",
    "Memory usage",
    "Code quality",
]

# Framework label -> (heading, focus areas)
FRAMEWORK_FOCUS_AREAS: dict[str, tuple[str, list[str]]] = {
    "Next.js": ("🔥 Next.js specific optimizations:", [
        "SSR/SSG performance",
        "Route optimization",
        "Image optimization",
    ]),
    "React": ("⚛️  React specific optimizations:", [
        "Component render times",
        "Virtual DOM operations",
        "Hook optimization",
    ]),
    "Vue.js": ("💚 Vue.js specific optimizations:", [
        "Component performance",
        "Reactivity system",
    ]),
}


def create_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="pmon",
        description=(
            "pmon: Performance Monitor CLI.\n\n"
            "Detects a project's type, framework and build tool, then runs "
            "the selected performance analyses and prints or saves a report."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  pmon                           # Full analysis of the current directory\n"
            "  pmon /path/to/project          # Full analysis of another directory\n"
            "  pmon --build                   # Build analysis only\n"
            "  pmon --output json             # Save a JSON report\n"
            "  pmon --output html --report-dir reports\n"
            "\n"
            "Note: build metrics are currently mock values and are labelled as such.\n"
        ),
    )

    parser.add_argument(
        "path",
        type=str,
        nargs="?",
        default=".",
        help="Path to the project to analyze (default: current directory)",
    )

    # Analysis categories
    parser.add_argument(
        "-a", "--all",
        action="store_true",
        help="Run all performance analysis (default when no category is selected)",
    )
    parser.add_argument(
        "-b", "--build",
        action="store_true",
        help="Build performance analysis",
    )
    parser.add_argument(
        "-r", "--runtime",
        action="store_true",
        help="Runtime performance analysis",
    )
    parser.add_argument(
        "-s", "--static",
        action="store_true",
        help="Static code analysis",
    )
    parser.add_argument(
        "-m", "--memory",
        action="store_true",
        help="Memory profiling",
    )
    parser.add_argument(
        "-n", "--network",
        action="store_true",
        help="Network analysis",
    )

    # Output options
    parser.add_argument(
        "--output",
        type=str,
        default=DEFAULT_OUTPUT,
        metavar="FORMAT",
        help=f"Output format: {', '.join(OUTPUT_FORMATS)} (default: {DEFAULT_OUTPUT})",
    )
    parser.add_argument(
        "--report-dir",
        type=str,
        default=None,
        help="Directory for json/html reports (default: current directory)",
    )

    # Monitoring options
    parser.add_argument(
        "--duration",
        type=str,
        default=DEFAULT_DURATION,
        help=f"Monitoring duration, e.g. 30s or 1m30s (default: {DEFAULT_DURATION})",
    )
    parser.add_argument(
        "--watch",
        action="store_true",
        help="Continuous monitoring",
    )
    parser.add_argument(
        "--ci",
        action="store_true",
        help="CI-friendly output",
    )

    # Verbosity
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show detailed progress information",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress all output except errors and the report itself",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser


def log(message: str, quiet: bool = False) -> None:
    """
    Print a status message to stderr.

    Args:
        message: The message to print
        quiet: If True, suppress the message
    """
    if quiet:
        return
    print(f"[pmon] {message}", file=sys.stderr)


def log_verbose(message: str, verbose: bool, quiet: bool) -> None:
    """Print a message only in verbose mode."""
    if verbose and not quiet:
        print(f"  {message}", file=sys.stderr)


def log_error(message: str) -> None:
    """Print an error message to stderr, regardless of verbosity."""
    print(f"[pmon] ❌ {message}", file=sys.stderr)


def print_project_summary(project_info: ProjectInfo, show_scripts: bool) -> None:
    """Print the detected classification to stdout."""
    print(f"🔍 Detected: {project_info.type.value} project")
    print(f"📁 Framework: {project_info.framework}")
    print(f"🔧 Build Tool: {project_info.build_tool}")
    print(f"📍 Root Path: {project_info.root_path}")

    if project_info.dependencies:
        print(f"📦 Dependencies: {len(project_info.dependencies)} packages")

    if project_info.scripts:
        print(f"📝 Scripts: {len(project_info.scripts)} available")
        if show_scripts:
            print("\nAvailable scripts:")
            for name in sorted(project_info.scripts):
                print(f"  • {name}: {project_info.scripts[name]}")


def print_analysis_plan(project_info: ProjectInfo, config: AnalysisConfig) -> None:
    """Announce which analyses are about to run."""
    if config.runs_all:
        print("\n🚀 Running full performance analysis...")
        print("📊 Analysis includes:")
        for item in FULL_ANALYSIS_SCOPE:
            print(f"  • {item}")

        focus = FRAMEWORK_FOCUS_AREAS.get(project_info.framework)
        if focus is not None:
            heading, areas = focus
            print(f"\n{heading}")
            for area in areas:
                print(f"  • {area}")
        return

    for category in config.selected_categories():
        print(f"\n{CATEGORY_MESSAGES[category]}")


def run_pipeline(
    repo_path: Path,
    config: AnalysisConfig,
    verbose: bool = False,
    quiet: bool = False,
) -> int:
    """
    Run the full pmon pipeline.

    Args:
        repo_path: Path to the project to analyze
        config: Run configuration
        verbose: If True, show detailed progress
        quiet: If True, suppress non-error output except the report

    Returns:
        Exit code (0 = success, non-zero = error)
    """
    try:
        config.validate()
    except PmonError as e:
        log_error(f"Invalid configuration: {e}")
        return 1

    if not quiet:
        print("🚀 Performance Monitor CLI (pmon)")
        print("================================")

    if config.watch:
        log("--watch is not supported yet; running a single analysis", quiet=quiet)
    if config.ci:
        log_verbose("--ci has no effect yet", verbose, quiet)
    log_verbose(f"Monitoring duration: {format_duration(config.monitor_duration)}", verbose, quiet)

    # Step 1: Detection
    log_verbose(f"Detecting project in {repo_path}", verbose, quiet)
    try:
        project_info = detect_project(repo_path)
    except PmonError as e:
        log_error(f"Error detecting project: {e}")
        return 1

    if not quiet:
        print_project_summary(project_info, show_scripts=config.runs_all)

    # Step 2: Analysis
    if not quiet:
        print_analysis_plan(project_info, config)

    registry = create_provider_registry()
    provider = registry.get(project_info.type)
    if provider is not None:
        log_verbose(f"Using {provider.name} metrics provider", verbose, quiet)

    try:
        result = run_analysis(project_info, config, registry)
    except UnsupportedTypeError as e:
        log_error(f"Error running analysis: {e}")
        supported = ", ".join(str(t) for t in registry.supported_types())
        log_verbose(f"Supported project types: {supported}", verbose, quiet)
        return 1
    except PmonError as e:
        log_error(f"Error running analysis: {e}")
        return 1

    for category in config.selected_categories():
        if result.get_metrics(category) is None:
            log_verbose(
                f"No {category.value} metrics available for {project_info.type.value} projects",
                verbose,
                quiet,
            )

    # Step 3: Report
    try:
        report_path = generate_report(result, config.output, output_dir=config.report_dir)
    except PmonError as e:
        log_error(f"Error generating report: {e}")
        return 1

    if report_path is not None and not quiet:
        print(f"📄 {config.output.upper()} report saved to: {report_path}")

    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 = success, non-zero = error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    repo_path = Path(args.path).resolve()
    config = AnalysisConfig.from_args(args)

    return run_pipeline(
        repo_path=repo_path,
        config=config,
        verbose=args.verbose,
        quiet=args.quiet,
    )


if __name__ == "__main__":
    sys.exit(main())
