"""
pmon Run Configuration

AnalysisConfig holds every option of a single pmon run. It is built once at
startup (usually from parsed CLI arguments) and handed explicitly to the
dispatcher and reporter; there is no module-level configuration state.
"""

import argparse
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import Optional

from pmon.durations import parse_duration
from pmon.exceptions import UnsupportedFormatError
from pmon.reporter import OUTPUT_FORMATS
from pmon.schema import AnalysisCategory

DEFAULT_OUTPUT = "console"
DEFAULT_DURATION = "10s"


@dataclass(frozen=True)
class AnalysisConfig:
    """
    Options for one analysis run.

    Attributes:
        all: Run every analysis category
        build: Build performance analysis
        runtime: Runtime performance analysis
        static: Static code analysis
        memory: Memory profiling
        network: Network analysis
        output: Report format ("console", "json" or "html")
        duration: Monitoring duration, e.g. "10s" (validated, not yet used)
        watch: Continuous monitoring (accepted, not yet used)
        ci: CI-friendly output (accepted, not yet used)
        report_dir: Directory for json/html reports (None = current directory)
    """
    all: bool = False
    build: bool = False
    runtime: bool = False
    static: bool = False
    memory: bool = False
    network: bool = False
    output: str = DEFAULT_OUTPUT
    duration: str = DEFAULT_DURATION
    watch: bool = False
    ci: bool = False
    report_dir: Optional[Path] = None

    @property
    def runs_all(self) -> bool:
        """True when --all was given or no individual category was selected."""
        return self.all or not any(
            (self.build, self.runtime, self.static, self.memory, self.network)
        )

    def selected_categories(self) -> list[AnalysisCategory]:
        """
        Analysis categories to run, in canonical order.

        Returns every category when runs_all is True.
        """
        if self.runs_all:
            return list(AnalysisCategory)
        flags = {
            AnalysisCategory.BUILD: self.build,
            AnalysisCategory.RUNTIME: self.runtime,
            AnalysisCategory.STATIC: self.static,
            AnalysisCategory.MEMORY: self.memory,
            AnalysisCategory.NETWORK: self.network,
        }
        return [category for category, enabled in flags.items() if enabled]

    @property
    def monitor_duration(self) -> timedelta:
        """The parsed monitoring duration (raises ConfigError if invalid)."""
        return parse_duration(self.duration)

    def validate(self) -> None:
        """
        Check option values.

        Raises:
            UnsupportedFormatError: If output is not a known format
            ConfigError: If duration cannot be parsed
        """
        if self.output not in OUTPUT_FORMATS:
            raise UnsupportedFormatError(self.output)
        parse_duration(self.duration)

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "AnalysisConfig":
        """Build a configuration from parsed CLI arguments."""
        report_dir = Path(args.report_dir) if getattr(args, "report_dir", None) else None
        return cls(
            all=args.all,
            build=args.build,
            runtime=args.runtime,
            static=args.static,
            memory=args.memory,
            network=args.network,
            output=args.output,
            duration=args.duration,
            watch=args.watch,
            ci=args.ci,
            report_dir=report_dir,
        )
