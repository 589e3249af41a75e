"""
pmon Data Model

This module defines the records that flow through the pmon pipeline:
the detector produces a ProjectInfo, the analysis dispatcher wraps it in an
AnalysisResult, and the reporter renders that result.

Design Principles:
    1. ProjectInfo is immutable once the detector returns it
    2. Metric sections are optional: None means "not measured", never zero
    3. Mock values are flagged on the record itself, never passed off as
       measurements
    4. The JSON shape is stable: snake_case keys, absent sections omitted

JSON Encoding:
    - Durations are integer nanoseconds
    - Byte counts are integers
    - The timestamp is ISO 8601 with a UTC offset
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional

from pmon.durations import from_nanoseconds, to_nanoseconds


class ProjectType(str, Enum):
    """Project types the detector can classify a directory as."""
    JAVASCRIPT = "JavaScript"
    GO = "Go"
    PYTHON = "Python"
    JAVA = "Java"
    UNKNOWN = "Unknown"

    def __str__(self) -> str:
        return self.value


class AnalysisCategory(Enum):
    """
    Independently selectable analysis categories.

    Each category maps to one optional metrics section of AnalysisResult.
    """
    BUILD = "build"
    RUNTIME = "runtime"
    STATIC = "static"
    MEMORY = "memory"
    NETWORK = "network"

    @property
    def result_field(self) -> str:
        """Name of the AnalysisResult attribute holding this category's metrics."""
        return f"{self.value}_metrics"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ProjectInfo:
    """
    Classification of a project directory.

    Attributes:
        type: The detected project type
        framework: Framework label (empty when not detected)
        build_tool: Build tool label (empty when not detected)
        language: Primary language label
        dependencies: Merged runtime and dev dependencies (name -> version)
        scripts: Declared scripts (name -> command)
        root_path: The directory that was classified
    """
    type: ProjectType
    language: str
    root_path: str
    framework: str = ""
    build_tool: str = ""
    dependencies: Mapping[str, str] = field(default_factory=dict)
    scripts: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Freeze the mappings as well as the attributes
        object.__setattr__(self, "dependencies", MappingProxyType(dict(self.dependencies)))
        object.__setattr__(self, "scripts", MappingProxyType(dict(self.scripts)))

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "framework": self.framework,
            "build_tool": self.build_tool,
            "language": self.language,
            "dependencies": dict(self.dependencies),
            "scripts": dict(self.scripts),
            "root_path": self.root_path,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ProjectInfo":
        return cls(
            type=ProjectType(data["type"]),
            framework=data.get("framework", ""),
            build_tool=data.get("build_tool", ""),
            language=data.get("language", ""),
            dependencies=data.get("dependencies") or {},
            scripts=data.get("scripts") or {},
            root_path=data.get("root_path", ""),
        )


@dataclass
class BuildMetrics:
    """
    Build performance figures.

    Attributes:
        build_time: Wall-clock build duration
        bundle_size: Size of the build output in bytes
        dependencies: Number of declared dependencies
        warnings: Build warnings, in the order they were reported
        mock: True when the values are placeholders rather than measurements
    """
    build_time: timedelta
    bundle_size: int
    dependencies: int
    warnings: list[str] = field(default_factory=list)
    mock: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "build_time": to_nanoseconds(self.build_time),
            "bundle_size": self.bundle_size,
            "dependencies": self.dependencies,
            "warnings": list(self.warnings),
            "mock": self.mock,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BuildMetrics":
        return cls(
            build_time=from_nanoseconds(data["build_time"]),
            bundle_size=data["bundle_size"],
            dependencies=data["dependencies"],
            warnings=list(data.get("warnings") or []),
            mock=bool(data.get("mock", False)),
        )


@dataclass
class RuntimeMetrics:
    """Startup and steady-state resource usage of the running application."""
    startup_time: timedelta
    memory_usage: int
    cpu_usage: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "startup_time": to_nanoseconds(self.startup_time),
            "memory_usage": self.memory_usage,
            "cpu_usage": self.cpu_usage,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RuntimeMetrics":
        return cls(
            startup_time=from_nanoseconds(data["startup_time"]),
            memory_usage=data["memory_usage"],
            cpu_usage=data["cpu_usage"],
        )


@dataclass
class StaticMetrics:
    """Source-level figures: size, complexity, coverage and reported issues."""
    lines_of_code: int
    complexity: int
    test_coverage: float
    issues: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "lines_of_code": self.lines_of_code,
            "complexity": self.complexity,
            "test_coverage": self.test_coverage,
            "issues": list(self.issues),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "StaticMetrics":
        return cls(
            lines_of_code=data["lines_of_code"],
            complexity=data["complexity"],
            test_coverage=data["test_coverage"],
            issues=list(data.get("issues") or []),
        )


@dataclass
class MemoryMetrics:
    """Heap figures collected while profiling."""
    heap_size: int
    allocated_mem: int
    gc_count: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "heap_size": self.heap_size,
            "allocated_mem": self.allocated_mem,
            "gc_count": self.gc_count,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MemoryMetrics":
        return cls(
            heap_size=data["heap_size"],
            allocated_mem=data["allocated_mem"],
            gc_count=data["gc_count"],
        )


@dataclass
class NetworkMetrics:
    """Request volume, latency (milliseconds) and error rate (percent)."""
    request_count: int
    avg_latency: float
    error_rate: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "request_count": self.request_count,
            "avg_latency": self.avg_latency,
            "error_rate": self.error_rate,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "NetworkMetrics":
        return cls(
            request_count=data["request_count"],
            avg_latency=data["avg_latency"],
            error_rate=data["error_rate"],
        )


# Metrics record type per category, used for decoding and type checks
METRICS_TYPES: dict[AnalysisCategory, type] = {
    AnalysisCategory.BUILD: BuildMetrics,
    AnalysisCategory.RUNTIME: RuntimeMetrics,
    AnalysisCategory.STATIC: StaticMetrics,
    AnalysisCategory.MEMORY: MemoryMetrics,
    AnalysisCategory.NETWORK: NetworkMetrics,
}


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO 8601 timestamp, accepting a trailing "Z" for UTC."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


@dataclass
class AnalysisResult:
    """
    Outcome of one analysis run.

    Every metrics attribute is None unless its category was analysed and a
    provider supplied a record for it.
    """
    project_info: ProjectInfo
    timestamp: datetime
    build_metrics: Optional[BuildMetrics] = None
    runtime_metrics: Optional[RuntimeMetrics] = None
    static_metrics: Optional[StaticMetrics] = None
    memory_metrics: Optional[MemoryMetrics] = None
    network_metrics: Optional[NetworkMetrics] = None

    def get_metrics(self, category: AnalysisCategory) -> Optional[Any]:
        """Return the metrics record for a category, or None if absent."""
        return getattr(self, category.result_field)

    def set_metrics(self, category: AnalysisCategory, metrics: Any) -> None:
        """
        Attach a metrics record for a category.

        Raises:
            TypeError: If the record does not match the category
        """
        expected = METRICS_TYPES[category]
        if not isinstance(metrics, expected):
            raise TypeError(
                f"{category.value} metrics must be {expected.__name__}, "
                f"got {type(metrics).__name__}"
            )
        setattr(self, category.result_field, metrics)

    def present_categories(self) -> list[AnalysisCategory]:
        """Categories whose metrics section is populated, in canonical order."""
        return [c for c in AnalysisCategory if self.get_metrics(c) is not None]

    def to_dict(self) -> dict[str, Any]:
        """
        Convert to a JSON-serializable dictionary.

        Absent metrics sections are omitted entirely.
        """
        data: dict[str, Any] = {"project_info": self.project_info.to_dict()}
        for category in AnalysisCategory:
            metrics = self.get_metrics(category)
            if metrics is not None:
                data[category.result_field] = metrics.to_dict()
        data["timestamp"] = self.timestamp.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AnalysisResult":
        result = cls(
            project_info=ProjectInfo.from_dict(data["project_info"]),
            timestamp=parse_timestamp(data["timestamp"]),
        )
        for category, metrics_type in METRICS_TYPES.items():
            section = data.get(category.result_field)
            if section is not None:
                result.set_metrics(category, metrics_type.from_dict(section))
        return result
