"""
Base Metrics Provider Interface

A metrics provider supplies the metric records for one project type. The
analysis dispatcher looks the provider up by ProjectInfo.type and asks it
for each selected analysis category.

Design Principles:
    1. One provider per project type
    2. A provider returns None for any category it cannot measure
    3. Placeholder values must be flagged (BuildMetrics.mock=True), so a
       report can never present constants as real measurements

Usage Pattern:
    1. The detector produces a ProjectInfo
    2. The dispatcher fetches the provider for ProjectInfo.type from a registry
    3. For each selected category, provider.collect() returns a record or None
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from pmon.schema import AnalysisCategory, ProjectInfo, ProjectType


class BaseMetricsProvider(ABC):
    """
    Abstract base class for all metrics providers.

    Subclasses must set:
        - name: Human-readable name for the provider
        - project_type: The ProjectType this provider handles

    and implement collect().

    Example implementation:
        class RustProvider(BaseMetricsProvider):
            name = "Rust"
            project_type = ProjectType.UNKNOWN

            def collect(self, project_info, category):
                if category == AnalysisCategory.BUILD:
                    return measure_cargo_build(project_info.root_path)
                return None
    """

    name: str = "Base"
    project_type: ProjectType = ProjectType.UNKNOWN

    @abstractmethod
    def collect(
        self,
        project_info: ProjectInfo,
        category: AnalysisCategory,
    ) -> Optional[Any]:
        """
        Produce the metrics record for one analysis category.

        Args:
            project_info: The classified project
            category: The category being analysed

        Returns:
            The metrics record matching the category (e.g. BuildMetrics for
            AnalysisCategory.BUILD), or None when this provider cannot
            measure it
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(project_type={self.project_type.value!r})"


class ProviderRegistry:
    """
    Registry mapping project types to metrics providers.

    Usage:
        registry = ProviderRegistry()
        registry.register(JavaScriptProvider())
        provider = registry.get(ProjectType.JAVASCRIPT)
    """

    def __init__(self):
        """Initialize an empty registry."""
        self._providers: dict[ProjectType, BaseMetricsProvider] = {}

    def register(self, provider: BaseMetricsProvider) -> None:
        """
        Register a provider, replacing any provider for the same project type.

        Args:
            provider: The provider instance to register
        """
        self._providers[provider.project_type] = provider

    def get(self, project_type: ProjectType) -> Optional[BaseMetricsProvider]:
        """Return the provider for a project type, or None."""
        return self._providers.get(project_type)

    def supported_types(self) -> list[ProjectType]:
        """Project types that have a provider."""
        return list(self._providers)
