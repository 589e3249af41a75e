"""
Mock build metrics.

Nothing here runs a build. MockBuildProvider returns fixed build time and
bundle size figures plus the real dependency count, and marks the record
as mock so reports label it. A real provider would invoke the project's
build, time it and measure the output artifacts.
"""

from datetime import timedelta
from typing import Optional

from pmon.providers.base import BaseMetricsProvider
from pmon.schema import AnalysisCategory, BuildMetrics, ProjectInfo

MIB = 1024 * 1024


class MockBuildProvider(BaseMetricsProvider):
    """
    Provider that answers the build category with constant values.

    Subclasses set BUILD_TIME and BUNDLE_SIZE. Every other category is
    reported as not measured.
    """

    BUILD_TIME: timedelta = timedelta(0)
    BUNDLE_SIZE: int = 0

    def collect(
        self,
        project_info: ProjectInfo,
        category: AnalysisCategory,
    ) -> Optional[BuildMetrics]:
        if category != AnalysisCategory.BUILD:
            return None
        return BuildMetrics(
            build_time=self.BUILD_TIME,
            bundle_size=self.BUNDLE_SIZE,
            dependencies=len(project_info.dependencies),
            warnings=[],
            mock=True,
        )
