"""Python metrics provider."""

from typing import Optional

from pmon.providers.base import BaseMetricsProvider
from pmon.schema import AnalysisCategory, ProjectInfo, ProjectType


class PythonProvider(BaseMetricsProvider):
    """
    Accepts Python projects but measures nothing yet.

    Analysis of a Python project succeeds with every metrics section absent.
    """

    name = "Python"
    project_type = ProjectType.PYTHON

    def collect(
        self,
        project_info: ProjectInfo,
        category: AnalysisCategory,
    ) -> Optional[object]:
        return None
