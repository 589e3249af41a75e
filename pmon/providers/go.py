"""Go metrics provider (mock build metrics)."""

from datetime import timedelta

from pmon.providers.mock import MIB, MockBuildProvider
from pmon.schema import ProjectType


class GoProvider(MockBuildProvider):
    """Reports a 2s build and a 10 MiB binary."""

    name = "Go"
    project_type = ProjectType.GO

    BUILD_TIME = timedelta(seconds=2)
    BUNDLE_SIZE = 10 * MIB
