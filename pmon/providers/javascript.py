"""JavaScript/Node.js metrics provider (mock build metrics)."""

from datetime import timedelta

from pmon.providers.mock import MIB, MockBuildProvider
from pmon.schema import ProjectType


class JavaScriptProvider(MockBuildProvider):
    """Reports a 5s build and a 1 MiB bundle."""

    name = "JavaScript"
    project_type = ProjectType.JAVASCRIPT

    BUILD_TIME = timedelta(seconds=5)
    BUNDLE_SIZE = 1 * MIB
