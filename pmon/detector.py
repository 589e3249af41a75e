"""
pmon Project Detector

This module classifies a project directory into a project type, framework
and build tool by probing for marker files and reading package.json.

Key Responsibilities:
    1. Test marker files in a fixed priority order and commit to the first match
    2. Parse package.json for JavaScript projects (dependencies, scripts)
    3. Sniff the UI framework from declared dependencies
    4. Sniff the build tool from config files and dependencies

Design Notes:
    - Every classification step is an ordered rule table (first match wins),
      kept at module level so the ordering can be read and tested directly
    - Only the root directory is checked; subdirectories are never scanned
    - Presence checks only: no versions, no weighting, no confidence scores

Limitations:
    - Python and Java projects are classified by manifest presence alone;
      framework and build tool stay empty for them
    - Go projects always report the standard library and "go build"
"""

from pathlib import Path
from typing import Mapping

from pmon.exceptions import DetectionError
from pmon.manifest import read_package_json
from pmon.schema import ProjectInfo, ProjectType

# Marker files per project type.
# Each tuple contains: (marker_filenames, project_type, description)
# Order matters: first match wins. Any one marker in a row is enough.
MARKER_RULES: list[tuple[tuple[str, ...], ProjectType, str]] = [
    (("package.json",), ProjectType.JAVASCRIPT, "Node.js package manifest"),
    (("go.mod",), ProjectType.GO, "Go module definition"),
    (("requirements.txt", "pyproject.toml"), ProjectType.PYTHON, "Python requirements or project config"),
    (("pom.xml", "build.gradle"), ProjectType.JAVA, "Maven or Gradle build file"),
]

# Framework by dependency name: (dependency_key, framework_label)
# Order matters: "next" must precede "react" since Next.js apps depend on both.
FRAMEWORK_RULES: list[tuple[str, str]] = [
    ("next", "Next.js"),
    ("react", "React"),
    ("vue", "Vue.js"),
    ("angular", "Angular"),
    ("svelte", "Svelte"),
]
DEFAULT_FRAMEWORK = "Vanilla JavaScript"

# Build tool rules: (check_kind, names, build_tool_label)
#   "config"     - any of the named files exists in the project root
#   "dependency" - any of the named packages is a declared dependency
# Order matters: first match wins.
BUILD_TOOL_RULES: list[tuple[str, tuple[str, ...], str]] = [
    ("config", ("vite.config.js", "vite.config.ts"), "Vite"),
    ("config", ("webpack.config.js", "webpack.config.ts"), "Webpack"),
    ("dependency", ("parcel",), "Parcel"),
    ("config", ("rollup.config.js",), "Rollup"),
]
DEFAULT_BUILD_TOOL = "Unknown"

GO_FRAMEWORK = "Standard Library"
GO_BUILD_TOOL = "Go Build"


def has_file(root_path: Path, filename: str) -> bool:
    """Check whether a path named `filename` exists directly under root_path."""
    return (Path(root_path) / filename).exists()


def match_project_type(root_path: Path) -> ProjectType:
    """
    Find the project type from marker files alone.

    Returns:
        The first matching ProjectType, or ProjectType.UNKNOWN
    """
    for markers, project_type, _description in MARKER_RULES:
        if any(has_file(root_path, marker) for marker in markers):
            return project_type
    return ProjectType.UNKNOWN


def detect_framework(deps: Mapping[str, str]) -> str:
    """
    Guess the UI framework from dependency names.

    Args:
        deps: Merged dependency mapping (name -> version)

    Returns:
        Framework label, or "Vanilla JavaScript" if no rule matches
    """
    for key, label in FRAMEWORK_RULES:
        if key in deps:
            return label
    return DEFAULT_FRAMEWORK


def detect_build_tool(root_path: Path, deps: Mapping[str, str]) -> str:
    """
    Guess the build tool from config files and dependencies.

    Args:
        root_path: Project root directory
        deps: Merged dependency mapping (name -> version)

    Returns:
        Build tool label, or "Unknown" if no rule matches
    """
    for kind, names, label in BUILD_TOOL_RULES:
        if kind == "config":
            matched = any(has_file(root_path, name) for name in names)
        else:
            matched = any(name in deps for name in names)
        if matched:
            return label
    return DEFAULT_BUILD_TOOL


class ProjectDetector:
    """
    Classifies a project directory.

    Usage:
        detector = ProjectDetector("/path/to/project")
        info = detector.detect()
        print(info.type, info.framework, info.build_tool)

    Attributes:
        root_path: The directory to classify
    """

    def __init__(self, root_path: str | Path):
        """
        Initialize the detector.

        Args:
            root_path: Path to the project root

        Raises:
            DetectionError: If the path does not exist or is not a directory
        """
        self.root_path = Path(root_path).resolve()

        if not self.root_path.exists():
            raise DetectionError(f"path does not exist: {self.root_path}")
        if not self.root_path.is_dir():
            raise DetectionError(f"path is not a directory: {self.root_path}")

    def detect(self) -> ProjectInfo:
        """
        Classify the project.

        Returns:
            A fully populated ProjectInfo

        Raises:
            DetectionError: If no marker file is found or package.json is invalid
        """
        project_type = match_project_type(self.root_path)

        if project_type == ProjectType.JAVASCRIPT:
            return self._detect_javascript()
        if project_type == ProjectType.GO:
            return self._detect_go()
        if project_type == ProjectType.PYTHON:
            return self._detect_presence_only(ProjectType.PYTHON, "Python")
        if project_type == ProjectType.JAVA:
            return self._detect_presence_only(ProjectType.JAVA, "Java")

        raise DetectionError("unknown project type - no recognized project files found")

    def _detect_javascript(self) -> ProjectInfo:
        manifest = read_package_json(self.root_path)
        deps = manifest.merged_dependencies()

        return ProjectInfo(
            type=ProjectType.JAVASCRIPT,
            language="JavaScript",
            root_path=str(self.root_path),
            framework=detect_framework(deps),
            build_tool=detect_build_tool(self.root_path, deps),
            dependencies=deps,
            scripts=manifest.scripts,
        )

    def _detect_go(self) -> ProjectInfo:
        return ProjectInfo(
            type=ProjectType.GO,
            language="Go",
            root_path=str(self.root_path),
            framework=GO_FRAMEWORK,
            build_tool=GO_BUILD_TOOL,
        )

    def _detect_presence_only(self, project_type: ProjectType, language: str) -> ProjectInfo:
        # Framework and build tool detection (Django, Spring, Maven, ...) is not done yet
        return ProjectInfo(
            type=project_type,
            language=language,
            root_path=str(self.root_path),
        )


def detect_project(path: str | Path) -> ProjectInfo:
    """
    Convenience function to classify a project directory.

    This is the main entry point for detection.

    Args:
        path: Path to the project root

    Returns:
        ProjectInfo describing the project

    Raises:
        DetectionError: If the directory cannot be classified

    Example:
        info = detect_project(".")
        if info.type == ProjectType.JAVASCRIPT:
            print(f"{info.framework} app built with {info.build_tool}")
    """
    return ProjectDetector(path).detect()
