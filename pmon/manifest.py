"""
package.json Reader

Reads the subset of a Node.js package manifest that pmon needs:
    - dependencies     (name -> version range)
    - devDependencies  (name -> version range)
    - scripts          (name -> shell command)

Unlike a best-effort metadata scraper, any problem here is fatal: a missing,
unreadable or malformed manifest raises DetectionError so the detector never
returns a half-populated ProjectInfo.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pmon.exceptions import DetectionError

PACKAGE_JSON = "package.json"

# Manifest fields that must be string -> string mappings when present
MAPPING_FIELDS = ("dependencies", "devDependencies", "scripts")


@dataclass
class PackageManifest:
    """
    The parts of package.json pmon uses.

    Attributes:
        dependencies: Runtime dependencies
        dev_dependencies: Development dependencies
        scripts: npm scripts
    """
    dependencies: dict[str, str] = field(default_factory=dict)
    dev_dependencies: dict[str, str] = field(default_factory=dict)
    scripts: dict[str, str] = field(default_factory=dict)

    def merged_dependencies(self) -> dict[str, str]:
        """
        Merge dev and runtime dependencies into one mapping.

        When a name appears in both, the runtime ("dependencies") version wins.
        """
        merged = dict(self.dev_dependencies)
        merged.update(self.dependencies)
        return merged


def _string_mapping(data: dict[str, Any], key: str) -> dict[str, str]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise DetectionError(
            f"error parsing {PACKAGE_JSON}: '{key}' must be an object, "
            f"got {type(value).__name__}"
        )
    for name, item in value.items():
        if not isinstance(item, str):
            raise DetectionError(
                f"error parsing {PACKAGE_JSON}: '{key}.{name}' must be a string, "
                f"got {type(item).__name__}"
            )
    return dict(value)


def parse_package_json(content: str) -> PackageManifest:
    """
    Parse package.json text.

    Args:
        content: Raw file content

    Returns:
        The parsed manifest

    Raises:
        DetectionError: If the JSON is malformed or has the wrong shape
    """
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise DetectionError(f"error parsing {PACKAGE_JSON}: {e}") from e

    if not isinstance(data, dict):
        raise DetectionError(
            f"error parsing {PACKAGE_JSON}: top level must be an object, "
            f"got {type(data).__name__}"
        )

    return PackageManifest(
        dependencies=_string_mapping(data, "dependencies"),
        dev_dependencies=_string_mapping(data, "devDependencies"),
        scripts=_string_mapping(data, "scripts"),
    )


def read_package_json(root_path: Path) -> PackageManifest:
    """
    Read and parse package.json from a project root.

    Raises:
        DetectionError: If the file cannot be read or parsed
    """
    path = Path(root_path) / PACKAGE_JSON
    try:
        with open(path, "r", encoding="utf-8") as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise DetectionError(f"error reading {PACKAGE_JSON}: {e}") from e

    return parse_package_json(content)
