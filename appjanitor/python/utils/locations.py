"""Search location configuration.

Loads the directories walked by the leftover scanner and the directories
holding other installed applications from search-locations.yaml.

The file is optional: when it is missing or malformed the built-in
defaults below are used, so a scan always has somewhere to look.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)


DEFAULT_SEARCH_ROOTS = [
    "/Applications",
    "/private/var/db/receipts",
    "/Library/LaunchDaemons",
    "~",
    "~/Downloads",
    "~/Library",
    "~/Library/Application Support",
    "~/Library/Application Scripts",
    "~/Library/Application Support/CrashReporter",
    "~/Library/Containers",
    "~/Library/Caches",
    "~/Library/HTTPStorages",
    "~/Library/Group Containers",
    "~/Library/Internet Plug-Ins",
    "~/Library/LaunchAgents",
    "~/Library/Logs",
    "/Library/Logs/DiagnosticReports",
    "~/Library/Preferences",
    "~/Library/Preferences/ByHost",
    "~/Library/Saved Application State",
    "~/Library/WebKit",
    "~/Library/Caches/com.apple.helpd/Generated",
    "/Library/Audio/Plug-Ins/HAL",
]

DEFAULT_APPLICATION_DIRS = [
    "/Applications",
    "~/Applications",
]


def _default_locations_path() -> Path:
    """Get the default path to search-locations.yaml."""
    # Go from utils/ up to python/, then to data/
    module_dir = Path(__file__).parent
    return module_dir.parent.parent / "data" / "search-locations.yaml"


@dataclass
class SearchLocations:
    """Directories used by a scan.

    Attributes:
        search_roots: Directories walked for leftovers, in order
        application_dirs: Directories whose top-level .app bundles are
            other installed applications
    """
    search_roots: list[Path] = field(default_factory=list)
    application_dirs: list[Path] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'search_roots': [str(p) for p in self.search_roots],
            'application_dirs': [str(p) for p in self.application_dirs],
        }


def expand_paths(paths: list[str]) -> list[Path]:
    """Expand ~ in each path and drop duplicates, keeping order."""
    expanded: list[Path] = []
    for path in paths:
        resolved = Path(str(path)).expanduser()
        if resolved not in expanded:
            expanded.append(resolved)
    return expanded


def _read_list(data: dict[str, Any], key: str, default: list[str]) -> list[str]:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        logger.warning("Ignoring malformed '%s' in search locations; using defaults", key)
        return default
    return value


def load_search_locations(locations_path: Optional[Path] = None) -> SearchLocations:
    """Load search locations from YAML, falling back to defaults.

    Args:
        locations_path: Path to search-locations.yaml. If None, uses the
            file shipped in data/.

    Returns:
        SearchLocations with ~ expanded
    """
    path = Path(locations_path) if locations_path else _default_locations_path()
    data: dict[str, Any] = {}

    try:
        if path.exists():
            with open(path, 'r') as f:
                loaded = yaml.safe_load(f) or {}
            if isinstance(loaded, dict):
                data = loaded
            else:
                logger.warning("Search locations file %s is not a mapping; using defaults", path)
        else:
            logger.debug("No search locations file at %s; using defaults", path)
    except (yaml.YAMLError, OSError) as e:
        # Fail gracefully with the built-in defaults
        logger.warning("Could not read search locations %s: %s", path, e)

    return SearchLocations(
        search_roots=expand_paths(_read_list(data, 'search_roots', DEFAULT_SEARCH_ROOTS)),
        application_dirs=expand_paths(
            _read_list(data, 'application_dirs', DEFAULT_APPLICATION_DIRS)
        ),
    )
