#!/usr/bin/env python3
"""App Janitor main entry point.

Single entry point for the App Janitor Python backend, called by the
front end once the user has picked an application.

Usage:
    python3 main.py /path/to/config.json

The config.json file should contain:
    {
        "app_path": "/Applications/Microsoft Outlook.app",
        "search_roots": ["~/Library/Caches"],          // optional
        "computer_name": "Jane’s MacBook Pro",          // optional
        "locations_file": "~/search-locations.yaml",    // optional
        "log_level": "INFO"                             // optional
    }

This script:
    1. Reads configuration from JSON file
    2. Resolves the application bundle (name, bundle id)
    3. Loads search locations and the computer name
    4. Scans every search root for the application's files
    5. Outputs JSON with the found files and any inaccessible locations
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any

# Allow running as script from any location: add the python/ directory
# to sys.path and use absolute imports from there.
_script_dir = Path(__file__).resolve().parent
if str(_script_dir) not in sys.path:
    sys.path.insert(0, str(_script_dir))

PERMISSION_MESSAGE = (
    'App Janitor needs "Full Disk Access" to scan all related files for this '
    "application. Without it, some files (e.g., in Application Support, Caches, "
    "or Logs) might not be found. Grant access in System Settings > Privacy & "
    "Security > Full Disk Access."
)


def _print_progress(fraction: float, path: str) -> None:
    print(f"[{fraction:6.1%}] {path}", file=sys.stderr, flush=True)


def _log_level(config: dict[str, Any]) -> int:
    """Resolve the configured log level name (default WARNING).

    Raises:
        ValueError: If the name is not a logging level
    """
    name = str(config.get("log_level", "WARNING")).upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log_level: {config.get('log_level')!r}")
    return level


def run_scan(config: dict[str, Any]) -> dict[str, Any]:
    """Run a complete scan for the configured application.

    Args:
        config: Configuration dictionary with:
            - app_path: Path to the .app bundle (required)
            - search_roots: Optional list overriding the configured roots
            - computer_name: Optional machine name (default: scutil)
            - locations_file: Optional search-locations.yaml path

    Returns:
        Results dictionary for the front end

    Raises:
        InvalidApplicationError: If app_path is not an application bundle
        BundleIdentifierError: If the bundle id cannot be resolved
    """
    from scanners import resolve_application, scan
    from utils.locations import expand_paths, load_search_locations
    from utils.system_info import get_computer_name

    app_path = config.get("app_path")
    if not app_path:
        raise ValueError("Config is missing 'app_path'")

    app = resolve_application(app_path)

    locations_file = config.get("locations_file")
    locations = load_search_locations(
        Path(locations_file).expanduser() if locations_file else None
    )

    search_roots = locations.search_roots
    if config.get("search_roots"):
        search_roots = expand_paths(config["search_roots"])

    computer_name = config.get("computer_name")
    if computer_name is None:
        computer_name = get_computer_name()

    print(f"Scanning for files of {app.name} ({app.bundle_id})...", file=sys.stderr, flush=True)
    outcome = scan(
        app.path,
        app.name,
        app.bundle_id,
        search_roots,
        progress=_print_progress,
        computer_name=computer_name,
        application_dirs=locations.application_dirs,
    )

    results: dict[str, Any] = {
        "status": "success",
        "app": app.to_dict(),
        **outcome.to_dict(),
        "warnings": [],
    }

    if outcome.permission_error:
        results["status"] = "partial"
        results["warnings"].append(PERMISSION_MESSAGE)

    return results


def main() -> None:
    """Main entry point for App Janitor."""
    from scanners.errors import AppJanitorError

    # Check arguments
    if len(sys.argv) < 2:
        print(json.dumps({
            "status": "error",
            "error": "Usage: python3 main.py /path/to/config.json"
        }))
        sys.exit(1)

    config_path = Path(sys.argv[1]).expanduser()

    # Read config file
    try:
        with open(config_path) as f:
            config = json.load(f)
    except FileNotFoundError:
        print(json.dumps({
            "status": "error",
            "error": f"Config file not found: {config_path}"
        }))
        sys.exit(1)
    except json.JSONDecodeError as e:
        print(json.dumps({
            "status": "error",
            "error": f"Invalid JSON in config file: {e}"
        }))
        sys.exit(1)

    # Run scan
    try:
        logging.basicConfig(
            level=_log_level(config),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )
        results = run_scan(config)
        print(json.dumps(results, indent=2, default=str))
    except (AppJanitorError, ValueError) as e:
        print(json.dumps({
            "status": "error",
            "error": str(e),
            "exception_type": type(e).__name__,
        }))
        sys.exit(1)


if __name__ == "__main__":
    main()
