"""Installed application inspection.

Reads bundle information from an app's Info.plist to resolve the
application being removed, and enumerates the bundle ids of every other
top-level application so the leftover scanner never claims a sibling
app's files.
"""

import logging
import plistlib
import subprocess
from pathlib import Path
from typing import Iterable, Optional, Union

from utils.constants import TIMEOUT_SYSTEM_QUICK

from .errors import BundleIdentifierError, InvalidApplicationError
from .models import ApplicationDescriptor

logger = logging.getLogger(__name__)


def _bundle_info_from_plist(plist: dict) -> dict:
    return {
        "bundle_id": plist.get("CFBundleIdentifier"),
        "version": plist.get("CFBundleShortVersionString")
        or plist.get("CFBundleVersion"),
        "name": plist.get("CFBundleName") or plist.get("CFBundleDisplayName"),
        "executable": plist.get("CFBundleExecutable"),
    }


def _is_directory(path: Path) -> bool:
    """Path.is_dir() that treats an unreadable path as absent."""
    try:
        return path.is_dir()
    except OSError as e:
        logger.debug("Cannot stat %s: %s", path, e)
        return False


def get_bundle_info(app_path: Path) -> Optional[dict]:
    """Extract bundle info from an app's Info.plist.

    Handles both XML and binary plist formats. For plists plistlib cannot
    read, uses plutil to convert to XML first.

    Args:
        app_path: Path to the .app bundle

    Returns:
        Dictionary with bundle_id, version, name and executable, or None
        if extraction fails
    """
    info_plist = Path(app_path) / "Contents" / "Info.plist"

    try:
        # Try reading directly (works for XML plists and modern binary plists)
        with open(info_plist, "rb") as f:
            plist = plistlib.load(f)
        return _bundle_info_from_plist(plist)
    except plistlib.InvalidFileException:
        # Binary plist that plistlib can't read - use plutil to convert
        try:
            result = subprocess.run(
                ["plutil", "-convert", "xml1", "-o", "-", str(info_plist)],
                capture_output=True,
                timeout=TIMEOUT_SYSTEM_QUICK,
            )
            if result.returncode == 0:
                return _bundle_info_from_plist(plistlib.loads(result.stdout))
        except (subprocess.TimeoutExpired, FileNotFoundError, OSError, plistlib.InvalidFileException) as e:
            logger.debug("plutil could not convert %s: %s", info_plist, e)
        return None
    except FileNotFoundError:
        return None
    except OSError as e:
        # PermissionError included: bundles inside protected locations
        logger.debug("Could not read %s: %s", info_plist, e)
        return None


def resolve_application(app_path: Union[str, Path]) -> ApplicationDescriptor:
    """Build the descriptor for the application selected for removal.

    The display name is the bundle's file name without ".app", matching
    what the user sees in Finder.

    Args:
        app_path: Path to the .app bundle

    Returns:
        ApplicationDescriptor for the bundle

    Raises:
        InvalidApplicationError: If the path is not an existing .app directory
        BundleIdentifierError: If Info.plist has no CFBundleIdentifier
    """
    path = Path(app_path).expanduser()

    if path.suffix.lower() != ".app":
        raise InvalidApplicationError(f"Selected file is not an application (.app): {path}")
    if not _is_directory(path):
        raise InvalidApplicationError(f"Application bundle not found: {path}")

    path = path.resolve()
    name = path.stem
    info = get_bundle_info(path)
    bundle_id = (info or {}).get("bundle_id")

    if not bundle_id:
        raise BundleIdentifierError(
            f"Could not retrieve bundle identifier for {name}. Cannot proceed."
        )

    return ApplicationDescriptor(
        name=name,
        bundle_id=bundle_id,
        path=path,
        version=(info or {}).get("version"),
    )


def installed_bundle_ids(
    app_dirs: Iterable[Union[str, Path]],
    exclude_bundle_id: str = "",
) -> frozenset[str]:
    """Collect lowercase bundle ids of the other installed applications.

    Only top-level bundles are read (non-recursive), matching how apps are
    installed in /Applications and ~/Applications.

    Args:
        app_dirs: Application directories to enumerate
        exclude_bundle_id: The target application's id, dropped from the
            result case-insensitively

    Returns:
        Frozen set of lowercase bundle identifiers
    """
    own_id = exclude_bundle_id.lower()
    bundle_ids: set[str] = set()

    for app_dir in app_dirs:
        app_dir = Path(app_dir)
        if not _is_directory(app_dir):
            continue

        try:
            app_paths = sorted(app_dir.glob("*.app"))
        except OSError as e:
            logger.warning("Could not list applications in %s: %s", app_dir, e)
            continue

        for app_path in app_paths:
            if not _is_directory(app_path):
                continue

            info = get_bundle_info(app_path)
            bundle_id = (info or {}).get("bundle_id")
            if not bundle_id:
                logger.debug("No bundle id for %s", app_path)
                continue

            bundle_id = bundle_id.lower()
            if bundle_id != own_id:
                bundle_ids.add(bundle_id)

    return frozenset(bundle_ids)
