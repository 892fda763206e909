"""Scanner for files an application leaves behind.

Walks every search root concurrently, one worker per root, and collects
the entries the matcher attributes to the application. Each worker owns
its own walk state and returns an independent result; results meet only
at the collection point in scan(), where they are merged by set union.

Pruning rules while walking:
    - Directories named after another installed app's bundle id
    - Files and directories whose stripped name is another installed
      app's bundle id ("com.vendor.other.plist")
    - Language runtime directories (Python3, python3.11, ...)
    - Hidden entries and the inside of .app packages
    - Any directory that already matched (its whole subtree is claimed)

Failure handling:
    - Missing roots are skipped silently
    - A root that cannot be stat'ed or listed sets the permission error flag
    - Unreadable entries inside a root are logged and skipped
"""

import logging
import os
import re
import stat
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, Optional, Union

from matching import WILDCARD, is_app_related, signatures, strip, wildcardize
from utils.constants import (
    PACKAGE_SUFFIXES,
    PROGRESS_EVERY_N_ENTRIES,
    PYTHON_RUNTIME_DIR_PATTERN,
)
from utils.locations import DEFAULT_APPLICATION_DIRS, expand_paths

from .applications import installed_bundle_ids
from .errors import BundleIdentifierError
from .models import FoundEntry, ScanOutcome

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float, str], None]

_PYTHON_RUNTIME_DIR = re.compile(PYTHON_RUNTIME_DIR_PATTERN, re.IGNORECASE)


@dataclass
class _RootResult:
    """What one worker found under one search root."""
    root: Path
    entries: set[FoundEntry] = field(default_factory=set)
    permission_error: bool = False
    cancelled: bool = False


@dataclass(frozen=True)
class _MatchContext:
    """Read-only inputs shared by every worker of one scan."""
    signatures: frozenset[str]
    bundle_id: str
    app_name: str
    app_install_path: Path
    computer_name: str
    exclusion: frozenset[str]
    own_signature: str = ""
    sibling_signatures: tuple[str, ...] = ()


class _ProgressReporter:
    """Best-effort progress for one scan.

    Only the collecting thread advances the completed count; workers
    read it when reporting the path they are examining.
    """

    def __init__(self, callback: Optional[ProgressCallback], total: int):
        self.callback = callback
        self.total = max(total, 1)
        self.completed = 0

    def examining(self, path: str) -> None:
        if self.callback:
            self.callback(self.completed / self.total, path)

    def root_done(self, root: Path) -> None:
        self.completed += 1
        if self.callback:
            self.callback(self.completed / self.total, str(root))


def organization_component(bundle_id: str) -> str:
    """Get the vendor component of a bundle id ("com.microsoft.Outlook" -> "microsoft")."""
    parts = bundle_id.split(".")
    return parts[1] if len(parts) > 1 else ""


def expand_search_roots(search_roots: Iterable[Union[str, Path]], bundle_id: str) -> list[Path]:
    """Add a vendor subdirectory under each search root.

    Args:
        search_roots: Configured search roots, in order
        bundle_id: Application bundle identifier

    Returns:
        Ordered list of unique roots: each root followed by root/<vendor>
    """
    org = organization_component(bundle_id)
    roots: list[Path] = []
    for root in search_roots:
        root = Path(root)
        candidates = [root, root / org] if org else [root]
        for candidate in candidates:
            if candidate not in roots:
                roots.append(candidate)
    return roots


def is_excluded_directory(name: str, relative_parts: Iterable[str], exclusion: frozenset[str]) -> bool:
    """Check whether a directory belongs to another app or a language runtime."""
    lowered = name.lower()
    if lowered in exclusion:
        return True
    if any(part.lower() in exclusion for part in relative_parts):
        return True
    return _PYTHON_RUNTIME_DIR.match(lowered) is not None


def belongs_to_other_app(
    stripped_name: str,
    own_signature: str,
    sibling_signatures: Iterable[str],
) -> bool:
    """Check whether a stripped name is another installed app's bundle id.

    A name is claimed by a bundle id signature when it equals it or
    continues it after a separator ("com*vendor*other*helper"). When both
    the application's own id and a sibling's id claim the name, the
    longer (more specific) one wins.

    Args:
        stripped_name: Output of matching.strip() for the entry name
        own_signature: Wildcardized bundle id of the application
        sibling_signatures: Wildcardized bundle ids of the other apps

    Returns:
        True if the entry should be left to a sibling application
    """
    def claims(signature: str) -> bool:
        return stripped_name == signature or stripped_name.startswith(signature + WILDCARD)

    longest_sibling = max((len(s) for s in sibling_signatures if s and claims(s)), default=0)
    if not longest_sibling:
        return False
    return not (own_signature and claims(own_signature) and len(own_signature) > longest_sibling)


def _is_package(name: str) -> bool:
    return name.lower().endswith(PACKAGE_SUFFIXES)


def _scan_root(
    root: Path,
    context: _MatchContext,
    reporter: _ProgressReporter,
    cancel_event: Optional[threading.Event],
) -> _RootResult:
    """Walk one search root and collect matching entries."""
    result = _RootResult(root=root)

    try:
        root_mode = root.stat().st_mode
    except (FileNotFoundError, NotADirectoryError):
        return result
    except OSError as e:
        logger.warning("Cannot access %s: %s", root, e)
        result.permission_error = True
        return result

    if not stat.S_ISDIR(root_mode):
        return result

    try:
        top_level = list(os.scandir(root))
    except OSError as e:
        # Includes PermissionError: TCC-protected folders without Full Disk Access
        logger.warning("Cannot enumerate %s: %s", root, e)
        result.permission_error = True
        return result

    reporter.examining(str(root))
    stack: list[list[os.DirEntry]] = [top_level]
    visited = 0

    while stack:
        batch = stack.pop()
        for entry in batch:
            if cancel_event is not None and cancel_event.is_set():
                result.cancelled = True
                return result

            visited += 1
            if visited % PROGRESS_EVERY_N_ENTRIES == 0:
                reporter.examining(entry.path)

            if entry.name.startswith("."):
                continue

            try:
                is_dir = entry.is_dir(follow_symlinks=False)
                is_file = entry.is_file(follow_symlinks=False)
            except OSError as e:
                logger.debug("Skipping unreadable entry %s: %s", entry.path, e)
                continue

            if is_dir:
                relative_parts = Path(entry.path).relative_to(root).parts[:-1]
                if is_excluded_directory(entry.name, relative_parts, context.exclusion):
                    continue
            elif not is_file:
                continue

            matched = is_app_related(
                context.signatures,
                context.bundle_id,
                context.app_name,
                entry.path,
                context.app_install_path,
                context.computer_name,
            )
            if matched:
                stripped = strip(entry.name, context.computer_name)
                if belongs_to_other_app(stripped, context.own_signature, context.sibling_signatures):
                    logger.debug("Leaving %s to another installed app", entry.path)
                else:
                    result.entries.add(FoundEntry(Path(entry.path)))
                continue

            if is_dir and not _is_package(entry.name):
                try:
                    stack.append(list(os.scandir(entry.path)))
                except OSError as e:
                    logger.debug("Skipping unreadable directory %s: %s", entry.path, e)

    return result


def scan(
    app_install_path: Union[str, Path],
    app_name: str,
    bundle_id: str,
    search_roots: Iterable[Union[str, Path]],
    progress: Optional[ProgressCallback] = None,
    computer_name: str = "",
    application_dirs: Optional[Iterable[Union[str, Path]]] = None,
    exclusion: Optional[Iterable[str]] = None,
    max_workers: Optional[int] = None,
    cancel_event: Optional[threading.Event] = None,
) -> ScanOutcome:
    """Find every file and directory that belongs to an application.

    Args:
        app_install_path: Path to the application's .app bundle
        app_name: Application display name
        bundle_id: Application bundle identifier
        search_roots: Directories to walk, in order
        progress: Optional callback(fraction_of_roots_done, current_path).
            Advisory only; calls from different roots interleave.
        computer_name: Machine display name, stripped from file names
        application_dirs: Directories holding other installed apps.
            Defaults to /Applications and ~/Applications.
        exclusion: Precomputed lowercase bundle ids of other apps. When
            given, application_dirs is not read.
        max_workers: Thread cap; defaults to one thread per root
        cancel_event: When set, workers stop and their partial results
            are discarded

    Returns:
        ScanOutcome containing at least the application bundle itself

    Raises:
        BundleIdentifierError: If bundle_id is empty
    """
    if not bundle_id:
        raise BundleIdentifierError(f"No bundle identifier for {app_name}. Cannot proceed.")

    install_path = Path(app_install_path)

    if exclusion is None:
        app_dirs = (
            [Path(d) for d in application_dirs]
            if application_dirs is not None
            else expand_paths(DEFAULT_APPLICATION_DIRS)
        )
        excluded = installed_bundle_ids(app_dirs, exclude_bundle_id=bundle_id)
    else:
        own_id = bundle_id.lower()
        excluded = frozenset(b.lower() for b in exclusion if b.lower() != own_id)

    context = _MatchContext(
        signatures=frozenset(signatures(app_name, bundle_id)),
        bundle_id=bundle_id,
        app_name=app_name,
        app_install_path=install_path,
        computer_name=computer_name,
        exclusion=excluded,
        own_signature=wildcardize(bundle_id),
        sibling_signatures=tuple(sorted(wildcardize(b) for b in excluded)),
    )

    outcome = ScanOutcome(entries={FoundEntry(install_path)})

    roots = expand_search_roots(search_roots, bundle_id)
    if not roots:
        return outcome

    logger.info(
        "Scanning %d locations for %s (%s) with %d signatures and %d excluded apps",
        len(roots), app_name, bundle_id, len(context.signatures), len(excluded),
    )

    reporter = _ProgressReporter(progress, len(roots))
    inaccessible: list[str] = []

    with ThreadPoolExecutor(max_workers=max_workers or len(roots)) as executor:
        futures = {
            executor.submit(_scan_root, root, context, reporter, cancel_event): root
            for root in roots
        }

        for future in as_completed(futures):
            result = future.result()
            reporter.root_done(result.root)

            if result.cancelled:
                outcome.cancelled = True
                continue

            outcome.entries |= result.entries
            if result.permission_error:
                outcome.permission_error = True
                inaccessible.append(str(result.root))

    outcome.inaccessible_roots = sorted(inaccessible)
    logger.info("Found %d entries for %s", len(outcome.entries), app_name)
    return outcome
