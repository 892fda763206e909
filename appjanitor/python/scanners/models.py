"""Data model for application scans."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional


@dataclass(frozen=True)
class ApplicationDescriptor:
    """The application whose files are being located.

    Attributes:
        name: Display name (bundle file name without .app)
        bundle_id: Bundle identifier (e.g., "com.microsoft.Outlook")
        path: Absolute path to the .app bundle
        version: CFBundleShortVersionString, if present
    """
    name: str
    bundle_id: str
    path: Path
    version: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'name': self.name,
            'bundle_id': self.bundle_id,
            'path': str(self.path),
            'version': self.version,
        }


@dataclass(eq=False)
class FoundEntry:
    """A file or directory attributed to the application.

    Two entries with the same path are the same entry, whatever their
    selection state, so workers that find the same path collapse on merge.
    """
    path: Path
    selected: bool = True

    def __post_init__(self) -> None:
        self.path = Path(self.path)

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def parent(self) -> str:
        return str(self.path.parent)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FoundEntry):
            return NotImplemented
        return self.path == other.path

    def __hash__(self) -> int:
        return hash(self.path)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'path': str(self.path),
            'name': self.name,
            'parent': self.parent,
            'selected': self.selected,
        }


@dataclass
class ScanOutcome:
    """Result of scanning every search root for one application.

    Attributes:
        entries: Entries attributed to the application; always contains
            the application bundle itself
        permission_error: True if at least one search root could not be
            enumerated
        inaccessible_roots: The roots that could not be enumerated
        cancelled: True if the scan was stopped before every root finished
    """
    entries: set[FoundEntry] = field(default_factory=set)
    permission_error: bool = False
    inaccessible_roots: list[str] = field(default_factory=list)
    cancelled: bool = False

    @property
    def paths(self) -> set[Path]:
        return {entry.path for entry in self.entries}

    def sorted_entries(self) -> list[FoundEntry]:
        """Entries ordered by path, for display and stable output."""
        return sorted(self.entries, key=lambda e: str(e.path))

    def selected_entries(self) -> list[FoundEntry]:
        return [e for e in self.sorted_entries() if e.selected]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'files': [e.to_dict() for e in self.sorted_entries()],
            'count': len(self.entries),
            'permission_error': self.permission_error,
            'inaccessible_roots': self.inaccessible_roots,
            'cancelled': self.cancelled,
        }
