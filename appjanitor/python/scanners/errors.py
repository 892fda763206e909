"""Exceptions raised before a scan can start.

Access problems during a scan are never raised: unreadable search roots
are reported on the ScanOutcome and unreadable entries are skipped.
"""


class AppJanitorError(Exception):
    """Base class for App Janitor errors."""
    pass


class InvalidApplicationError(AppJanitorError):
    """Raised when the selected path is not an application bundle."""
    pass


class BundleIdentifierError(AppJanitorError):
    """Raised when an application's bundle identifier cannot be resolved.

    Scanning needs the bundle id for signatures and exclusion, so no
    partial scan is attempted without one.
    """
    pass
