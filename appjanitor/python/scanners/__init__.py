"""Scanner modules for locating an application's files.

Modules:
    applications: Resolve the selected app and list other installed apps
    leftovers: Concurrent walk of the search roots
    models: ApplicationDescriptor, FoundEntry, ScanOutcome
    errors: Precondition failures raised before scanning
"""

from . import applications
from . import leftovers

from .applications import get_bundle_info, installed_bundle_ids, resolve_application
from .errors import AppJanitorError, BundleIdentifierError, InvalidApplicationError
from .leftovers import expand_search_roots, scan
from .models import ApplicationDescriptor, FoundEntry, ScanOutcome

__all__ = [
    "applications",
    "leftovers",
    # applications.py
    "get_bundle_info",
    "installed_bundle_ids",
    "resolve_application",
    # errors.py
    "AppJanitorError",
    "BundleIdentifierError",
    "InvalidApplicationError",
    # leftovers.py
    "expand_search_roots",
    "scan",
    # models.py
    "ApplicationDescriptor",
    "FoundEntry",
    "ScanOutcome",
]
