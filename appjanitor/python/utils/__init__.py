"""Utility modules for common operations.

Modules:
    constants: Matching thresholds, timeouts and scan tuning values
    locations: Search root configuration (search-locations.yaml)
    system_info: Host machine name via scutil
"""

from .constants import (
    GENERIC_SIGNATURE_MAX_LENGTH,
    PACKAGE_SUFFIXES,
    PROGRESS_EVERY_N_ENTRIES,
    PYTHON_RUNTIME_DIR_PATTERN,
    TIMEOUT_SYSTEM_QUICK,
)

from .locations import (
    DEFAULT_APPLICATION_DIRS,
    DEFAULT_SEARCH_ROOTS,
    SearchLocations,
    expand_paths,
    load_search_locations,
)

from .system_info import get_computer_name

__all__ = [
    # constants
    'GENERIC_SIGNATURE_MAX_LENGTH',
    'PACKAGE_SUFFIXES',
    'PROGRESS_EVERY_N_ENTRIES',
    'PYTHON_RUNTIME_DIR_PATTERN',
    'TIMEOUT_SYSTEM_QUICK',
    # locations
    'DEFAULT_APPLICATION_DIRS',
    'DEFAULT_SEARCH_ROOTS',
    'SearchLocations',
    'expand_paths',
    'load_search_locations',
    # system_info
    'get_computer_name',
]
