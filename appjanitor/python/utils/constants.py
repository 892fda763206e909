"""Centralized constants for App Janitor.

Provides the matching thresholds, subprocess timeouts and scan tuning
values used throughout the codebase. Centralizing these values makes them
easier to tune and keeps them visible instead of buried in the logic.
"""

# =============================================================================
# MATCHING
# =============================================================================

# Signatures at or below this length (and without a wildcard) are generic:
# they need a full-name match plus corroborating parent directory context.
# Fixed heuristic; not derived from signature statistics.
GENERIC_SIGNATURE_MAX_LENGTH = 4

# =============================================================================
# SUBPROCESS TIMEOUTS (in seconds)
# =============================================================================

# Quick local system queries that should complete almost instantly
# Used for: scutil, plutil
TIMEOUT_SYSTEM_QUICK = 5

# =============================================================================
# SCANNING
# =============================================================================

# Workers report the path they are examining once every N entries
PROGRESS_EVERY_N_ENTRIES = 200

# Directory suffixes treated as opaque packages (never descended)
PACKAGE_SUFFIXES = (".app",)

# Language runtime directories (Python3, python3.11, ...) never hold
# application leftovers worth surfacing
PYTHON_RUNTIME_DIR_PATTERN = r"^python\d+(\.\d+)*$"
