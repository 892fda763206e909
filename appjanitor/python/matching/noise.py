"""Noise removal for candidate file names.

Files left behind by an application often carry substrings that say
nothing about which application wrote them: UUIDs, crash report dates,
version numbers, Finder duplicate counters, bundle extensions and
architecture tags. They are removed before a name is compared against
the application's signatures.

Removal happens in four passes:
    1. Regex noise, applied one pattern at a time on the previous output
    2. Known extensions and substrings (plain, case-insensitive)
    3. The machine's computer name (crash reports and ByHost preferences
       embed it)
    4. Remaining separators become wildcards

Known limitation:
    strip() is idempotent for the regex noise it targets, but not in
    general. Deleting an extension or substring in pass 2 can join two
    fragments into a new regex match ("app5.install3" becomes "app5.3"),
    and that match is left in place rather than re-looping.
"""

import re

from .normalize import normalize, wildcardize


# =============================================================================
# REGEX NOISE (applied in this order)
# =============================================================================

UUID_PATTERN = r"[a-f0-9]{8}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{12}"

# Diagnostic report timestamp, e.g. 2023-04-11-093012
DATE_PATTERN = r"[0-9]{4}-[0-9]{2}-[0-9]{2}-[0-9]{6}"

# Diagnostic report suffix, e.g. .cpu_resource.diag
DIAG_PATTERN = r".[a-z]+_resource\.diag"

MAJOR_MINOR_PATCH_PATTERN = r"[0-9]{1,4}\.[0-9]{1,3}\.[0-9]{1,3}"

MAJOR_MINOR_PATTERN = r"[0-9]{1,4}\.[0-9]{1,3}"

# Finder duplicate counter, e.g. "report (2)"
DUPLICATE_COUNTER_PATTERN = r"\([0-9]{1,2}\)"

NOISE_PATTERNS = [
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        UUID_PATTERN,
        DATE_PATTERN,
        DIAG_PATTERN,
        MAJOR_MINOR_PATCH_PATTERN,
        MAJOR_MINOR_PATTERN,
        DUPLICATE_COUNTER_PATTERN,
    )
]

# =============================================================================
# PLAIN SUBSTRING NOISE
# =============================================================================

COMMON_EXTENSIONS = [
    ".dmg",
    ".app",
    ".bom",
    ".plist",
    ".XPCHelper",
    ".beta",
    ".extensions",
    ".savedState",
    ".driver",
    ".wakeups_resource",
    ".diag",
    ".zip",
]

COMMON_SUBSTRINGS = [
    "install",
    "universal",
    "arm64",
    "x64",
    "intel",
    "macOS",
]

# Lowercased view used for generic-signature classification
KNOWN_NOISE = frozenset(p.lower() for p in COMMON_EXTENSIONS + COMMON_SUBSTRINGS)

# Characters scutil may return in a computer name ("Jane’s MacBook (2)")
_COMPUTER_NAME_DROP = ("â€™", "’", "'", "(", ")")


def normalize_computer_name(computer_name: str) -> str:
    """Convert a computer name into the form macOS uses in file names.

    "Jane’s MacBook Pro" becomes "janes-macbook-pro".
    """
    name = normalize(computer_name.strip(), "-")
    for char in _COMPUTER_NAME_DROP:
        name = name.replace(char, "")
    return name


def strip(name: str, computer_name: str = "") -> str:
    """Remove noise substrings from a file name.

    Args:
        name: File name (or any string) to clean
        computer_name: The machine's display name, as returned by
            ``scutil --get ComputerName``. Empty string skips that pass.

    Returns:
        Lowercase, wildcardized name with noise removed

    Examples:
        >>> strip("Slack-4.33.90.dmg")
        'slack*'
        >>> strip("com.tinyspeck.slackmacgap.plist")
        'com*tinyspeck*slackmacgap'
    """
    result = name.lower()

    for pattern in NOISE_PATTERNS:
        result = pattern.sub("", result)

    for substring in COMMON_EXTENSIONS + COMMON_SUBSTRINGS:
        result = result.replace(substring.lower(), "")

    if computer_name:
        host = normalize_computer_name(computer_name)
        if host:
            result = result.replace(host, "")

    return wildcardize(result)
