"""Matching modules for attributing files to an application.

Modules:
    normalize: Lowercasing and separator-to-wildcard transforms
    noise: Removal of UUIDs, dates, versions, extensions and host name
    signatures: Signature generation from app name and bundle id
    matcher: Glob compilation and the relatedness decision

Usage:
    from matching import signatures, is_app_related

    sigs = signatures("Microsoft Outlook", "com.microsoft.Outlook")
    is_app_related(sigs, "com.microsoft.Outlook", "Microsoft Outlook",
                   "/Users/me/Library/Caches/com.microsoft.Outlook",
                   "/Applications/Microsoft Outlook.app")
"""

from .normalize import (
    WILDCARD,
    normalize,
    strip_separators,
    wildcardize,
)
from .noise import (
    COMMON_EXTENSIONS,
    COMMON_SUBSTRINGS,
    KNOWN_NOISE,
    normalize_computer_name,
    strip,
)
from .signatures import signatures
from .matcher import (
    glob_to_regex,
    has_strong_context,
    is_app_related,
    is_generic_signature,
    file_name_matches,
    signature_matches,
    strong_path_signatures,
)

__all__ = [
    # normalize.py
    'WILDCARD',
    'normalize',
    'strip_separators',
    'wildcardize',
    # noise.py
    'COMMON_EXTENSIONS',
    'COMMON_SUBSTRINGS',
    'KNOWN_NOISE',
    'normalize_computer_name',
    'strip',
    # signatures.py
    'signatures',
    # matcher.py
    'glob_to_regex',
    'has_strong_context',
    'is_app_related',
    'is_generic_signature',
    'file_name_matches',
    'signature_matches',
    'strong_path_signatures',
]
