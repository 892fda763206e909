"""Decide whether a filesystem entry belongs to an application.

Matching works on three levels, strongest first:
    1. Anything inside the application's own bundle belongs to it.
    2. Strong path signatures (bundle id, full app name, "<name>.app")
       matched anywhere in the full path. Catches files whose directory
       names carry the app identity even when the leaf name does not.
    3. Every generated signature against the noise-stripped final path
       segment. Short or generic signatures ("app", "code", ".plist")
       only count when they cover the whole segment AND the parent
       directory independently carries a strong signature.

Glob syntax in signatures:
    *   run of separator characters (space, '-', '_', '.', '*', '/', ...),
        including none. Word characters are never skipped, so
        "com*app*desktop" does not match "com*nottheapp*desktop".
    ?   exactly one character
Signatures without '*' are anchored on word boundaries, so "slack" matches
"slack" and "slack*helper" but not "slackware".
"""

import re
from functools import lru_cache
from pathlib import Path
from typing import Callable, Iterable, Optional, Union

from utils.constants import GENERIC_SIGNATURE_MAX_LENGTH

from .noise import KNOWN_NOISE, strip
from .normalize import WILDCARD, wildcardize

# Regex fragment a '*' in a signature turns into
ANY_SEPARATORS = "[^a-z0-9]*"
ANY_CHARACTER = "."


@lru_cache(maxsize=1024)
def glob_to_regex(signature: str) -> re.Pattern:
    """Compile a wildcard signature into a case-insensitive regex.

    Args:
        signature: Signature using '*' and '?' wildcards

    Returns:
        Compiled pattern, word-boundary anchored when the signature has
        no '*'

    Examples:
        >>> bool(glob_to_regex("app").search("webapp"))
        False
        >>> bool(glob_to_regex("com*test*app").search("com.test.app.plist"))
        True
    """
    parts = []
    for char in signature:
        if char == WILDCARD:
            parts.append(ANY_SEPARATORS)
        elif char == "?":
            parts.append(ANY_CHARACTER)
        else:
            parts.append(re.escape(char))
    expression = "".join(parts)

    if ANY_SEPARATORS not in expression:
        expression = rf"\b{expression}\b"

    return re.compile(expression, re.IGNORECASE)


def is_generic_signature(signature: str) -> bool:
    """Check whether a signature is too common to trust on its own.

    Generic signatures are short with no wildcard (<= 4 characters) or
    equal to a known noise extension/substring.
    """
    if len(signature) <= GENERIC_SIGNATURE_MAX_LENGTH and WILDCARD not in signature:
        return True
    return signature.lower() in KNOWN_NOISE


def strong_path_signatures(bundle_id: str, app_name: str) -> list[str]:
    """Signatures specific enough to match anywhere in a path."""
    name = wildcardize(app_name)
    strong = [wildcardize(bundle_id), name]
    if name:
        strong.append(name + ".app")
    return [s for s in strong if s]


def _matches_strong(path_text: str, strong: Iterable[str]) -> bool:
    return any(glob_to_regex(s).search(path_text) for s in strong)


def has_strong_context(directory: str, bundle_id: str, app_name: str) -> bool:
    """Check whether a directory path independently names the application.

    Uses the strong path signatures plus the raw lowercase bundle id and
    app name as literal substrings.

    Args:
        directory: Directory path to inspect
        bundle_id: Application bundle identifier
        app_name: Application display name

    Returns:
        True if the directory carries the application's identity
    """
    text = directory.lower()
    if _matches_strong(text, strong_path_signatures(bundle_id, app_name)):
        return True
    literals = (bundle_id.lower(), app_name.lower())
    return any(literal and literal in text for literal in literals)


def signature_matches(signature: str, stripped_name: str, parent_has_context: bool) -> bool:
    """Apply one signature to a noise-stripped name.

    Generic signatures must cover the whole name and need corroborating
    parent context; specific ones match anywhere. Wildcards left at the
    ends of a stripped name ("app-1.2.3" -> "app*") are separator debris
    and do not count against full cover.
    """
    pattern = glob_to_regex(signature)
    if is_generic_signature(signature):
        core = stripped_name.strip(WILDCARD)
        return parent_has_context and pattern.fullmatch(core) is not None
    return pattern.search(stripped_name) is not None


def file_name_matches(
    signatures: Iterable[str],
    file_name: str,
    computer_name: str = "",
    parent_context: Optional[Callable[[], bool]] = None,
) -> bool:
    """Match signatures against one noise-stripped file name.

    Args:
        signatures: Signatures from matching.signatures()
        file_name: Bare file or directory name
        computer_name: Machine display name, stripped from the name
        parent_context: Called at most once, on the first generic
            signature, to ask whether the parent directory names the app.
            Without it generic signatures never match.

    Returns:
        True if any signature matches the stripped name
    """
    stripped = strip(file_name, computer_name)
    if not stripped:
        return False

    has_context = None
    for signature in signatures:
        if is_generic_signature(signature):
            if has_context is None:
                has_context = parent_context() if parent_context else False
            if signature_matches(signature, stripped, has_context):
                return True
        elif signature_matches(signature, stripped, False):
            return True

    return False


def _is_within(entry: Path, root: Path) -> bool:
    try:
        entry.relative_to(root)
    except ValueError:
        return False
    return True


def is_app_related(
    signatures: Iterable[str],
    bundle_id: str,
    app_name: str,
    entry_path: Union[str, Path],
    app_install_path: Union[str, Path],
    computer_name: str = "",
) -> bool:
    """Decide whether one filesystem entry belongs to the application.

    Args:
        signatures: Signatures from matching.signatures()
        bundle_id: Application bundle identifier
        app_name: Application display name
        entry_path: Absolute path of the candidate entry
        app_install_path: Absolute path of the .app bundle
        computer_name: Machine display name, stripped from file names

    Returns:
        True if the entry is attributed to the application
    """
    entry = Path(entry_path)

    if _is_within(entry, Path(app_install_path)):
        return True

    if _matches_strong(str(entry).lower(), strong_path_signatures(bundle_id, app_name)):
        return True

    return file_name_matches(
        signatures,
        entry.name,
        computer_name,
        parent_context=lambda: has_strong_context(str(entry.parent), bundle_id, app_name),
    )
