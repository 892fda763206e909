"""String normalization for application signatures.

Two views of a name are used throughout matching:
    normalize: lowercase, spaces replaced by a spacer ("" by default)
    wildcardize: lowercase, every separator (space, -, _, .) replaced by '*'

The wildcard form lets one signature match any separator style a vendor
uses on disk ("Visual Studio Code", "visual-studio-code", "visual_studio.code").
"""

WILDCARD = "*"

# Characters treated as word separators in names and bundle identifiers
SEPARATORS = (" ", "-", "_", ".")


def normalize(s: str, spacer: str = "") -> str:
    """Lowercase a string and replace spaces with a spacer.

    Args:
        s: The input string
        spacer: Replacement for each space character

    Returns:
        Normalized string

    Examples:
        >>> normalize("AppName")
        'appname'
        >>> normalize("My Computer", "-")
        'my-computer'
    """
    return s.lower().replace(" ", spacer)


def wildcardize(s: str) -> str:
    """Lowercase a string and turn every separator into a wildcard.

    Examples:
        >>> wildcardize("app Name")
        'app*name'
        >>> wildcardize("com-test_app")
        'com*test*app'
    """
    result = s.lower()
    for separator in SEPARATORS:
        result = result.replace(separator, WILDCARD)
    return result


def strip_separators(s: str) -> str:
    """Lowercase a string and drop every separator character."""
    result = s.lower()
    for separator in SEPARATORS:
        result = result.replace(separator, "")
    return result
