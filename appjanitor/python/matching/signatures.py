"""Signature generation from an application's name and bundle identifier.

A signature is one lowercase view of the app's identity. Each is produced
in two flavours: wildcardized (separators become '*') and normalized
(separators removed), because vendors name their support files both ways:

    "Microsoft Outlook" / "com.microsoft.Outlook" yields
        microsoft*outlook, microsoftoutlook,
        com*microsoft*outlook, commicrosoftoutlook,
        com*microsoft, commicrosoft,
        outlook
"""

from .normalize import strip_separators, wildcardize


def _both_forms(value: str) -> list[str]:
    return [wildcardize(value), strip_separators(value)]


def signatures(app_name: str, bundle_id: str) -> set[str]:
    """Derive the set of match signatures for an application.

    Produces:
    - App name, wildcardized and normalized
    - Bundle id, wildcardized and normalized
    - Bundle id without its last component (vendor scope), when the id
      has more than two components
    - Last word of the app name
    - Last component of the bundle id (usually the product token)
    - First dot component of the app name, when the name contains a dot
      ("app.Name" -> "app")

    Args:
        app_name: Application display name (e.g., "Microsoft Outlook")
        bundle_id: Bundle identifier (e.g., "com.microsoft.Outlook")

    Returns:
        Set of non-empty signatures
    """
    candidates: list[str] = []

    candidates.extend(_both_forms(app_name))
    candidates.extend(_both_forms(bundle_id))

    bundle_parts = [p for p in bundle_id.split(".") if p]
    if len(bundle_parts) > 2:
        candidates.extend(_both_forms(".".join(bundle_parts[:-1])))

    words = app_name.split()
    if words:
        candidates.extend(_both_forms(words[-1]))

    if bundle_parts:
        candidates.extend(_both_forms(bundle_parts[-1]))

    if "." in app_name:
        candidates.extend(_both_forms(app_name.split(".")[0]))

    return {c for c in candidates if c}
