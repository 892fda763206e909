"""Shared fixtures: fake application bundles and Library trees."""

import plistlib
from pathlib import Path
from typing import Callable, Optional

import pytest


def write_app(
    parent: Path,
    name: str,
    bundle_id: Optional[str],
    version: str = "1.0",
) -> Path:
    """Create a minimal .app bundle with an XML Info.plist."""
    app = parent / f"{name}.app"
    contents = app / "Contents"
    (contents / "MacOS").mkdir(parents=True)
    (contents / "MacOS" / name).write_text("#!/bin/sh\n")

    plist = {"CFBundleName": name, "CFBundleShortVersionString": version}
    if bundle_id is not None:
        plist["CFBundleIdentifier"] = bundle_id
    with open(contents / "Info.plist", "wb") as f:
        plistlib.dump(plist, f)
    return app


@pytest.fixture
def make_app() -> Callable[..., Path]:
    """Factory for fake application bundles."""
    return write_app


@pytest.fixture
def machine(tmp_path: Path) -> dict[str, Path]:
    """A small fake machine with one target app, one sibling and leftovers.

    Target: "Quill Pad" (com.quillsoft.quillpad)
    Sibling: "Ink" (com.quillsoft.ink)
    """
    apps = tmp_path / "Applications"
    apps.mkdir()
    target = write_app(apps, "Quill Pad", "com.quillsoft.quillpad")
    sibling = write_app(apps, "Ink", "com.quillsoft.ink")

    library = tmp_path / "Library"
    caches = library / "Caches"
    prefs = library / "Preferences"
    support = library / "Application Support"
    logs = library / "Logs"
    for d in (caches, prefs, support, logs):
        d.mkdir(parents=True)

    # Leftovers of the target
    (caches / "com.quillsoft.quillpad").mkdir()
    (caches / "com.quillsoft.quillpad" / "Cache.db").write_text("x")
    (prefs / "com.quillsoft.quillpad.plist").write_text("x")
    (support / "Quill Pad").mkdir()
    (support / "Quill Pad" / "settings.json").write_text("{}")

    # Belongs to the sibling app: never descended
    (support / "com.quillsoft.ink").mkdir()
    (support / "com.quillsoft.ink" / "quillpad-export.txt").write_text("x")

    # Language runtime directory: never descended
    (support / "Python3.11").mkdir()
    (support / "Python3.11" / "quillpad.txt").write_text("x")

    # Unrelated and hidden entries
    (logs / "unrelated.log").write_text("x")
    (caches / ".quillpad-hidden").write_text("x")

    return {
        "root": tmp_path,
        "apps": apps,
        "target": target,
        "sibling": sibling,
        "library": library,
        "caches": caches,
        "prefs": prefs,
        "support": support,
        "logs": logs,
    }
