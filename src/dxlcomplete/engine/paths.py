"""File-name completion for flag values.

Behaves like bash's ``compgen -f``: the word is split into a directory part
and a name prefix, and every entry of that directory whose name starts with
the prefix is returned with the directory part kept as typed. Hidden
entries are only offered once the prefix itself starts with a dot.
"""

from __future__ import annotations

from pathlib import Path


def complete_path(prefix: str) -> list[str]:
    """Return file-system entries that complete *prefix*, sorted by name."""
    head, sep, stem = prefix.rpartition("/")
    if sep:
        typed_dir = head + sep
        directory = Path(head or "/").expanduser()
    else:
        typed_dir = ""
        directory = Path(".")

    try:
        names = [entry.name for entry in directory.iterdir()]
    except OSError:
        return []

    show_hidden = stem.startswith(".")
    return sorted(
        typed_dir + name
        for name in names
        if name.startswith(stem) and (show_hidden or not name.startswith("."))
    )
