from __future__ import annotations
from pathlib import Path

#: Default maximum display length of the path to the current working directory
MAX_PWD_LEN = 20


def shorten(path: str, max_len: int = MAX_PWD_LEN, home: str | None = None) -> str:
    """
    If the filepath ``path`` is longer than ``max_len``, replace a leading
    ``home`` directory (default: the user's home directory) with ``~`` and
    then abbreviate leading path components to their first character, oldest
    first, until the path fits.  The final two components are abbreviated
    last, and the final component is never abbreviated.  If the path still
    does not fit once everything possible has been abbreviated, the
    over-long result is returned as-is.

    >>> shorten("/home/alice/projects/widget/src", 20, home="/home/alice")
    '~/p/widget/src'
    """
    if len(path) <= max_len or path == "/":
        return path
    if home is None:
        home = str(Path.home())
    home = home.rstrip("/")
    if home and (path == home or path.startswith(home + "/")):
        path = "~" + path[len(home) :]
        if len(path) <= max_len:
            return path
    parts = path.split("/")
    # Everything but the last two components, then the next-to-last one
    for i in [*range(len(parts) - 2), len(parts) - 2]:
        if i < 0:
            continue
        parts[i] = abbreviate(parts[i])
        if len("/".join(parts)) <= max_len:
            break
    return "/".join(parts)


def abbreviate(component: str) -> str:
    """
    Reduce a single path component to its first character, or to its first
    two characters for hidden (dot) directories
    """
    if component in ("~", ".", ".."):
        return component
    elif component.startswith("."):
        return component[:2]
    else:
        return component[:1]

