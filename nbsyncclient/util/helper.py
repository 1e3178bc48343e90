"""
Miscellaneous helper functions.
"""

import json


def join_path(parent, name):
    """
    Join a server relative directory path and an entry name.

    >>> join_path("", "a.ipynb")
    'a.ipynb'
    >>> join_path("dir/sub", "a.ipynb")
    'dir/sub/a.ipynb'
    """
    parent = parent.strip("/") if parent else ""
    if not parent:
        return name
    return "%s/%s" % (parent, name)


def split_path(path):
    """
    Split a server relative path into its directory component and the name of the
    last component. The directory is empty for top level entries.
    """
    path = path.strip("/") if path else ""
    if "/" not in path:
        return "", path
    directory, name = path.rsplit("/", 1)
    return directory, name


def dirname(path):
    return split_path(path)[0]


def basename(path):
    return split_path(path)[1]


def major_version(version):
    """
    Get the major number of a version string like "6.4.12" or "7.0.0b1".
    """
    head = str(version).split(".")[0]
    digits = "".join(c for c in head if c.isdigit())
    if not digits:
        raise ValueError("Not a version string: %r" % version)
    return int(digits)


def summarize(payload, limit=120):
    """
    A short, single line representation of a payload for log messages.
    """
    if payload is None:
        return "-"
    try:
        text = json.dumps(payload, default=str)
    except (TypeError, ValueError):
        text = repr(payload)
    if len(text) > limit:
        text = text[:limit] + "...(%d chars)" % len(text)
    return text
