"""Partial classification and include-name derivation."""

import re
from pathlib import PurePosixPath

PARTIAL_MARKER = "_"

SASS_EXTENSION_RE = re.compile(r"\.s[ac]ss$")
_SEGMENT_MARKER_RE = re.compile(r"(/|^)_")


def is_partial(path: str, marker: str = PARTIAL_MARKER) -> bool:
    """True iff the base name of ``path`` starts with the partial marker."""
    return PurePosixPath(path).name.startswith(marker)


def is_stylesheet(path: str) -> bool:
    return SASS_EXTENSION_RE.search(path) is not None


def strip_root(path: str, root: str | None) -> str:
    """Drop ``root/`` from the front of ``path`` when present."""
    if not root:
        return path
    prefix = root if root.endswith("/") else f"{root}/"
    return path[len(prefix) :] if path.startswith(prefix) else path


def partial_target_name(path: str, input_root: str | None) -> str:
    """
    Name under which other stylesheets refer to ``path`` in an include directive.

    Include arguments omit both the partial marker and the extension, so
    ``styles/foo/_bar.scss`` with input root ``styles`` becomes ``foo/bar``.
    """
    relative = strip_root(path, input_root)
    relative = _SEGMENT_MARKER_RE.sub(r"\1", relative)
    return SASS_EXTENSION_RE.sub("", relative)
