"""Package name normalisation."""

from __future__ import annotations

import re

__all__ = ["sanitize_package_name"]


_INVALID_CHARS = re.compile(r"[^a-z0-9\-._/]")
_REPEATED_SLASHES = re.compile(r"/+")


def sanitize_package_name(name: str) -> str:
    """Return a package-identifier-safe version of ``name``.

    Surrounding whitespace is trimmed, the text is lowercased, every character
    outside ``[a-z0-9-._/]`` becomes a single ``-`` and runs of ``/`` collapse
    into one. Pathological inputs still produce a valid (if odd) name, e.g.
    ``"!!!"`` becomes ``"---"``.
    """

    cleaned = _INVALID_CHARS.sub("-", name.strip().lower())
    return _REPEATED_SLASHES.sub("/", cleaned)
