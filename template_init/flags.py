"""Permissive `--key=value` flag parsing."""

from __future__ import annotations

from typing import Iterable


def parse_flags(argv: Iterable[str]) -> dict[str, str]:
    """
    Turn `--key=value` and bare `--key` tokens into a mapping.

    Anything not starting with `--` is ignored, a bare `--key` maps to "true",
    and the last occurrence of a key wins. Never raises.
    """
    out: dict[str, str] = {}
    for arg in argv:
        if not arg.startswith("--"):
            continue
        key, sep, value = arg[2:].partition("=")
        out[key] = value if sep else "true"
    return out
