"""
manifest.py

Responsibility: Rewrite the identity fields of the package manifest (`package.json`).

Only `name`, `repository`, `homepage`, `bugs` and `scripts.init` are touched.
Every other key is carried through verbatim and in its original order.
"""

from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any

from template_init.config import Config

LOGGER = logging.getLogger(__name__)

INIT_PLACEHOLDER = "echo 'Already initialized.'"


class ManifestError(RuntimeError):
    pass


def load_manifest(path: str | Path) -> dict[str, Any]:
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ManifestError(f"Manifest not found: {p}") from e
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ManifestError(f"Manifest is not valid JSON: {p} ({e})") from e
    if not isinstance(data, dict):
        raise ManifestError(f"Manifest must be a JSON object at the top level: {p}")
    return data


def apply_identity(manifest: dict[str, Any], config: Config) -> dict[str, Any]:
    """Overwrite the identity fields of `manifest` in place and return it."""
    manifest["name"] = config.package_name
    manifest["repository"] = {"type": "git", "url": f"{config.repo_url}.git"}
    manifest["homepage"] = config.repo_url
    manifest["bugs"] = {"url": f"{config.repo_url}/issues"}

    # Self-disable so a second `init` run is a harmless echo.
    scripts = manifest.get("scripts")
    if isinstance(scripts, dict) and "init" in scripts:
        scripts["init"] = INIT_PLACEHOLDER
    return manifest


def dump_manifest(manifest: dict[str, Any]) -> str:
    return json.dumps(manifest, indent=2, ensure_ascii=False) + "\n"


def write_manifest(path: str | Path, manifest: dict[str, Any]) -> None:
    """
    Serialize `manifest` to `path` via a sibling temp file and an atomic rename,
    so readers never observe a half-written manifest.
    """
    p = Path(path)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{p.name}.", suffix=".tmp", dir=p.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as handle:
            handle.write(dump_manifest(manifest))
        if p.exists():
            shutil.copymode(p, tmp_name)
        os.replace(tmp_name, p)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def rewrite_manifest(path: str | Path, config: Config) -> dict[str, Any]:
    manifest = apply_identity(load_manifest(path), config)
    write_manifest(path, manifest)
    LOGGER.info("%s updated (name=%s)", Path(path).name, config.package_name)
    return manifest
