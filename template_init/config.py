"""
config.py

Responsibility: Build the immutable run configuration.

Values come from three layers, highest precedence first:
- command-line flags (already parsed into a mapping by `flags.py`)
- the optional `.template-init.yml` defaults file at the repository root
- the built-in `Defaults`

Everything here is read-only; no file is modified while the configuration is built.
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass, field, replace
from pathlib import Path, PureWindowsPath
from typing import Any, Mapping

import yaml

from template_init.naming import sanitize_package_name

VISIBILITIES = ("private", "public", "internal")
HISTORY_MODES = ("squash", "commit")
DEFAULTS_FILENAME = ".template-init.yml"
TOOL_DIR = Path(__file__).resolve().parent


class ConfigError(ValueError):
    pass


def is_contained_relpath(rel: str) -> bool:
    """True when `rel` is a non-empty relative path that cannot climb out of its base."""
    if not rel or rel.startswith(("/", "\\")) or PureWindowsPath(rel).drive:
        return False
    parts = [p for p in rel.replace("\\", "/").split("/") if p not in ("", ".")]
    return bool(parts) and ".." not in parts


@dataclass(frozen=True)
class Defaults:
    """Fallback values and the fixed paths/commands the tool operates on."""

    org: str = "charlie-labs"
    visibility: str = "private"
    host: str = "https://github.com"
    manifest_path: str = "package.json"
    template_source: str = "README_TEMPLATE.md"
    template_destination: str = "README.md"
    scaffold_paths: tuple[str, ...] = (".template-notes.md", "TEMPLATE_TODO.md", "scripts/README.md")
    self_path: str = "scripts/init.py"
    install_command: tuple[str, ...] = ("bun", "install")
    commit_message: str = "chore: initialize from template"
    history: str = "squash"


@dataclass(frozen=True)
class Config:
    """Identity of the project being initialized plus the settings for this run."""

    project_name: str
    org: str
    visibility: str = "private"
    host: str = "https://github.com"
    history: str = "squash"
    install: bool = True
    create_remote: bool = False
    tool_path: str | None = None
    defaults: Defaults = field(default_factory=Defaults)

    def __post_init__(self) -> None:
        if not self.package_name:
            raise ConfigError("Project name must not be empty.")
        if not self.org:
            raise ConfigError("Organization must not be empty.")
        if self.visibility not in VISIBILITIES:
            raise ConfigError(f"Unknown visibility {self.visibility!r}; expected one of {', '.join(VISIBILITIES)}.")
        if self.history not in HISTORY_MODES:
            raise ConfigError(f"Unknown history mode {self.history!r}; expected one of {', '.join(HISTORY_MODES)}.")
        for rel in (*self.defaults.scaffold_paths, self.defaults.self_path, *filter(None, [self.tool_path])):
            if not is_contained_relpath(rel):
                raise ConfigError(f"Scaffold path {rel!r} must be relative and stay inside the repository.")

    @property
    def package_name(self) -> str:
        return sanitize_package_name(self.project_name)

    @property
    def repo_slug(self) -> str:
        return f"{self.org}/{self.project_name}"

    @property
    def repo_url(self) -> str:
        return f"{self.host.rstrip('/')}/{self.repo_slug}"

    def scaffold_paths(self) -> list[str]:
        """Template-only paths to delete; the tool's own files always come last."""
        own = [self.defaults.self_path, *filter(None, [self.tool_path])]
        paths = [p for p in self.defaults.scaffold_paths if p not in own]
        if DEFAULTS_FILENAME not in paths:
            paths.append(DEFAULTS_FILENAME)
        paths.extend(own)
        return paths


def _as_str(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"`{key}` in {DEFAULTS_FILENAME} must be a string.")
    return value.strip()


def _as_str_list(data: Mapping[str, Any], key: str) -> tuple[str, ...] | None:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, str):
        return tuple(shlex.split(value))
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"`{key}` in {DEFAULTS_FILENAME} must be a list of strings.")
    return tuple(value)


def load_defaults(root: str | Path, base: Defaults | None = None) -> Defaults:
    """
    Overlay `.template-init.yml` (if present under root) on top of `base`.

    Recognised keys: org, visibility, host, install_command, commit_message,
    history, scaffold_paths, self_path. Unknown keys are ignored.
    """
    base = base or Defaults()
    path = Path(root) / DEFAULTS_FILENAME
    if not path.exists():
        return base

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Could not parse {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{DEFAULTS_FILENAME} must be a mapping/object at the top level.")

    overrides: dict[str, Any] = {}
    for key in ("org", "visibility", "host", "commit_message", "history", "self_path"):
        value = _as_str(data, key)
        if value:
            overrides[key] = value

    install = _as_str_list(data, "install_command")
    if install is not None:
        overrides["install_command"] = install

    scaffold = _as_str_list(data, "scaffold_paths")
    if scaffold is not None:
        for rel in scaffold:
            if not is_contained_relpath(rel):
                raise ConfigError(f"`scaffold_paths` entry {rel!r} in {DEFAULTS_FILENAME} must be relative to the repository.")
        overrides["scaffold_paths"] = scaffold

    return replace(base, **overrides)


def build_config(
    flags: Mapping[str, str],
    *,
    root: str | Path,
    defaults: Defaults | None = None,
    tool_dir: str | Path | None = TOOL_DIR,
) -> Config:
    """
    Resolve flags against the defaults file and built-in defaults.

    `--name` falls back to the base name of `root`. When `tool_dir` (this
    package, by default) lives inside `root` it is scheduled for removal
    together with `self_path`.
    """
    root_path = Path(root).resolve()
    resolved = load_defaults(root_path, defaults)

    tool_path: str | None = None
    if tool_dir is not None:
        tool = Path(tool_dir).resolve()
        if tool != root_path and tool.is_relative_to(root_path):
            tool_path = tool.relative_to(root_path).as_posix()

    return Config(
        project_name=flags.get("name", root_path.name).strip(),
        org=flags.get("org", resolved.org).strip(),
        visibility=flags.get("visibility", resolved.visibility).strip().lower(),
        host=resolved.host,
        history=flags.get("history", resolved.history).strip().lower(),
        install=flags.get("skip-install", "false").lower() not in ("true", "1", "yes"),
        create_remote=flags.get("create-remote", "false").lower() in ("true", "1", "yes"),
        tool_path=tool_path,
        defaults=resolved,
    )
