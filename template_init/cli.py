"""
cli.py

Responsibility: CLI entrypoint for template-init.

High-level flow (one shot, strictly sequential):
1) Parse flags -> `Config` (flags > .template-init.yml > built-in defaults)
2) Rewrite package.json identity fields
3) Render README_TEMPLATE.md -> README.md
4) Remove template-only paths, this tool's script included
5) Install dependencies and collapse git history to a single root commit
6) (Optional) Create the GitHub repo and point `origin` at it

Any failure stops the run; steps already completed stay applied.
"""

from __future__ import annotations

import logging
import os
import sys
import traceback
from pathlib import Path
from typing import Callable, Sequence

from template_init.cleanup import CleanupError, remove_paths
from template_init.config import TOOL_DIR, ConfigError, Config, Defaults, build_config
from template_init.finalizer import finalize
from template_init.flags import parse_flags
from template_init.github_client import GitHubClient, GitHubError
from template_init.manifest import ManifestError, rewrite_manifest
from template_init.readme import materialize_readme
from template_init.runner import CommandError, CommandRunner, SubprocessRunner

LOGGER = logging.getLogger(__name__)

USAGE = """\
usage: template-init [--name=<project>] [--org=<org>] [--visibility=private|public|internal]
                     [--history=squash|commit] [--skip-install] [--create-remote] [--verbose]

Initialize a repository cloned from a template: rewrite package.json, render
README_TEMPLATE.md, remove template-only files (this tool included when it
lives inside the repository) and squash git history into a single root commit.

--verbose also prints tracebacks for failures.

--create-remote needs GITHUB_TOKEN in the environment.
"""

KNOWN_ERRORS = (ConfigError, ManifestError, CleanupError, CommandError, GitHubError)


def _configure_logging(*, verbose: bool) -> None:
    logger = logging.getLogger("template_init")
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("[init] %(message)s"))
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False


def _link_origin(runner: CommandRunner, url: str) -> None:
    remotes = runner.run(["git", "remote"]).split()
    if "origin" in remotes:
        runner.run(["git", "remote", "set-url", "origin", url])
    else:
        runner.run(["git", "remote", "add", "origin", url])
    LOGGER.info("origin set to %s", url)


def run(
    config: Config,
    *,
    root: Path,
    runner: CommandRunner,
    github: GitHubClient | None = None,
) -> str:
    """Run every step against `root`. Returns the id of the commit that was created."""
    d = config.defaults
    manifest = rewrite_manifest(root / d.manifest_path, config)
    materialize_readme(root / d.template_source, root / d.template_destination, config)
    remove_paths(root, config.scaffold_paths())
    commit = finalize(runner, config)

    if github is not None:
        description = manifest.get("description")
        repo = github.ensure_repo(
            owner=config.org,
            name=config.project_name,
            visibility=config.visibility,
            description=description if isinstance(description, str) else "",
        )
        LOGGER.info("GitHub repository ready: %s (%s)", repo.html_url, repo.visibility)
        _link_origin(runner, repo.clone_url)

    return commit


def main(
    argv: Sequence[str] | None = None,
    *,
    root: str | Path | None = None,
    defaults: Defaults | None = None,
    runner: CommandRunner | None = None,
    github_factory: Callable[[str], GitHubClient] = GitHubClient,
    tool_dir: str | Path | None = TOOL_DIR,
) -> int:
    flags = parse_flags(sys.argv[1:] if argv is None else argv)
    if flags.get("help") == "true":
        sys.stdout.write(USAGE)
        return 0

    root_path = Path(root) if root is not None else Path.cwd()
    verbose = flags.get("verbose") == "true"
    _configure_logging(verbose=verbose)

    try:
        config = build_config(flags, root=root_path, defaults=defaults, tool_dir=tool_dir)
        # Resolve the token before touching anything so a missing one fails fast.
        github = github_factory(os.environ.get("GITHUB_TOKEN", "")) if config.create_remote else None
        run(config, root=root_path, runner=runner or SubprocessRunner(root_path), github=github)
    except KNOWN_ERRORS as e:
        if verbose:
            traceback.print_exc(file=sys.stderr)
        sys.stderr.write(f"error: {e}\n")
        return 1
    except Exception:  # noqa: BLE001 - single top-level handler, full trace to stderr
        traceback.print_exc(file=sys.stderr)
        return 1

    LOGGER.info("Done.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
