"""
template_init package

One-shot initializer for repositories cloned from a template.

Key responsibilities are split across modules:
- `flags.py`: permissive `--key=value` flag parsing
- `naming.py`: package-name sanitization
- `config.py`: defaults, the optional `.template-init.yml` file, and the derived `Config`
- `manifest.py`: rewrite identity fields of `package.json`
- `readme.py`: render `README_TEMPLATE.md` into `README.md`
- `cleanup.py`: delete template-only paths (including the init script itself)
- `runner.py`: the narrow command-running seam around subprocess
- `finalizer.py`: install dependencies and collapse git history to one root commit
- `github_client.py`: optional GitHub REST calls for `--create-remote`
- `cli.py`: entrypoint and orchestration
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
