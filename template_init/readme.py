"""
readme.py

Responsibility: Materialize README.md from README_TEMPLATE.md.

Tokens are replaced literally (no template engine): every occurrence of
`__PROJECT_NAME__`, `__PKG_NAME__`, `__REPO_SLUG__` and `__VISIBILITY__`.
The source template is deleted afterwards, so this is a one-way step.
"""

from __future__ import annotations

import logging
from pathlib import Path

from template_init.config import Config

LOGGER = logging.getLogger(__name__)


def build_tokens(config: Config) -> dict[str, str]:
    return {
        "__PROJECT_NAME__": config.project_name,
        "__PKG_NAME__": config.package_name,
        "__REPO_SLUG__": config.repo_slug,
        "__VISIBILITY__": config.visibility,
    }


def render_text(text: str, tokens: dict[str, str]) -> str:
    for token, value in tokens.items():
        text = text.replace(token, value)
    return text


def materialize_readme(source: str | Path, destination: str | Path, config: Config) -> bool:
    """
    Render `source` into `destination` and delete `source`.

    Returns False (and does nothing) when there is no template.
    """
    src = Path(source)
    dst = Path(destination)
    if not src.exists():
        LOGGER.debug("no %s, skipping README", src.name)
        return False

    text = src.read_text(encoding="utf-8")
    dst.write_text(render_text(text, build_tokens(config)), encoding="utf-8")
    src.unlink()
    LOGGER.info("%s created", dst.name)
    return True
