from __future__ import annotations

import json
from pathlib import Path

import pytest

from tests.fakes import FakeRunner


@pytest.fixture()
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture()
def template_repo(tmp_path: Path) -> Path:
    """A working tree shaped like a fresh template clone."""
    root = tmp_path / "widget"
    root.mkdir()
    (root / "package.json").write_text(
        json.dumps(
            {
                "name": "template",
                "version": "0.0.0",
                "private": True,
                "scripts": {"init": "bun run scripts/init.ts", "test": "bun test"},
                "dependencies": {"zod": "^3.0.0"},
            },
            indent=2,
        )
        + "\n",
        encoding="utf-8",
    )
    (root / "README_TEMPLATE.md").write_text(
        "# __PROJECT_NAME__\n\n`__PKG_NAME__` lives at __REPO_SLUG__ (__VISIBILITY__).\n",
        encoding="utf-8",
    )
    (root / ".template-notes.md").write_text("notes\n", encoding="utf-8")
    (root / "TEMPLATE_TODO.md").write_text("todo\n", encoding="utf-8")
    scripts = root / "scripts"
    scripts.mkdir()
    (scripts / "README.md").write_text("scripts docs\n", encoding="utf-8")
    (scripts / "init.py").write_text("from template_init.cli import main\n", encoding="utf-8")
    (root / "src").mkdir()
    (root / "src" / "index.ts").write_text("export {};\n", encoding="utf-8")
    return root
