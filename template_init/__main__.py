from __future__ import annotations

from template_init.cli import main

raise SystemExit(main())
