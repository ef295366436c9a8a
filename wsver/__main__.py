from __future__ import annotations

from wsver.wsver_cli import main

raise SystemExit(main())
