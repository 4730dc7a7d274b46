"""Allow ``python -m httpbench``."""

from __future__ import annotations

from httpbench.cli.app import main

main()
