"""CLI command modules.

Commands are loaded lazily by etgen_cli.main.LazyGroup.
"""

from __future__ import annotations

__all__: list[str] = []
