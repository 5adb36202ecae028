"""etgen-cli: Command-line interface for element template generation.

Provides the ``etgen`` command with subcommands:
- generate: Discover decorated classes and write their template files
- validate: Check existing template files against the published schema
- schema-url: Print the schema locator for a version
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
