"""Golden template documents for contract testing.

Each file is the exact byte output expected from the serializer for a
fixed input. A change to key order, defaulting or binding shapes shows up
as a diff against these files.

Usage:
    from testing.fixtures.golden_templates import load_golden_text

    expected = load_golden_text("HttpTasksTemplates.json")
"""

from __future__ import annotations

from pathlib import Path

GOLDEN_TEMPLATES_DIR = Path(__file__).parent


def list_golden_files() -> list[str]:
    """Return the names of all golden documents, sorted."""
    return sorted(p.name for p in GOLDEN_TEMPLATES_DIR.glob("*.json"))


def load_golden_text(name: str) -> str:
    """Read a golden document exactly as stored.

    Raises:
        ValueError: If no golden document has that name.
    """
    if name not in list_golden_files():
        raise ValueError(f"Unknown golden document '{name}'. Available: {list_golden_files()}")
    return (GOLDEN_TEMPLATES_DIR / name).read_text(encoding="utf-8")
