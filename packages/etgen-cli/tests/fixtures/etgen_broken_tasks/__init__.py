"""Package that fails to import."""

raise RuntimeError("broken on import")
