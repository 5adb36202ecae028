"""Shared testing infrastructure for etgen.

Modules:
    fixtures.element_templates: Schema subset, mock schema server, sample records
    fixtures.golden_templates: Byte-exact expected template documents

Usage:
    In your conftest.py or test module:
        from testing.fixtures.element_templates import SchemaServer, http_tasks_records
"""

from __future__ import annotations
