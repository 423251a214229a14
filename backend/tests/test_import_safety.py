"""
test_import_safety.py — Circular import and side-effect checks.

Verifies that:
  1. Every glasify module imports cleanly in a fresh interpreter state
     (no circular import between config, exceptions and the services).
  2. Importing the database layer does not create an engine or connect.
  3. Preset modules are only imported when requested.

No database, network, or external services are required.
"""

import importlib
import sys

import pytest

MODULES = [
    "glasify",
    "glasify.config",
    "glasify.db",
    "glasify.models.orm_models",
    "glasify.models.seed_schema",
    "glasify.services.exceptions",
    "glasify.services.validation",
    "glasify.services.factories",
    "glasify.services.classification_engine",
    "glasify.services.seed_stats",
    "glasify.services.seeders",
    "glasify.services.logging_config",
    "glasify.services.preset_validator",
    "glasify.services.seed_orchestrator",
    "glasify.presets",
    "glasify.presets.catalog",
    "glasify.presets.minimal",
    "glasify.presets.demo_client",
    "glasify.presets.full_catalog",
    "glasify.cli",
]


def _evict_glasify():
    for key in [k for k in sys.modules if k == "glasify" or k.startswith("glasify.")]:
        del sys.modules[key]


# ---------------------------------------------------------------------------
# Module imports
# ---------------------------------------------------------------------------

class TestModuleImports:

    @pytest.mark.parametrize("module", MODULES)
    def test_imports_from_scratch(self, module):
        """Import each module first, so a cycle reachable from it surfaces here."""
        saved = {k: v for k, v in sys.modules.items() if k == "glasify" or k.startswith("glasify.")}
        _evict_glasify()
        try:
            mod = importlib.import_module(module)
            assert mod is not None
        finally:
            _evict_glasify()
            sys.modules.update(saved)


# ---------------------------------------------------------------------------
# Side effects
# ---------------------------------------------------------------------------

class TestNoImportSideEffects:

    def test_db_module_has_no_engine(self):
        db = importlib.import_module("glasify.db")
        assert not hasattr(db, "engine")
        assert not hasattr(db, "AsyncSessionLocal")

    def test_presets_load_lazily(self):
        saved = {k: v for k, v in sys.modules.items() if k == "glasify" or k.startswith("glasify.")}
        _evict_glasify()
        try:
            presets = importlib.import_module("glasify.presets")
            assert "glasify.presets.full_catalog" not in sys.modules
            presets.get_preset("full-catalog")
            assert "glasify.presets.full_catalog" in sys.modules
        finally:
            _evict_glasify()
            sys.modules.update(saved)
