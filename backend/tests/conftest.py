"""
conftest.py — Shared pytest fixtures for the Glasify seeding test suite.

Pure engines (factories, classification) need no fixtures.  Seeder and
orchestrator tests run against a fresh in-memory SQLite database per test
(``sqlite+aiosqlite://`` on a StaticPool), with the schema created through
``Base.metadata.create_all``.

Import-path bootstrapping:
    The ``backend/`` directory is inserted into sys.path so that all
    ``glasify.*`` imports resolve correctly regardless of where pytest is invoked.
"""

import sys
import os
import pytest
import pytest_asyncio

# ---------------------------------------------------------------------------
# Ensure ``backend/`` is on the import path before any glasify imports occur.
# ---------------------------------------------------------------------------
_BACKEND_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _BACKEND_DIR not in sys.path:
    sys.path.insert(0, _BACKEND_DIR)


# ---------------------------------------------------------------------------
# Database fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def engine():
    """Fresh in-memory database with every table created."""
    from glasify.db import build_engine, init_db
    eng = build_engine("sqlite+aiosqlite://")
    await init_db(eng)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def session(engine):
    from glasify.db import build_session_factory
    factory = build_session_factory(engine)
    async with factory() as s:
        yield s


# ---------------------------------------------------------------------------
# Seed data fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def tenant_settings():
    """Tenant configuration as the CLI would load it from TENANT_* variables."""
    return {
        "business_name": "Vidrios La Equidad",
        "currency": "COP",
        "locale": "es-CO",
        "timezone": "America/Bogota",
        "quote_validity_days": 15,
        "contact_email": "ventas@laequidad.co",
    }


@pytest.fixture
def valid_model():
    """A window model that passes every schema and business rule."""
    return {
        "name": "Ventana Corredera Estándar",
        "profile_supplier_name": "Deceuninck",
        "min_width_mm": 700,
        "max_width_mm": 2500,
        "min_height_mm": 500,
        "max_height_mm": 2200,
        "base_price": 350_000,
        "cost_per_mm_width": 95,
        "cost_per_mm_height": 75,
        "accessory_price": 65_000,
        "glass_discount_width_mm": 45,
        "glass_discount_height_mm": 45,
        "profit_margin_percentage": 30,
        "status": "published",
    }


@pytest.fixture
def small_preset(valid_model):
    """
    Two suppliers, three glass types, three valid models, two services and
    three solutions.  Glass types cover the tempered, insulated and plain
    classification paths.
    """
    from glasify.presets import Preset
    from glasify.presets.catalog import ALUMINA, DECEUNINCK, GENERAL, SECURITY, THERMAL_INSULATION

    models = [
        valid_model,
        {**valid_model, "name": "Ventana Corredera Aluminio", "profile_supplier_name": "Alumina"},
        {**valid_model, "name": "Ventana Batiente PVC", "min_width_mm": 400, "max_width_mm": 1200},
    ]
    return Preset(
        name="small",
        description="Fixture preset",
        profile_suppliers=[DECEUNINCK, ALUMINA],
        glass_types=[
            {"name": "Vidrio Simple 4mm", "thickness_mm": 4, "price_per_sqm": 28_000},
            {"name": "Vidrio Templado 6mm", "thickness_mm": 6, "price_per_sqm": 65_000,
             "is_tempered": True, "purpose": "security"},
            {"name": "DVH Low-E 24mm", "thickness_mm": 24, "price_per_sqm": 185_000,
             "is_low_e": True, "u_value": 1.8, "purpose": "insulation"},
        ],
        models=models,
        services=[
            {"name": "Instalación Estándar", "rate": 45_000, "type": "area", "unit": "sqm"},
            {"name": "Sellado Perimetral", "rate": 8_500, "type": "perimeter", "unit": "ml"},
        ],
        glass_solutions=[SECURITY, THERMAL_INSULATION, GENERAL],
    )
