"""
test_factories.py — Unit tests for the seed validation factories.

Tests cover:
  - Schema errors mapped to {code, message, path, context}
  - Model dimension invariants (min < max) and price ceilings
  - Service type/unit pairing
  - Glass type rules (triple thickness, Low-E U-value, solar consistency) and warnings
  - Glass solution key/icon/translation/language rules and slug derivation
  - Overrides and skip_validation
  - Batch factories keyed by input index
"""

import pytest

from glasify.models.seed_schema import GlassTypeInput, ModelInput
from glasify.services import factories
from glasify.services.validation import FactoryOptions, merge_overrides, validate_min_max


def _codes(result):
    return [e.code for e in result.errors]


# ===========================================================================
# Class 1: Models
# ===========================================================================

class TestCreateModel:

    def test_valid_model(self, valid_model):
        result = factories.create_model(valid_model)
        assert result.success is True
        assert isinstance(result.data, ModelInput)
        assert result.data.compatible_glass_type_ids == []
        assert result.errors == []

    def test_width_min_not_below_max(self, valid_model):
        result = factories.create_model({**valid_model, "min_width_mm": 2500, "max_width_mm": 2500})
        assert result.success is False
        assert result.data is None
        err = result.errors[0]
        assert err.code == "INVALID_RANGE"
        assert err.dotted_path == "width"
        assert err.message == "min (2500) must be less than max (2500)"

    def test_height_inverted(self, valid_model):
        result = factories.create_model({**valid_model, "min_height_mm": 2000, "max_height_mm": 800})
        assert [(e.code, e.dotted_path) for e in result.errors] == [("INVALID_RANGE", "height")]

    def test_cost_per_mm_ceiling(self, valid_model):
        result = factories.create_model({**valid_model, "cost_per_mm_width": 1500})
        assert _codes(result) == ["COST_TOO_HIGH"]
        assert result.errors[0].dotted_path == "cost_per_mm_width"

    def test_accessory_price_ceiling(self, valid_model):
        result = factories.create_model({**valid_model, "accessory_price": 600_000})
        assert _codes(result) == ["PRICE_TOO_HIGH"]

    def test_base_price_ceiling(self, valid_model):
        result = factories.create_model({**valid_model, "base_price": 20_000_000})
        assert _codes(result) == ["PRICE_TOO_HIGH"]
        assert result.errors[0].dotted_path == "base_price"

    def test_missing_field_reports_schema_error(self, valid_model):
        raw = dict(valid_model)
        del raw["name"]
        result = factories.create_model(raw)
        assert result.success is False
        assert result.errors[0].code == "MISSING"
        assert result.errors[0].path == ["name"]

    def test_dimension_out_of_schema_bounds(self, valid_model):
        result = factories.create_model({**valid_model, "max_width_mm": 20_000})
        assert result.errors[0].path == ["max_width_mm"]
        assert result.errors[0].context["received"] == 20_000

    def test_business_rules_skipped_when_schema_fails(self, valid_model):
        """Schema errors short-circuit; no INVALID_RANGE is reported alongside."""
        result = factories.create_model({**valid_model, "base_price": -1, "min_width_mm": 3000})
        assert "INVALID_RANGE" not in _codes(result)


# ===========================================================================
# Class 2: Services
# ===========================================================================

class TestCreateService:

    @pytest.mark.parametrize("type_, unit", [("area", "sqm"), ("perimeter", "ml"), ("fixed", "unit")])
    def test_valid_pairs(self, type_, unit):
        result = factories.create_service({"name": "Servicio", "type": type_, "unit": unit, "rate": 10_000})
        assert result.success is True

    def test_mismatched_pair(self):
        result = factories.create_service({"name": "Instalación", "type": "area", "unit": "ml", "rate": 10_000})
        assert _codes(result) == ["INVALID_TYPE_UNIT_COMBINATION"]
        assert result.errors[0].path == ["unit"]
        assert result.errors[0].context == {"expected": "sqm", "received": "ml"}

    def test_rate_ceiling(self):
        result = factories.create_service({"name": "Obra", "type": "fixed", "unit": "unit", "rate": 6_000_000})
        assert _codes(result) == ["PRICE_TOO_HIGH"]


# ===========================================================================
# Class 3: Glass types
# ===========================================================================

class TestCreateGlassType:

    def test_defaults(self):
        result = factories.create_glass_type({"name": "Vidrio Simple 4mm", "thickness_mm": 4, "price_per_sqm": 28_000})
        assert result.success is True
        assert isinstance(result.data, GlassTypeInput)
        assert result.data.purpose == "general"
        assert result.data.is_tempered is False

    def test_triple_glazed_too_thin(self):
        result = factories.create_glass_type({
            "name": "TVH 12mm", "thickness_mm": 12, "price_per_sqm": 300_000, "is_triple_glazed": True,
        })
        assert _codes(result) == ["INVALID_THICKNESS_FOR_TYPE"]

    def test_low_e_without_u_value(self):
        result = factories.create_glass_type({
            "name": "DVH Low-E", "thickness_mm": 24, "price_per_sqm": 185_000, "is_low_e": True,
        })
        assert _codes(result) == ["MISSING_U_VALUE"]
        assert result.errors[0].path == ["u_value"]

    def test_inconsistent_solar_properties(self):
        result = factories.create_glass_type({
            "name": "Reflectivo", "thickness_mm": 6, "price_per_sqm": 90_000,
            "solar_factor": 0.9, "light_transmission": 0.5,
        })
        assert _codes(result) == ["INCONSISTENT_SOLAR_PROPERTIES"]
        assert result.errors[0].path == ["solar_factor"]

    def test_solar_within_tolerance(self):
        result = factories.create_glass_type({
            "name": "Control Solar", "thickness_mm": 6, "price_per_sqm": 90_000,
            "solar_factor": 0.6, "light_transmission": 0.45,
        })
        assert result.success is True

    def test_price_ceiling(self):
        result = factories.create_glass_type({"name": "Blindado", "thickness_mm": 40, "price_per_sqm": 900_000})
        assert _codes(result) == ["PRICE_TOO_HIGH"]

    def test_high_u_value_is_a_warning(self):
        result = factories.create_glass_type({
            "name": "Vidrio Simple 6mm", "thickness_mm": 6, "price_per_sqm": 35_000, "u_value": 5.8,
        })
        assert result.success is True
        assert [w.code for w in result.warnings] == ["HIGH_U_VALUE"]

    def test_unknown_purpose(self):
        result = factories.create_glass_type({
            "name": "Vidrio", "thickness_mm": 6, "price_per_sqm": 35_000, "purpose": "bulletproof",
        })
        assert result.success is False
        assert result.errors[0].path == ["purpose"]

    def test_with_default_price(self):
        assert factories.with_default_price({"name": "X"})["price_per_sqm"] == factories.DEFAULT_PRICE_PER_SQM
        assert factories.with_default_price({"name": "X", "price_per_sqm": 10})["price_per_sqm"] == 10


# ===========================================================================
# Class 4: Suppliers, solutions, tenant
# ===========================================================================

class TestOtherEntities:

    def test_supplier_accepts_accented_names(self):
        result = factories.create_profile_supplier({"name": "Perfiles Andinos Ñ&Cía", "material_type": "ALUMINUM"})
        assert result.success is True

    def test_supplier_rejects_symbols(self):
        result = factories.create_profile_supplier({"name": "Bad<Name>", "material_type": "PVC"})
        assert _codes(result) == ["STRING_PATTERN_MISMATCH"]

    def test_supplier_material_enum(self):
        result = factories.create_profile_supplier({"name": "Acme", "material_type": "STEEL"})
        assert result.success is False
        assert result.errors[0].path == ["material_type"]

    def test_glass_supplier_catalog_entries(self):
        from glasify.presets.catalog import GLASS_SUPPLIERS
        batch = factories.create_glass_supplier_batch(GLASS_SUPPLIERS)
        assert batch.errors == {}
        assert [s.code for s in batch.valid] == ["AGC", "GRD", "PLK", "SGG", "VIT"]

    def test_glass_supplier_code_must_be_uppercase(self):
        result = factories.create_glass_supplier({"name": "Tecnoglass", "code": "tgl"})
        assert _codes(result) == ["INVALID_CODE"]
        assert result.errors[0].path == ["code"]

    def test_glass_supplier_contact_formats(self):
        result = factories.create_glass_supplier({
            "name": "Tecnoglass", "website": "tecnoglass.com", "contact_email": "ventas",
        })
        assert sorted(e.path[0] for e in result.errors) == ["contact_email", "website"]

    def test_solution_slug(self):
        from glasify.presets.catalog import THERMAL_INSULATION
        result = factories.create_glass_solution(THERMAL_INSULATION)
        assert result.success is True
        assert result.data.slug == "thermal-insulation"

    def test_solution_rules(self):
        result = factories.create_glass_solution({
            "key": "fireproof",
            "name": "Fireproof",
            "name_es": "Fireproof",
            "description": "Stops all flames fast",
            "icon": "Fire",
            "sort_order": 3,
        })
        assert _codes(result) == [
            "INVALID_SOLUTION_KEY", "INVALID_ICON", "INVALID_TRANSLATION", "INVALID_LANGUAGE",
        ]

    def test_tenant_defaults(self, tenant_settings):
        result = factories.create_tenant_config({"business_name": "Vidrios del Valle"})
        assert result.success is True
        assert result.data.currency == "COP"
        assert result.data.locale == "es-CO"
        assert result.data.quote_validity_days == 15

    def test_tenant_bad_currency(self, tenant_settings):
        result = factories.create_tenant_config({**tenant_settings, "currency": "pesos"})
        assert result.errors[0].path == ["currency"]


# ===========================================================================
# Class 5: Options
# ===========================================================================

class TestFactoryOptions:

    def test_overrides_replace_top_level_keys(self, valid_model):
        opts = FactoryOptions(overrides={"name": "Ventana Proyectante"})
        result = factories.create_model(valid_model, opts)
        assert result.data.name == "Ventana Proyectante"

    def test_overrides_are_validated(self, valid_model):
        opts = FactoryOptions(overrides={"max_width_mm": 500})
        result = factories.create_model(valid_model, opts)
        assert _codes(result) == ["INVALID_RANGE"]

    def test_skip_validation_returns_typed_record(self, valid_model):
        raw = {**valid_model, "min_width_mm": 3000}
        result = factories.create_model(raw, FactoryOptions(skip_validation=True))
        assert result.success is True
        assert isinstance(result.data, ModelInput)
        assert result.data.min_width_mm == 3000
        assert result.data.compatible_glass_type_ids == []

    def test_merge_overrides_does_not_mutate(self):
        data = {"a": 1}
        merged = merge_overrides(data, {"a": 2, "b": 3})
        assert merged == {"a": 2, "b": 3}
        assert data == {"a": 1}

    def test_validate_min_max_strict(self):
        assert validate_min_max(1, 2, "width") is None
        assert validate_min_max(2, 2, "width").code == "INVALID_RANGE"


# ===========================================================================
# Class 6: Batch factories
# ===========================================================================

class TestBatch:

    def test_errors_keyed_by_index(self, valid_model):
        records = [
            valid_model,
            {**valid_model, "name": "Mala", "min_width_mm": 3000},
            {**valid_model, "name": "Ventana Fija"},
        ]
        batch = factories.create_model_batch(records)
        assert batch.success is False
        assert [m.name for m in batch.valid] == ["Ventana Corredera Estándar", "Ventana Fija"]
        assert batch.valid_indexes == [0, 2]
        assert list(batch.errors) == [1]
        assert batch.errors[1][0].code == "INVALID_RANGE"

    def test_warnings_keyed_by_index(self):
        batch = factories.create_glass_type_batch([
            {"name": "Vidrio Simple 4mm", "thickness_mm": 4, "price_per_sqm": 28_000},
            {"name": "Vidrio Simple 6mm", "thickness_mm": 6, "price_per_sqm": 35_000, "u_value": 5.7},
        ])
        assert batch.success is True
        assert list(batch.warnings) == [1]
