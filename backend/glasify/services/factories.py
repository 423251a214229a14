"""
Seed factories: one validation gateway per entity type.

    create_<entity>(raw, options) -> FactoryResult[<Entity>Input]
    create_<entity>_batch(records, options) -> BatchResult[<Entity>Input]

Pure functions.  Schema rules come from models/seed_schema.py; the business
rules below are layered on top and only run once the schema passes.
"""
import re
from typing import Any, Callable, Dict, Iterable, List, Optional, Type, TypeVar

from pydantic import BaseModel

from glasify.config import TenantSettings
from glasify.models.seed_schema import (
    GlassSolutionInput,
    GlassSupplierInput,
    GlassTypeInput,
    GlassTypeSolutionInput,
    ModelInput,
    ProfileSupplierInput,
    ServiceInput,
)
from glasify.services.validation import (
    BatchResult,
    FactoryOptions,
    FactoryResult,
    ValidationError,
    build_record,
    validate_min_max,
    validate_price,
)

T = TypeVar("T", bound=BaseModel)

# ── Glass suppliers ──
GLASS_SUPPLIER_CODE_PATTERN = re.compile(r"^[A-Z0-9]{2,10}$")

# ── Glass types ──
MAX_PRICE_PER_SQM = 500_000
MIN_TRIPLE_GLAZED_THICKNESS = 20
SOLAR_FACTOR_TRANSMISSION_TOLERANCE = 0.2
HIGH_U_VALUE_THRESHOLD = 3.0
DEFAULT_PRICE_PER_SQM = 50_000.0

# ── Models ──
MAX_BASE_PRICE = 10_000_000
MAX_COST_PER_MM = 1_000
MAX_ACCESSORY_PRICE = 500_000

# ── Services ──
MAX_SERVICE_RATE = 5_000_000
SERVICE_TYPE_UNIT = {
    "area": "sqm",
    "perimeter": "ml",
    "fixed": "unit",
}

# ── Glass solutions ──
VALID_SOLUTION_KEYS = (
    "security",
    "thermal_insulation",
    "sound_insulation",
    "energy_efficiency",
    "decorative",
    "general",
)
VALID_ICONS = (
    "Shield", "Snowflake", "Volume2", "Zap", "Sparkles",
    "Home", "Lock", "Flame", "Speaker", "Lightbulb",
)
SPANISH_INDICATORS = ("ción", "dad", "ento", "ante", "para", "con", "de", "y")


def _run(
    schema: Type[T],
    raw: Dict[str, Any],
    options: Optional[FactoryOptions],
    rules: Optional[Callable[[T], List[ValidationError]]] = None,
    warnings: Optional[Callable[[T], List[ValidationError]]] = None,
) -> FactoryResult[T]:
    result = build_record(schema, raw, options)
    if not result.success or (options and options.skip_validation):
        return result
    record = result.data
    errors = rules(record) if rules else []
    if errors:
        return FactoryResult.fail(errors)
    return FactoryResult.ok(record, warnings(record) if warnings else None)


def _batch(factory: Callable[..., FactoryResult[T]], records: Iterable[Dict[str, Any]],
           options: Optional[FactoryOptions]) -> BatchResult[T]:
    out: BatchResult[T] = BatchResult()
    for idx, raw in enumerate(records):
        result = factory(raw, options)
        if result.success:
            out.valid.append(result.data)
            out.valid_indexes.append(idx)
            if result.warnings:
                out.warnings[idx] = result.warnings
        else:
            out.errors[idx] = result.errors
    return out


# ---------------------------------------------------------------------------
# TenantConfig
# ---------------------------------------------------------------------------

def create_tenant_config(raw: Dict[str, Any], options: Optional[FactoryOptions] = None) -> FactoryResult[TenantSettings]:
    return _run(TenantSettings, raw, options)


# ---------------------------------------------------------------------------
# ProfileSupplier
# ---------------------------------------------------------------------------

def create_profile_supplier(raw: Dict[str, Any], options: Optional[FactoryOptions] = None) -> FactoryResult[ProfileSupplierInput]:
    return _run(ProfileSupplierInput, raw, options)


def create_profile_supplier_batch(records, options=None) -> BatchResult[ProfileSupplierInput]:
    return _batch(create_profile_supplier, records, options)


# ---------------------------------------------------------------------------
# GlassSupplier
# ---------------------------------------------------------------------------

def _glass_supplier_rules(s: GlassSupplierInput) -> List[ValidationError]:
    if s.code is not None and not GLASS_SUPPLIER_CODE_PATTERN.match(s.code):
        return [ValidationError(
            code="INVALID_CODE",
            message="Supplier code must be 2-10 uppercase letters or digits",
            path=["code"],
            context={"received": s.code},
        )]
    return []


def create_glass_supplier(raw: Dict[str, Any], options: Optional[FactoryOptions] = None) -> FactoryResult[GlassSupplierInput]:
    return _run(GlassSupplierInput, raw, options, _glass_supplier_rules)


def create_glass_supplier_batch(records, options=None) -> BatchResult[GlassSupplierInput]:
    return _batch(create_glass_supplier, records, options)


# ---------------------------------------------------------------------------
# GlassType
# ---------------------------------------------------------------------------

def _glass_type_rules(g: GlassTypeInput) -> List[ValidationError]:
    errors: List[ValidationError] = []

    price_error = validate_price(g.price_per_sqm, "price_per_sqm", MAX_PRICE_PER_SQM)
    if price_error:
        errors.append(price_error)

    if g.is_triple_glazed and g.thickness_mm < MIN_TRIPLE_GLAZED_THICKNESS:
        errors.append(ValidationError(
            code="INVALID_THICKNESS_FOR_TYPE",
            message=f"Triple glazed glass should be at least {MIN_TRIPLE_GLAZED_THICKNESS}mm thick",
            path=["thickness_mm"],
            context={"expected": f">= {MIN_TRIPLE_GLAZED_THICKNESS}", "received": g.thickness_mm},
        ))

    if g.is_low_e and g.u_value is None:
        errors.append(ValidationError(
            code="MISSING_U_VALUE",
            message="Low-E glass should have a U-value specified",
            path=["u_value"],
            context={"is_low_e": True},
        ))

    if g.solar_factor is not None and g.light_transmission is not None:
        if g.solar_factor > g.light_transmission + SOLAR_FACTOR_TRANSMISSION_TOLERANCE:
            errors.append(ValidationError(
                code="INCONSISTENT_SOLAR_PROPERTIES",
                message="Solar factor should not significantly exceed light transmission",
                path=["solar_factor"],
                context={
                    "expected": f"<= light_transmission + {SOLAR_FACTOR_TRANSMISSION_TOLERANCE}",
                    "received": {"solar_factor": g.solar_factor, "light_transmission": g.light_transmission},
                },
            ))
    return errors


def _glass_type_warnings(g: GlassTypeInput) -> List[ValidationError]:
    if g.u_value is not None and g.u_value > HIGH_U_VALUE_THRESHOLD:
        return [ValidationError(
            code="HIGH_U_VALUE",
            message=f"U-value above {HIGH_U_VALUE_THRESHOLD} W/m²·K indicates poor insulation",
            path=["u_value"],
            context={"expected": f"<= {HIGH_U_VALUE_THRESHOLD}", "received": g.u_value},
        )]
    return []


def with_default_price(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Glass types seeded without a price get DEFAULT_PRICE_PER_SQM."""
    if raw.get("price_per_sqm") is None:
        return {**raw, "price_per_sqm": DEFAULT_PRICE_PER_SQM}
    return raw


def create_glass_type(raw: Dict[str, Any], options: Optional[FactoryOptions] = None) -> FactoryResult[GlassTypeInput]:
    return _run(GlassTypeInput, raw, options, _glass_type_rules, _glass_type_warnings)


def create_glass_type_batch(records, options=None) -> BatchResult[GlassTypeInput]:
    return _batch(create_glass_type, records, options)


# ---------------------------------------------------------------------------
# Model
# ---------------------------------------------------------------------------

def _model_rules(m: ModelInput) -> List[ValidationError]:
    errors: List[ValidationError] = []

    for err in (
        validate_min_max(m.min_width_mm, m.max_width_mm, "width"),
        validate_min_max(m.min_height_mm, m.max_height_mm, "height"),
        validate_price(m.base_price, "base_price", MAX_BASE_PRICE),
    ):
        if err:
            errors.append(err)

    for path, value in (("cost_per_mm_width", m.cost_per_mm_width), ("cost_per_mm_height", m.cost_per_mm_height)):
        if value > MAX_COST_PER_MM:
            errors.append(ValidationError(
                code="COST_TOO_HIGH",
                message=f"Cost per mm exceeds maximum ({MAX_COST_PER_MM})",
                path=[path],
                context={"expected": f"<= {MAX_COST_PER_MM}", "received": value},
            ))

    if m.accessory_price is not None and m.accessory_price > MAX_ACCESSORY_PRICE:
        errors.append(ValidationError(
            code="PRICE_TOO_HIGH",
            message=f"Accessory price exceeds maximum allowed ({MAX_ACCESSORY_PRICE})",
            path=["accessory_price"],
            context={"expected": f"<= {MAX_ACCESSORY_PRICE}", "received": m.accessory_price},
        ))
    return errors


def create_model(raw: Dict[str, Any], options: Optional[FactoryOptions] = None) -> FactoryResult[ModelInput]:
    return _run(ModelInput, raw, options, _model_rules)


def create_model_batch(records, options=None) -> BatchResult[ModelInput]:
    return _batch(create_model, records, options)


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

def _service_rules(s: ServiceInput) -> List[ValidationError]:
    errors: List[ValidationError] = []
    expected_unit = SERVICE_TYPE_UNIT[s.type]
    if s.unit != expected_unit:
        errors.append(ValidationError(
            code="INVALID_TYPE_UNIT_COMBINATION",
            message=f"Service type '{s.type}' requires unit '{expected_unit}'",
            path=["unit"],
            context={"expected": expected_unit, "received": s.unit},
        ))
    price_error = validate_price(s.rate, "rate", MAX_SERVICE_RATE)
    if price_error:
        errors.append(price_error)
    return errors


def create_service(raw: Dict[str, Any], options: Optional[FactoryOptions] = None) -> FactoryResult[ServiceInput]:
    return _run(ServiceInput, raw, options, _service_rules)


def create_service_batch(records, options=None) -> BatchResult[ServiceInput]:
    return _batch(create_service, records, options)


# ---------------------------------------------------------------------------
# GlassSolution
# ---------------------------------------------------------------------------

def _glass_solution_rules(s: GlassSolutionInput) -> List[ValidationError]:
    errors: List[ValidationError] = []
    if s.key not in VALID_SOLUTION_KEYS:
        errors.append(ValidationError(
            code="INVALID_SOLUTION_KEY",
            message=f"Unknown solution key '{s.key}'",
            path=["key"],
            context={"expected": list(VALID_SOLUTION_KEYS), "received": s.key},
        ))
    if s.icon not in VALID_ICONS:
        errors.append(ValidationError(
            code="INVALID_ICON",
            message=f"Unknown icon '{s.icon}'",
            path=["icon"],
            context={"expected": list(VALID_ICONS), "received": s.icon},
        ))
    if s.name_es == s.name:
        errors.append(ValidationError(
            code="INVALID_TRANSLATION",
            message="name_es should be a Spanish translation, not identical to name",
            path=["name_es"],
        ))
    lowered = s.description.lower()
    if not any(token in lowered for token in SPANISH_INDICATORS):
        errors.append(ValidationError(
            code="INVALID_LANGUAGE",
            message="description should be in Spanish (es-LA)",
            path=["description"],
        ))
    return errors


def create_glass_solution(raw: Dict[str, Any], options: Optional[FactoryOptions] = None) -> FactoryResult[GlassSolutionInput]:
    return _run(GlassSolutionInput, raw, options, _glass_solution_rules)


def create_glass_solution_batch(records, options=None) -> BatchResult[GlassSolutionInput]:
    return _batch(create_glass_solution, records, options)


# ---------------------------------------------------------------------------
# GlassTypeSolution
# ---------------------------------------------------------------------------

def create_glass_type_solution(raw: Dict[str, Any], options: Optional[FactoryOptions] = None) -> FactoryResult[GlassTypeSolutionInput]:
    return _run(GlassTypeSolutionInput, raw, options)


def create_glass_type_solution_batch(records, options=None) -> BatchResult[GlassTypeSolutionInput]:
    return _batch(create_glass_type_solution, records, options)
