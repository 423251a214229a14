"""
Preset validator: checks a preset without touching the database.

Runs every factory over the preset's records and adds the cross-record checks
a single factory cannot see: duplicate natural keys, model supplier references,
explicit glass supplier codes and explicit mapping references.
"""
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional

from glasify.models.seed_schema import GlassTypeSolutionMapping
from glasify.presets import Preset
from glasify.services import factories
from glasify.services.validation import (
    ValidationError,
    validate_non_empty,
    validate_range,
    validate_with_schema,
)

logger = logging.getLogger("glasify-presets")

# Plausibility ranges, reported as warnings
U_VALUE_RANGE = (0.0, 10.0)


@dataclass
class ReportEntry:
    section: str
    index: Optional[int]
    code: str
    message: str
    path: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"section": self.section, "index": self.index, "code": self.code,
                "message": self.message, "path": self.path}


@dataclass
class PresetValidationReport:
    preset: str
    started_at: str
    completed_at: str = ""
    execution_time_ms: int = 0
    errors: List[ReportEntry] = field(default_factory=list)
    warnings: List[ReportEntry] = field(default_factory=list)
    strict: bool = False

    @property
    def status(self) -> str:
        if self.errors or (self.strict and self.warnings):
            return "failed"
        if self.warnings:
            return "warnings"
        return "success"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "preset": self.preset,
            "status": self.status,
            "started_at": self.started_at,
            "completed_at": self.completed_at,
            "execution_time_ms": self.execution_time_ms,
            "errors": [e.to_dict() for e in self.errors],
            "warnings": [w.to_dict() for w in self.warnings],
        }


class _Collector:
    def __init__(self, report: PresetValidationReport):
        self.report = report

    def error(self, section: str, index: Optional[int], err: ValidationError) -> None:
        self.report.errors.append(ReportEntry(section, index, err.code, err.message, err.dotted_path))

    def warning(self, section: str, index: Optional[int], err: ValidationError) -> None:
        self.report.warnings.append(ReportEntry(section, index, err.code, err.message, err.dotted_path))


def _run_factory(collector: _Collector, section: str, factory: Callable, records: Iterable[Dict[str, Any]]) -> None:
    for index, raw in enumerate(records):
        result = factory(raw)
        for err in result.errors:
            collector.error(section, index, err)
        for warning in result.warnings:
            collector.warning(section, index, warning)


def _duplicates(collector: _Collector, section: str, records: List[Dict[str, Any]], field_name: str, code: str) -> None:
    seen: Dict[Any, int] = {}
    for index, raw in enumerate(records):
        value = raw.get(field_name)
        if value is None:
            continue
        if value in seen:
            collector.error(section, index, ValidationError(
                code=code,
                message=f"Duplicate {field_name} '{value}' (first at index {seen[value]})",
                path=[field_name],
            ))
        else:
            seen[value] = index


def validate_preset(preset: Preset, strict: bool = False) -> PresetValidationReport:
    started = time.perf_counter()
    report = PresetValidationReport(
        preset=preset.name,
        started_at=datetime.now(timezone.utc).isoformat(),
        strict=strict,
    )
    collect = _Collector(report)

    for section in ("profile_suppliers", "glass_types", "models", "glass_solutions"):
        empty = validate_non_empty(getattr(preset, section), section)
        if empty:
            collect.warning(section, None, empty)

    priced = [factories.with_default_price(g) for g in preset.glass_types]
    _run_factory(collect, "profile_suppliers", factories.create_profile_supplier, preset.profile_suppliers)
    _run_factory(collect, "glass_suppliers", factories.create_glass_supplier, preset.glass_suppliers)
    _run_factory(collect, "glass_types", factories.create_glass_type, priced)
    _run_factory(collect, "models", factories.create_model, preset.models)
    _run_factory(collect, "services", factories.create_service, preset.services)
    _run_factory(collect, "glass_solutions", factories.create_glass_solution, preset.glass_solutions)

    for index, g in enumerate(preset.glass_types):
        out_of_range = validate_range(g.get("u_value"), U_VALUE_RANGE[0], U_VALUE_RANGE[1], "u_value")
        if out_of_range:
            collect.warning("glass_types", index, out_of_range)

    _duplicates(collect, "profile_suppliers", preset.profile_suppliers, "name", "DUPLICATE_NAME")
    _duplicates(collect, "glass_suppliers", preset.glass_suppliers, "name", "DUPLICATE_NAME")
    _duplicates(collect, "glass_suppliers", preset.glass_suppliers, "code", "DUPLICATE_CODE")
    _duplicates(collect, "glass_types", preset.glass_types, "name", "DUPLICATE_NAME")
    _duplicates(collect, "glass_types", preset.glass_types, "code", "DUPLICATE_CODE")
    _duplicates(collect, "models", preset.models, "name", "DUPLICATE_NAME")
    _duplicates(collect, "glass_solutions", preset.glass_solutions, "key", "DUPLICATE_KEY")
    # services have no store-level constraint; a repeated name silently updates the first
    seen_services = {}
    for index, s in enumerate(preset.services):
        name = s.get("name")
        if name in seen_services:
            collect.warning("services", index, ValidationError(
                code="DUPLICATE_NAME", message=f"Duplicate service name '{name}'", path=["name"]))
        seen_services.setdefault(name, index)

    supplier_names = {s.get("name") for s in preset.profile_suppliers}
    for index, m in enumerate(preset.models):
        supplier = m.get("profile_supplier_name")
        if supplier is not None and supplier not in supplier_names:
            collect.error("models", index, ValidationError(
                code="UNKNOWN_SUPPLIER",
                message=f"Profile supplier '{supplier}' is not part of the preset",
                path=["profile_supplier_name"],
            ))

    glass_supplier_codes = {(s.get("code") or "").upper() for s in preset.glass_suppliers} - {""}
    for index, g in enumerate(preset.glass_types):
        code = g.get("glass_supplier_code")
        if code and code.upper() not in glass_supplier_codes:
            collect.error("glass_types", index, ValidationError(
                code="UNKNOWN_GLASS_SUPPLIER",
                message=f"Glass supplier code '{code}' is not part of the preset",
                path=["glass_supplier_code"],
            ))

    if preset.glass_type_solution_mappings is not None:
        _check_mappings(collect, preset)

    report.completed_at = datetime.now(timezone.utc).isoformat()
    report.execution_time_ms = int((time.perf_counter() - started) * 1000)
    logger.info("Preset %s: %s (%d errors, %d warnings)",
                preset.name, report.status, len(report.errors), len(report.warnings))
    return report


def _check_mappings(collect: _Collector, preset: Preset) -> None:
    glass_names = {g.get("name") for g in preset.glass_types}
    solution_keys = {s.get("key") for s in preset.glass_solutions}
    primaries: Dict[str, int] = {}
    seen = set()
    for index, raw in enumerate(preset.glass_type_solution_mappings or []):
        parsed = validate_with_schema(GlassTypeSolutionMapping, raw)
        if not parsed.success:
            for err in parsed.errors:
                collect.error("glass_type_solution_mappings", index, err)
            continue
        mapping = parsed.data
        if mapping.glass_type_name not in glass_names:
            collect.error("glass_type_solution_mappings", index, ValidationError(
                code="UNKNOWN_GLASS_TYPE", message=f"Glass type '{mapping.glass_type_name}' is not part of the preset",
                path=["glass_type_name"]))
        if mapping.solution_key not in solution_keys:
            collect.error("glass_type_solution_mappings", index, ValidationError(
                code="UNKNOWN_SOLUTION", message=f"Solution '{mapping.solution_key}' is not part of the preset",
                path=["solution_key"]))
        pair = (mapping.glass_type_name, mapping.solution_key)
        if pair in seen:
            collect.error("glass_type_solution_mappings", index, ValidationError(
                code="DUPLICATE_MAPPING", message=f"Duplicate mapping {pair[0]} -> {pair[1]}",
                path=["solution_key"]))
        seen.add(pair)
        if mapping.is_primary:
            primaries[mapping.glass_type_name] = primaries.get(mapping.glass_type_name, 0) + 1

    for name, count in primaries.items():
        if count > 1:
            collect.error("glass_type_solution_mappings", None, ValidationError(
                code="MULTIPLE_PRIMARY", message=f"Glass type '{name}' has {count} primary solutions",
                path=["is_primary"]))
    mapped = {m.get("glass_type_name") for m in preset.glass_type_solution_mappings or []}
    for name in sorted(n for n in mapped if n not in primaries and n in glass_names):
        collect.warning("glass_type_solution_mappings", None, ValidationError(
            code="MISSING_PRIMARY", message=f"Glass type '{name}' has no primary solution; the first one is promoted",
            path=["is_primary"]))
