"""
Seed Orchestrator

Runs one preset through the pipeline in dependency order:

  1. clean                   delete seeded rows, children before parents
  2. tenant                  singleton TenantConfig, fixed id
  3. profile_suppliers       -> name -> id
  4. glass_suppliers         -> code -> id (optional, skipped when the preset has none)
  5. glass_types             -> name -> id (missing price gets the fallback,
                             supplier resolved by explicit code or code prefix)
  6. models                  supplier resolved by name, wired to every glass type
  7. services                lookup by name (no unique constraint)
  8. glass_solutions         -> key -> id
  9. glass_type_solutions    explicit preset mapping, or classification
 10. report

Every stage is awaited before the next starts.  With continue_on_error off
the first error of any kind aborts the run (SeedAborted carries the partial
stats); with it on, errors are recorded against the record index and the run
goes on.  There is no resume: a retried run starts again at clean.
"""
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from glasify.config import DEFAULT_BATCH_SIZE, TENANT_CONFIG_ID, TenantSettings
from glasify.models.orm_models import (
    GlassSolution,
    GlassSupplier,
    GlassType,
    GlassTypeSolution,
    Model,
    ProfileSupplier,
    Service,
    TenantConfig,
)
from glasify.models.seed_schema import GlassTypeSolutionMapping
from glasify.presets import Preset
from glasify.services import factories
from glasify.services.classification_engine import GlassCharacteristics, classify, ensure_primary
from glasify.services.exceptions import (
    PersistenceError,
    ReferentialError,
    SeedAborted,
    SeedingError,
    ValidationFailed,
)
from glasify.services.logging_config import SeedLogger
from glasify.services.seed_stats import SeedErrorRecord, SeedStats, StageStats
from glasify.services.seeders import BatchUpsertSeeder, UpsertOptions, UpsertResult
from glasify.services.validation import (
    BatchResult,
    FactoryOptions,
    ValidationError,
    build_record,
)

# Children before parents
CLEAN_ORDER = (
    ("glass_type_solutions", GlassTypeSolution),
    ("models", Model),
    ("services", Service),
    ("glass_types", GlassType),
    ("glass_suppliers", GlassSupplier),
    ("glass_solutions", GlassSolution),
    ("profile_suppliers", ProfileSupplier),
)


@dataclass
class SeedOptions:
    skip_validation: bool = False
    continue_on_error: bool = False
    batch_size: int = DEFAULT_BATCH_SIZE
    clean: bool = True
    verbose: bool = False


class SeedOrchestrator:
    """
    Owns one seeding run.

    Args:
        session: AsyncSession used by every seeder of the run.
        tenant: tenant settings (validated again by the tenant factory);
            None skips the tenant stage.
        options: run options.
    """

    def __init__(
        self,
        session: AsyncSession,
        tenant: Union[TenantSettings, Mapping[str, Any], None] = None,
        options: Optional[SeedOptions] = None,
        log: Optional[SeedLogger] = None,
    ):
        self.session = session
        self.tenant = tenant
        self.options = options or SeedOptions()
        self.log = log or SeedLogger(verbose=self.options.verbose)
        self.factory_options = FactoryOptions(skip_validation=self.options.skip_validation)
        self.upsert_options = UpsertOptions(
            batch_size=self.options.batch_size,
            continue_on_error=self.options.continue_on_error,
        )

    # ── run ──────────────────────────────────────────────────────────────────

    async def seed(self, preset: Preset) -> SeedStats:
        stats = SeedStats(preset=preset.name)
        started = time.perf_counter()
        self.log.section(f"Seeding preset '{preset.name}'")
        self.log.info("%s", preset.description)
        try:
            if self.options.clean:
                await self.clean(stats)
            await self.seed_tenant(stats)
            supplier_ids = await self.seed_profile_suppliers(preset.profile_suppliers, stats)
            glass_supplier_ids = await self.seed_glass_suppliers(preset.glass_suppliers, stats)
            glass_type_ids = await self.seed_glass_types(preset.glass_types, glass_supplier_ids, stats)
            await self.seed_models(preset.models, supplier_ids, glass_type_ids, stats)
            await self.seed_services(preset.services, stats)
            solution_ids = await self.seed_glass_solutions(preset.glass_solutions, stats)
            if preset.glass_type_solution_mappings is not None:
                await self.seed_explicit_assignments(
                    preset.glass_type_solution_mappings, glass_type_ids, solution_ids, stats)
            else:
                await self.seed_classified_assignments(glass_type_ids, solution_ids, stats)
        except SeedingError as exc:
            stats.status = "aborted"
            stats.aborted_stage = exc.stage
            stats.duration_ms = int((time.perf_counter() - started) * 1000)
            self.log.error("Seeding aborted at stage %s: %s", exc.stage, exc.message)
            self.report(stats)
            raise SeedAborted(exc.stage or "unknown", exc, stats) from exc

        stats.duration_ms = int((time.perf_counter() - started) * 1000)
        self.report(stats)
        return stats

    # ── stage 1: clean ───────────────────────────────────────────────────────

    async def clean(self, stats: SeedStats) -> None:
        """TenantConfig is never deleted."""
        self.log.section("Clean")
        for name, model in CLEAN_ORDER:
            seeder = BatchUpsertSeeder(self.session, model, ("id",), entity=name)
            try:
                stats.cleaned[name] = await seeder.clear()
            except SQLAlchemyError as exc:
                await self.session.rollback()
                stats.cleanup_errors.append(f"{name}: {exc}")
                self.log.error("Failed to clean %s: %s", name, exc)
                if not self.options.continue_on_error:
                    raise PersistenceError(f"Failed to clean {name}", stage="clean",
                                           original_exception=exc)
        self.log.success("Cleaned %d rows", sum(stats.cleaned.values()))

    # ── stage 2: tenant ──────────────────────────────────────────────────────

    async def seed_tenant(self, stats: SeedStats) -> None:
        self.log.section("Tenant")
        stage = stats["tenant"]
        if self.tenant is None:
            self.log.warn("No tenant settings supplied, skipping TenantConfig")
            stage.skipped += 1
            return
        raw = self.tenant.model_dump() if isinstance(self.tenant, BaseModel) else dict(self.tenant)
        batch = self._validate("tenant", factories.create_tenant_config, [raw], stage)
        seeder = BatchUpsertSeeder(
            self.session, TenantConfig, ("id",), entity="tenant",
            to_row=lambda t: {"id": TENANT_CONFIG_ID, **t.model_dump()},
        )
        await self._upsert("tenant", seeder, batch, stage)

    # ── stage 3: profile suppliers ───────────────────────────────────────────

    async def seed_profile_suppliers(self, records: Sequence[Dict[str, Any]], stats: SeedStats) -> Dict[str, str]:
        self.log.section("Profile suppliers")
        stage = stats["profile_suppliers"]
        batch = self._validate("profile_suppliers", factories.create_profile_supplier, records, stage)
        seeder = BatchUpsertSeeder(self.session, ProfileSupplier, ("name",), entity="profile_suppliers")
        result = await self._upsert("profile_suppliers", seeder, batch, stage)
        return dict(result.ids)

    # ── stage 4: glass suppliers ─────────────────────────────────────────────

    async def seed_glass_suppliers(self, records: Sequence[Dict[str, Any]], stats: SeedStats) -> Dict[str, str]:
        """Returns supplier code -> id; suppliers without a code are seeded but not resolvable."""
        self.log.section("Glass suppliers")
        if not records:
            self.log.info("No glass suppliers in preset, glass types are seeded without one")
            return {}
        stage = stats["glass_suppliers"]
        batch = self._validate("glass_suppliers", factories.create_glass_supplier, records, stage)
        seeder = BatchUpsertSeeder(self.session, GlassSupplier, ("name",), entity="glass_suppliers")
        result = await self._upsert("glass_suppliers", seeder, batch, stage)
        codes: Dict[str, str] = {}
        for supplier in batch.valid:
            code = getattr(supplier, "code", None)
            supplier_id = result.ids.get(getattr(supplier, "name", None))
            if code and supplier_id is not None:
                codes[code.upper()] = supplier_id
        return codes

    # ── stage 5: glass types ─────────────────────────────────────────────────

    async def seed_glass_types(
        self,
        records: Sequence[Dict[str, Any]],
        glass_supplier_ids: Mapping[str, str],
        stats: SeedStats,
    ) -> Dict[str, str]:
        self.log.section("Glass types")
        stage = stats["glass_types"]
        priced = [factories.with_default_price(r) for r in records]
        defaulted = sum(1 for r in records if r.get("price_per_sqm") is None)
        if defaulted:
            self.log.info("%d glass types without price use the default %.2f/m²",
                          defaulted, factories.DEFAULT_PRICE_PER_SQM)
        batch = self._validate("glass_types", factories.create_glass_type, priced, stage)
        seeder: BatchUpsertSeeder = BatchUpsertSeeder(self.session, GlassType, ("name",), entity="glass_types")
        # longest code first so "AB" never shadows "ABC"
        prefixes = sorted(glass_supplier_ids, key=len, reverse=True)

        def to_row(glass_input) -> Dict[str, Any]:
            row = seeder.default_row(glass_input)
            explicit = getattr(glass_input, "glass_supplier_code", None)
            if explicit:
                row["glass_supplier_id"] = _resolve(glass_supplier_ids, "GlassSupplier", explicit.upper())
                return row
            code = (getattr(glass_input, "code", None) or "").upper()
            row["glass_supplier_id"] = next(
                (glass_supplier_ids[p] for p in prefixes if code.startswith(p)), None)
            return row

        seeder.to_row = to_row
        result = await self._upsert("glass_types", seeder, batch, stage)
        return dict(result.ids)

    # ── stage 6: models ──────────────────────────────────────────────────────

    async def seed_models(
        self,
        records: Sequence[Dict[str, Any]],
        supplier_ids: Mapping[str, str],
        glass_type_ids: Mapping[str, str],
        stats: SeedStats,
    ) -> Dict[str, str]:
        self.log.section("Models")
        stage = stats["models"]
        batch = self._validate("models", factories.create_model, records, stage)
        compatible = list(glass_type_ids.values())
        # TODO: replace with per-model compatible glass lists once presets carry them
        self.log.warn("Every model is wired to all %d seeded glass types", len(compatible))

        seeder: BatchUpsertSeeder = BatchUpsertSeeder(self.session, Model, ("name",), entity="models")

        def to_row(model_input) -> Dict[str, Any]:
            supplier_id = supplier_ids.get(model_input.profile_supplier_name)
            if supplier_id is None:
                raise ReferentialError("ProfileSupplier", model_input.profile_supplier_name, stage="models")
            row = seeder.default_row(model_input)
            row["profile_supplier_id"] = supplier_id
            row["compatible_glass_type_ids"] = compatible
            return row

        seeder.to_row = to_row
        result = await self._upsert("models", seeder, batch, stage)
        return dict(result.ids)

    # ── stage 7: services ────────────────────────────────────────────────────

    async def seed_services(self, records: Sequence[Dict[str, Any]], stats: SeedStats) -> Dict[str, str]:
        self.log.section("Services")
        stage = stats["services"]
        batch = self._validate("services", factories.create_service, records, stage)
        seeder = BatchUpsertSeeder(self.session, Service, ("name",), entity="services",
                                   unique_constraint=False)
        result = await self._upsert("services", seeder, batch, stage)
        return dict(result.ids)

    # ── stage 8: glass solutions ─────────────────────────────────────────────

    async def seed_glass_solutions(self, records: Sequence[Dict[str, Any]], stats: SeedStats) -> Dict[str, str]:
        self.log.section("Glass solutions")
        stage = stats["glass_solutions"]
        batch = self._validate("glass_solutions", factories.create_glass_solution, records, stage)
        seeder: BatchUpsertSeeder = BatchUpsertSeeder(self.session, GlassSolution, ("key",), entity="glass_solutions")
        seeder.to_row = lambda s: {**seeder.default_row(s), "slug": s.slug}
        result = await self._upsert("glass_solutions", seeder, batch, stage)
        return dict(result.ids)

    # ── stage 9: glass type <-> solution ─────────────────────────────────────

    async def seed_explicit_assignments(
        self,
        mappings: Sequence[Dict[str, Any]],
        glass_type_ids: Mapping[str, str],
        solution_ids: Mapping[str, str],
        stats: SeedStats,
    ) -> None:
        self.log.section("Glass type solutions (preset mapping)")
        stage = stats["glass_type_solutions"]
        rows: List[Dict[str, Any]] = []
        positions: List[int] = []
        for index, raw in enumerate(mappings):
            parsed = build_record(GlassTypeSolutionMapping, raw, self.factory_options)
            if not parsed.success:
                self._validation_failed("glass_type_solutions", stage, index, parsed.errors, raw)
                continue
            mapping = parsed.data
            try:
                glass_type_id = _resolve(glass_type_ids, "GlassType", getattr(mapping, "glass_type_name", None))
                solution_id = _resolve(solution_ids, "GlassSolution", getattr(mapping, "solution_key", None))
            except ReferentialError as exc:
                self._failed("glass_type_solutions", stage, SeedErrorRecord(
                    kind="referential", index=index, code=exc.code, message=exc.message, key=exc.key,
                ), exc)
                continue
            rows.append({
                "glass_type_id": glass_type_id,
                "solution_id": solution_id,
                "performance_rating": getattr(mapping, "performance_rating", None),
                "is_primary": mapping.is_primary,
                "notes": mapping.notes,
            })
            positions.append(index)

        rows = self._normalize_primary(rows)
        batch = self._validate("glass_type_solutions", factories.create_glass_type_solution, rows, stage,
                               positions=positions)
        await self._upsert_assignments(batch, stage)

    async def seed_classified_assignments(
        self,
        glass_type_ids: Mapping[str, str],
        solution_ids: Mapping[str, str],
        stats: SeedStats,
    ) -> None:
        self.log.section("Glass type solutions (classification)")
        stage = stats["glass_type_solutions"]
        if not glass_type_ids:
            self.log.warn("No glass types seeded, nothing to classify")
            return

        glass_types = (await self.session.scalars(
            select(GlassType).where(GlassType.id.in_(list(glass_type_ids.values()))).order_by(GlassType.name)
            .execution_options(populate_existing=True)
        )).all()

        rows: List[Dict[str, Any]] = []
        for glass in glass_types:
            assignments = []
            for a in classify(GlassCharacteristics.from_record(glass)):
                if a.solution_key not in solution_ids:
                    self.log.warn("Solution '%s' not seeded, skipping it for %s", a.solution_key, glass.name)
                    stage.skipped += 1
                    continue
                assignments.append(a)
            assignments = ensure_primary(assignments)
            for a in assignments:
                rows.append({
                    "glass_type_id": glass.id,
                    "solution_id": solution_ids[a.solution_key],
                    "performance_rating": a.performance_rating,
                    "is_primary": a.is_primary,
                })
            self.log.debug("%s -> %s", glass.name,
                           ", ".join(f"{a.solution_key}:{a.performance_rating}{'*' if a.is_primary else ''}"
                                     for a in assignments))

        batch = self._validate("glass_type_solutions", factories.create_glass_type_solution, rows, stage)
        await self._upsert_assignments(batch, stage)

    async def _upsert_assignments(self, batch: BatchResult, stage: StageStats) -> None:
        seeder = BatchUpsertSeeder(
            self.session, GlassTypeSolution, ("glass_type_id", "solution_id"), entity="glass_type_solutions",
        )
        await self._upsert("glass_type_solutions", seeder, batch, stage)

    def _normalize_primary(self, rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Exactly one primary per glass type: first flagged wins, else the first row is promoted."""
        groups: "OrderedDict[str, List[int]]" = OrderedDict()
        for i, row in enumerate(rows):
            groups.setdefault(row["glass_type_id"], []).append(i)
        out = [dict(r) for r in rows]
        for glass_type_id, members in groups.items():
            primaries = [i for i in members if out[i]["is_primary"]]
            if not primaries:
                out[members[0]]["is_primary"] = True
            for extra in primaries[1:]:
                self.log.warn("Glass type %s has several primary solutions, keeping the first", glass_type_id)
                out[extra]["is_primary"] = False
        return out

    # ── shared stage plumbing ────────────────────────────────────────────────

    def _validate(
        self,
        stage_name: str,
        factory: Callable,
        records: Sequence[Dict[str, Any]],
        stage: StageStats,
        positions: Optional[Sequence[int]] = None,
    ) -> BatchResult:
        """Run a factory over records; failures are recorded before any write."""
        positions = list(positions) if positions is not None else list(range(len(records)))
        out: BatchResult = BatchResult()
        for position, raw in zip(positions, records):
            result = factory(raw, self.factory_options)
            if not result.success:
                self._validation_failed(stage_name, stage, position, result.errors, raw)
                continue
            for warning in result.warnings:
                self.log.warn("%s[%d] %s", stage_name, position, warning)
            out.valid.append(result.data)
            out.valid_indexes.append(position)
        return out

    def _validation_failed(self, stage_name: str, stage: StageStats, index: int,
                           errors: List[ValidationError], raw: Dict[str, Any]) -> None:
        key = raw.get("name") or raw.get("key") or raw.get("glass_type_name")
        stage.failed += 1
        for err in errors:
            stage.record_error(SeedErrorRecord(
                kind="validation", index=index, code=err.code, message=err.message,
                path=err.dotted_path, key=key,
            ))
            self.log.error("%s[%d] %s: %s", stage_name, index, key or "", err)
        if not self.options.continue_on_error:
            raise ValidationFailed(f"{stage_name}[{index}] failed validation", errors,
                                   stage=stage_name, index=index)

    def _failed(self, stage_name: str, stage: StageStats, error: SeedErrorRecord, exc: SeedingError) -> None:
        stage.failed += 1
        stage.record_error(error)
        self.log.error("%s[%s] %s", stage_name, error.index, error.message)
        if not self.options.continue_on_error:
            exc.stage = exc.stage or stage_name
            raise exc

    async def _upsert(self, stage_name: str, seeder: BatchUpsertSeeder, batch: BatchResult,
                      stage: StageStats) -> UpsertResult:
        try:
            result = await seeder.upsert(batch.valid, self.upsert_options, indexes=batch.valid_indexes)
        except SeedingError as exc:
            if isinstance(exc.partial, UpsertResult):
                _merge(stage, exc.partial)
            exc.stage = stage_name
            raise
        _merge(stage, result)
        self.log.success("%s: %d created, %d updated, %d failed",
                         stage_name, stage.created, stage.updated, stage.failed)
        return result

    # ── stage 10: report ─────────────────────────────────────────────────────

    def report(self, stats: SeedStats) -> None:
        self.log.section("Summary")
        for name, stage in stats.stages.items():
            self.log.info("%-22s created=%-4d updated=%-4d failed=%-4d", name, stage.created, stage.updated, stage.failed)
        self.log.info("%-22s created=%-4d updated=%-4d failed=%-4d", "TOTAL",
                      stats.total_created, stats.total_updated, stats.total_failed)
        self.log.info("Duration: %d ms, status: %s", stats.duration_ms, stats.status)


def _resolve(ids: Mapping[str, str], lookup: str, key: Optional[str]) -> str:
    found = ids.get(key)
    if found is None:
        raise ReferentialError(lookup, key)
    return found


def _merge(stage: StageStats, result: UpsertResult) -> None:
    stage.created += result.inserted
    stage.updated += result.updated
    stage.failed += result.failed
    stage.errors.extend(result.errors)
