"""
test_seeders.py — Integration tests for BatchUpsertSeeder on in-memory SQLite.

Tests cover:
  - Insert-or-update by natural key with explicit inserted/updated counts
  - Lookup-then-write for tables without a unique constraint (services)
  - insert_only skip semantics
  - continue_on_error vs abort, with the partial result attached on abort
  - Record-level referential failures raised from to_row, and records missing fields
  - clear() row counts and batch sizing
"""

import pytest
from sqlalchemy import func, select

from glasify.models.orm_models import ProfileSupplier, Service
from glasify.models.seed_schema import ProfileSupplierInput, ServiceInput
from glasify.services.exceptions import PersistenceError, ReferentialError, ValidationFailed
from glasify.services.seeders import BatchUpsertSeeder, UpsertOptions, chunked


def _supplier(name, notes=None, material="PVC"):
    return ProfileSupplierInput(name=name, material_type=material, notes=notes)


def _service(name, rate=45_000):
    return ServiceInput(name=name, type="area", unit="sqm", rate=rate)


async def _count(session, model):
    return await session.scalar(select(func.count()).select_from(model))


# ===========================================================================
# Class 1: Upsert by natural key
# ===========================================================================

class TestUpsert:

    async def test_insert_then_update(self, session):
        seeder = BatchUpsertSeeder(session, ProfileSupplier, ("name",))
        first = await seeder.upsert([_supplier("Deceuninck", notes="v1")])
        assert (first.inserted, first.updated, first.failed) == (1, 0, 0)

        second = await seeder.upsert([_supplier("Deceuninck", notes="v2")])
        assert (second.inserted, second.updated, second.failed) == (0, 1, 0)
        assert second.ids["Deceuninck"] == first.ids["Deceuninck"]

        notes = await session.scalar(select(ProfileSupplier.notes).where(ProfileSupplier.name == "Deceuninck"))
        assert notes == "v2"
        assert await _count(session, ProfileSupplier) == 1

    async def test_distinct_keys_make_distinct_rows(self, session):
        seeder = BatchUpsertSeeder(session, ProfileSupplier, ("name",))
        result = await seeder.upsert([_supplier("Deceuninck"), _supplier("Rehau")])
        assert result.inserted == 2
        assert len(set(result.ids.values())) == 2
        assert await seeder.count() == 2

    async def test_timestamps_are_set(self, session):
        seeder = BatchUpsertSeeder(session, ProfileSupplier, ("name",))
        await seeder.upsert([_supplier("Alumina", material="ALUMINUM")])
        await seeder.upsert([_supplier("Alumina", material="ALUMINUM", notes="local")])
        created_at, updated_at = (await session.execute(
            select(ProfileSupplier.created_at, ProfileSupplier.updated_at)
        )).one()
        assert created_at is not None
        assert updated_at is not None

    async def test_batch_size_does_not_change_outcome(self, session):
        seeder = BatchUpsertSeeder(session, ProfileSupplier, ("name",))
        records = [_supplier(f"Proveedor {i}") for i in range(5)]
        result = await seeder.upsert(records, UpsertOptions(batch_size=1))
        assert result.inserted == 5
        assert await seeder.count() == 5

    async def test_indexes_point_at_caller_positions(self, session):
        seeder = BatchUpsertSeeder(
            session, ProfileSupplier, ("name",),
            to_row=lambda r: {"name": r.name, "material_type": None},
        )
        result = await seeder.upsert([_supplier("Deceuninck")], UpsertOptions(continue_on_error=True), indexes=[7])
        assert result.errors[0].index == 7


# ===========================================================================
# Class 2: Tables without a unique constraint
# ===========================================================================

class TestLookupThenWrite:

    async def test_service_update_by_name(self, session):
        seeder = BatchUpsertSeeder(session, Service, ("name",), unique_constraint=False)
        first = await seeder.upsert([_service("Instalación Estándar")])
        second = await seeder.upsert([_service("Instalación Estándar", rate=50_000)])
        assert first.inserted == 1
        assert second.updated == 1
        assert await _count(session, Service) == 1
        rate = await session.scalar(select(Service.rate))
        assert float(rate) == 50_000

    async def test_insert_only_drops_existing_and_repeated(self, session):
        seeder = BatchUpsertSeeder(session, Service, ("name",), unique_constraint=False)
        await seeder.upsert([_service("Sellado")])
        added = await seeder.insert_only([_service("Sellado"), _service("Mosquitero"), _service("Mosquitero")])
        assert added == 1
        assert await _count(session, Service) == 2


# ===========================================================================
# Class 3: insert_only
# ===========================================================================

class TestInsertOnly:

    async def test_existing_keys_are_skipped(self, session):
        seeder = BatchUpsertSeeder(session, ProfileSupplier, ("name",))
        assert await seeder.insert_only([_supplier("Deceuninck", notes="original"), _supplier("Rehau")]) == 2
        added = await seeder.insert_only([_supplier("Deceuninck", notes="changed"), _supplier("Alumina")])
        assert added == 1
        notes = await session.scalar(select(ProfileSupplier.notes).where(ProfileSupplier.name == "Deceuninck"))
        assert notes == "original"


# ===========================================================================
# Class 4: Failures
# ===========================================================================

class TestFailures:

    def _broken_seeder(self, session):
        def to_row(record):
            # material_type is NOT NULL
            row = {"name": record.name, "material_type": record.material_type}
            if record.name == "Roto":
                row["material_type"] = None
            return row
        return BatchUpsertSeeder(session, ProfileSupplier, ("name",), to_row=to_row)

    async def test_continue_on_error_records_and_goes_on(self, session):
        seeder = self._broken_seeder(session)
        result = await seeder.upsert(
            [_supplier("Deceuninck"), _supplier("Roto"), _supplier("Rehau")],
            UpsertOptions(continue_on_error=True),
        )
        assert (result.inserted, result.failed) == (2, 1)
        error = result.errors[0]
        assert error.kind == "persistence"
        assert error.code == "UPSERT_ERROR"
        assert error.index == 1
        assert error.key == "Roto"
        assert await _count(session, ProfileSupplier) == 2

    async def test_abort_raises_with_partial_result(self, session):
        seeder = self._broken_seeder(session)
        with pytest.raises(PersistenceError) as exc_info:
            await seeder.upsert([_supplier("Deceuninck"), _supplier("Roto"), _supplier("Rehau")])
        partial = exc_info.value.partial
        assert partial.inserted == 1
        assert partial.failed == 1
        # the record before the failure stays committed
        assert await _count(session, ProfileSupplier) == 1

    async def test_referential_error_from_to_row(self, session):
        known = {"Deceuninck"}

        def to_row(record):
            if record.name not in known:
                raise ReferentialError("ProfileSupplier", record.name)
            return {"name": record.name, "material_type": record.material_type}

        seeder = BatchUpsertSeeder(session, ProfileSupplier, ("name",), to_row=to_row)
        result = await seeder.upsert([_supplier("Deceuninck"), _supplier("Fantasma")],
                                     UpsertOptions(continue_on_error=True))
        assert result.inserted == 1
        assert [(e.kind, e.code, e.index) for e in result.errors] == [("referential", "REFERENCE_NOT_FOUND", 1)]
        assert result.errors[0].message == "ProfileSupplier not found: Fantasma"

    async def test_unconstructed_record_is_a_validation_failure(self, session):
        # model_construct skips checks, so required fields can be absent
        incomplete = ProfileSupplierInput.model_construct(material_type="PVC")
        seeder = BatchUpsertSeeder(session, ProfileSupplier, ("name",))
        result = await seeder.upsert([_supplier("Deceuninck"), incomplete, _supplier("Rehau")],
                                     UpsertOptions(continue_on_error=True))
        assert result.inserted == 2
        assert [(e.kind, e.code, e.index) for e in result.errors] == [("validation", "MALFORMED_RECORD", 1)]

    async def test_unconstructed_record_aborts(self, session):
        incomplete = ProfileSupplierInput.model_construct(material_type="PVC")
        seeder = BatchUpsertSeeder(session, ProfileSupplier, ("name",))
        with pytest.raises(ValidationFailed) as exc_info:
            await seeder.upsert([incomplete])
        assert exc_info.value.index == 0
        assert exc_info.value.partial.failed == 1


# ===========================================================================
# Class 5: clear / helpers
# ===========================================================================

class TestClear:

    async def test_clear_returns_deleted_rows(self, session):
        seeder = BatchUpsertSeeder(session, ProfileSupplier, ("name",))
        await seeder.upsert([_supplier("Deceuninck"), _supplier("Rehau"), _supplier("Alumina")])
        assert await seeder.clear() == 3
        assert await seeder.count() == 0
        assert await seeder.clear() == 0

    def test_chunked(self):
        assert [list(c) for c in chunked([1, 2, 3, 4, 5], 2)] == [[1, 2], [3, 4], [5]]
