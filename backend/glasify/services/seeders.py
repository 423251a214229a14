"""
Batch Upsert Seeder

One generic seeder per entity table, keyed by a natural key.

  insert_only(records)        bulk insert-or-skip, one statement per batch
  upsert(records, options)    per-record insert-or-update, strictly sequential
  clear()                     delete every row of the table

upsert commits each record on its own so continue-on-error can drop exactly
one failing record.  Inserted vs updated is decided by looking the natural key
up in the same session before the write.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, Iterator, List, Optional, Sequence, Tuple, TypeVar

from pydantic import BaseModel
from sqlalchemy import delete, insert, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import func

from glasify.config import DEFAULT_BATCH_SIZE
from glasify.services.exceptions import PersistenceError, SeedingError, ValidationFailed
from glasify.services.seed_stats import SeedErrorRecord

logger = logging.getLogger("glasify-seeder")

T = TypeVar("T", bound=BaseModel)

# Dialects with INSERT .. ON CONFLICT support
_CONFLICT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


@dataclass
class UpsertOptions:
    batch_size: int = DEFAULT_BATCH_SIZE
    continue_on_error: bool = False


@dataclass
class UpsertResult:
    inserted: int = 0
    updated: int = 0
    failed: int = 0
    errors: List[SeedErrorRecord] = field(default_factory=list)
    ids: Dict[Any, str] = field(default_factory=dict)


def chunked(items: Sequence[Any], size: int) -> Iterator[Sequence[Any]]:
    for start in range(0, len(items), size):
        yield items[start:start + size]


class BatchUpsertSeeder(Generic[T]):
    """
    Args:
        session: AsyncSession owned by the caller.
        model: ORM class of the target table.
        natural_key: column name(s) identifying a row.
        update_fields: columns overwritten on conflict (default: every
            value in the row except the natural key and id).
        to_row: converts a validated record to column values; may raise a
            SeedingError (e.g. ReferentialError) to fail that record.
        unique_constraint: False when the store has no constraint on the
            natural key, which forces lookup-then-write.
    """

    def __init__(
        self,
        session: AsyncSession,
        model: Any,
        natural_key: Tuple[str, ...],
        entity: Optional[str] = None,
        update_fields: Optional[Sequence[str]] = None,
        to_row: Optional[Callable[[T], Dict[str, Any]]] = None,
        unique_constraint: bool = True,
    ):
        self.session = session
        self.model = model
        self.natural_key = tuple(natural_key)
        self.entity = entity or model.__tablename__
        self.update_fields = tuple(update_fields) if update_fields else None
        self.to_row = to_row or self.default_row
        self.unique_constraint = unique_constraint
        self._columns = {c.key for c in model.__table__.columns}

    # ── helpers ──────────────────────────────────────────────────────────────

    def default_row(self, record: T) -> Dict[str, Any]:
        return {k: v for k, v in record.model_dump().items() if k in self._columns}

    def key_of(self, row: Dict[str, Any]) -> Any:
        if len(self.natural_key) == 1:
            return row[self.natural_key[0]]
        return tuple(row[k] for k in self.natural_key)

    def _key_filter(self, row: Dict[str, Any]):
        return [getattr(self.model, k) == row[k] for k in self.natural_key]

    def _conflict_insert(self):
        dialect = self.session.bind.dialect.name if self.session.bind is not None else ""
        if not self.unique_constraint:
            return None
        return _CONFLICT_INSERTS.get(dialect)

    def _update_set(self, row: Dict[str, Any]) -> List[str]:
        fields = self.update_fields or [k for k in row if k not in self.natural_key and k != "id"]
        return [f for f in fields if f in row]

    async def find_existing_id(self, row: Dict[str, Any]) -> Optional[str]:
        stmt = select(self.model.id).where(*self._key_filter(row)).limit(1)
        return await self.session.scalar(stmt)

    async def count(self) -> int:
        return await self.session.scalar(select(func.count()).select_from(self.model))

    # ── writes ───────────────────────────────────────────────────────────────

    async def _write_one(self, row: Dict[str, Any]) -> Tuple[str, bool]:
        existing_id = await self.find_existing_id(row)
        update_cols = self._update_set(row)
        dialect_insert = self._conflict_insert()

        if dialect_insert is not None:
            stmt = dialect_insert(self.model).values(**row)
            if update_cols:
                set_ = {c: stmt.excluded[c] for c in update_cols}
                set_["updated_at"] = func.now()
                stmt = stmt.on_conflict_do_update(index_elements=list(self.natural_key), set_=set_)
            else:
                stmt = stmt.on_conflict_do_nothing(index_elements=list(self.natural_key))
            row_id = (await self.session.execute(stmt.returning(self.model.id))).scalar_one_or_none()
            if row_id is None:
                row_id = existing_id
        elif existing_id is not None:
            values = {c: row[c] for c in update_cols}
            if values:
                values["updated_at"] = func.now()
                await self.session.execute(
                    update(self.model).where(self.model.id == existing_id).values(**values)
                )
            row_id = existing_id
        else:
            stmt = insert(self.model).values(**row).returning(self.model.id)
            row_id = (await self.session.execute(stmt)).scalar_one()

        await self.session.commit()
        return row_id, existing_id is None

    async def upsert(
        self,
        records: Sequence[T],
        options: Optional[UpsertOptions] = None,
        indexes: Optional[Sequence[int]] = None,
    ) -> UpsertResult:
        """
        Insert-or-update each record against its natural key.

        ``indexes`` maps each record to its position in the caller's input so
        errors point at the original record.  With continue_on_error off the
        first failure is raised with the partial result attached as ``partial``.
        A record no row can be built from (fields missing under skip_validation)
        fails as a validation error with code MALFORMED_RECORD.
        """
        options = options or UpsertOptions()
        result = UpsertResult()
        positions = list(indexes) if indexes is not None else list(range(len(records)))
        pairs = list(zip(positions, records))

        for batch_no, batch in enumerate(chunked(pairs, max(1, options.batch_size)), start=1):
            logger.debug("%s: batch %d (%d records)", self.entity, batch_no, len(batch))
            for index, record in batch:
                key = None
                try:
                    row = self.to_row(record)
                    key = self.key_of(row)
                    row_id, inserted = await self._write_one(row)
                except SeedingError as exc:
                    error = SeedErrorRecord(
                        kind=exc.kind, index=index, code=exc.code,
                        message=exc.message, key=_key_str(key),
                    )
                    self._fail(result, error, options, exc)
                    continue
                except (AttributeError, KeyError, TypeError, ValueError) as exc:
                    # unchecked records (skip_validation) may lack fields the row needs
                    await self.session.rollback()
                    error = SeedErrorRecord(
                        kind="validation", index=index, code="MALFORMED_RECORD",
                        message=f"{type(exc).__name__}: {exc}", key=_key_str(key),
                    )
                    malformed = ValidationFailed(
                        f"{self.entity}[{index}] malformed record: {exc}", [],
                        stage=self.entity, index=index,
                    )
                    self._fail(result, error, options, malformed)
                    continue
                except SQLAlchemyError as exc:
                    await self.session.rollback()
                    error = SeedErrorRecord(
                        kind="persistence", index=index, code="UPSERT_ERROR",
                        message=str(exc.orig if getattr(exc, "orig", None) is not None else exc),
                        key=_key_str(key),
                    )
                    wrapped = PersistenceError(
                        f"{self.entity}: upsert failed for {key!r}",
                        stage=self.entity, index=index, key=_key_str(key),
                        original_exception=exc, partial=result,
                    )
                    self._fail(result, error, options, wrapped)
                    continue

                result.ids[key] = row_id
                if inserted:
                    result.inserted += 1
                else:
                    result.updated += 1
                logger.debug("%s: %s %r", self.entity, "inserted" if inserted else "updated", key)

        logger.info("%s: %d inserted, %d updated, %d failed",
                    self.entity, result.inserted, result.updated, result.failed)
        return result

    def _fail(self, result: UpsertResult, error: SeedErrorRecord, options: UpsertOptions,
              exc: SeedingError) -> None:
        result.failed += 1
        result.errors.append(error)
        logger.warning("%s: record %s failed (%s): %s", self.entity, error.index, error.kind, error.message)
        if not options.continue_on_error:
            if exc.partial is None:
                exc.partial = result
            raise exc

    async def insert_only(self, records: Sequence[T], batch_size: int = DEFAULT_BATCH_SIZE) -> int:
        """Bulk insert, skipping rows whose natural key already exists. Returns rows inserted."""
        inserted = 0
        dialect_insert = self._conflict_insert()
        for batch in chunked(list(records), max(1, batch_size)):
            rows = [self.to_row(r) for r in batch]
            if dialect_insert is not None:
                stmt = dialect_insert(self.model).values(rows)
                stmt = stmt.on_conflict_do_nothing(index_elements=list(self.natural_key))
                new_ids = (await self.session.execute(stmt.returning(self.model.id))).scalars().all()
                inserted += len(new_ids)
            else:
                rows = await self._drop_existing(rows)
                if rows:
                    await self.session.execute(insert(self.model).values(rows))
                    inserted += len(rows)
            await self.session.commit()
        logger.info("%s: insert_only added %d rows", self.entity, inserted)
        return inserted

    async def _drop_existing(self, rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        fresh: List[Dict[str, Any]] = []
        seen = set()
        for row in rows:
            key = self.key_of(row)
            if key in seen or await self.find_existing_id(row) is not None:
                continue
            seen.add(key)
            fresh.append(row)
        return fresh

    async def clear(self) -> int:
        """Delete every row. Returns the number of rows removed."""
        result = await self.session.execute(delete(self.model))
        await self.session.commit()
        deleted = result.rowcount or 0
        logger.info("%s: cleared %d rows", self.entity, deleted)
        return deleted


def _key_str(key: Any) -> Optional[str]:
    if key is None:
        return None
    if isinstance(key, tuple):
        return "/".join(str(k) for k in key)
    return str(key)
