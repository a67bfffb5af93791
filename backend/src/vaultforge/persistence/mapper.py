"""Base mapper for VaultForge stores.

A mapper turns rows of one table into model objects and back. Mappers are
dialect-neutral via SQLAlchemy Core and scope every user-facing query to the
user they were built for. A mapper built without a user (cleanup jobs,
cascades) runs unscoped.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Any, ClassVar, Generic, TypeVar

import sqlalchemy as sa
from sqlalchemy.exc import SQLAlchemyError

from vaultforge.errors import AmbiguousResult, NotFound, StorageFailure
from vaultforge.models.base import field_names, object_type

ModelT = TypeVar("ModelT")


class ObjectMapper(Generic[ModelT]):
    """Row <-> model mapping and the queries every store shares."""

    table: ClassVar[sa.Table]
    model_class: ClassVar[type]

    def __init__(self, engine: sa.Engine, user_id: str | None = None):
        self._engine = engine
        self.user_id = user_id

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @contextmanager
    def _guard(self) -> Iterator[None]:
        """Translate driver errors into StorageFailure."""
        try:
            yield
        except SQLAlchemyError as exc:
            raise StorageFailure(
                f"{object_type(self.model_class)} storage call failed: {exc}"
            ) from exc

    def _scoped(self, stmt: sa.Select) -> sa.Select:
        if self.user_id is None:
            return stmt
        return stmt.where(self.table.c.user_id == self.user_id)

    def _to_model(self, row: Any) -> ModelT:
        names = field_names(self.model_class)
        return self.model_class(**{name: row[name] for name in names if name in row})

    def _to_row(self, obj: ModelT) -> dict[str, Any]:
        return {
            name: getattr(obj, name)
            for name in self.table.c.keys()
            if name != "id"
        }

    def _fetch_all(self, stmt: sa.Select) -> list[ModelT]:
        with self._guard(), self._engine.connect() as conn:
            rows = conn.execute(stmt).mappings().all()
        return [self._to_model(row) for row in rows]

    def _fetch_one(self, stmt: sa.Select, description: str) -> ModelT:
        """Fetch exactly one row.

        Raises:
            NotFound: If no row matches
            AmbiguousResult: If more than one row matches
        """
        found = self._fetch_all(stmt)
        if not found:
            raise NotFound(f"No {object_type(self.model_class)} found for {description}")
        if len(found) > 1:
            raise AmbiguousResult(
                f"{len(found)} {object_type(self.model_class)} rows found for {description}"
            )
        return found[0]

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def find_by_uuid(self, uuid: str) -> ModelT:
        stmt = self._scoped(sa.select(self.table).where(self.table.c.uuid == uuid))
        return self._fetch_one(stmt, f"uuid {uuid}")

    def find_all(self) -> list[ModelT]:
        """All rows of the calling user, including soft-deleted ones."""
        stmt = self._scoped(sa.select(self.table)).order_by(self.table.c.id)
        return self._fetch_all(stmt)

    def find_all_by_user_id(self, user_id: str) -> list[ModelT]:
        stmt = (
            sa.select(self.table)
            .where(self.table.c.user_id == user_id)
            .order_by(self.table.c.id)
        )
        return self._fetch_all(stmt)

    def find_all_deleted(self) -> list[ModelT]:
        """Soft-deleted rows of every user."""
        stmt = (
            sa.select(self.table)
            .where(self.table.c.deleted.is_(True))
            .order_by(self.table.c.id)
        )
        return self._fetch_all(stmt)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def insert(self, obj: ModelT) -> ModelT:
        """Insert a new row and assign its storage id to ``obj``."""
        with self._guard(), self._engine.begin() as conn:
            result = conn.execute(sa.insert(self.table).values(**self._to_row(obj)))
            obj.id = result.inserted_primary_key[0]
        return obj

    def update(self, obj: ModelT, columns: Sequence[str] | None = None) -> ModelT:
        """Write ``obj`` back by id, limited to ``columns`` when given."""
        values = self._to_row(obj)
        if columns is not None:
            values = {name: values[name] for name in columns}
        with self._guard(), self._engine.begin() as conn:
            result = conn.execute(
                sa.update(self.table).where(self.table.c.id == obj.id).values(**values)
            )
            matched = result.rowcount
        if matched == 0:
            raise NotFound(f"No {object_type(self.model_class)} found for id {obj.id}")
        return obj

    def delete(self, obj: ModelT) -> None:
        """Remove the row permanently.

        Only the lifecycle service's destroy step calls this, after the
        object has been soft-deleted.
        """
        with self._guard(), self._engine.begin() as conn:
            conn.execute(sa.delete(self.table).where(self.table.c.id == obj.id))
