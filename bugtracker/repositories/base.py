"""Shared repository machinery over the store gateway."""

from typing import Any, ClassVar, Generic, Mapping, Optional, TypeVar

from pydantic import BaseModel
from sqlalchemy import Column, Table, delete, insert, select, update
from sqlalchemy.sql import Select, Update

from bugtracker.core.exceptions import ValidationError
from bugtracker.store import StoreGateway

RecordT = TypeVar("RecordT", bound=BaseModel)


class UpdateBuilder:
    """
    Accumulates (column, bound value) pairs for a partial UPDATE.

    Values are always bound as parameters by SQLAlchemy; only column names
    taken from the table definition reach the SET clause.
    """

    def __init__(self, table: Table):
        self.table = table
        self._assignments: dict[str, Any] = {}

    def set(self, column: str, value: Any) -> "UpdateBuilder":
        """Assign a value to a column of the table."""
        if column not in self.table.c:
            raise KeyError(f"{self.table.name} has no column {column!r}")
        self._assignments[column] = value
        return self

    def set_present(self, fields: Mapping[str, Any], columns: tuple[str, ...]) -> "UpdateBuilder":
        """Assign every listed column that is present in fields."""
        for column in columns:
            if column in fields:
                self.set(column, fields[column])
        return self

    @property
    def is_empty(self) -> bool:
        return not self._assignments

    def build(self, key_column: Column, key_value: Any) -> Update:
        """
        Build the UPDATE ... RETURNING statement.

        Raises:
            ValidationError: If no column was assigned
        """
        if self.is_empty:
            raise ValidationError(message="No fields to update", code="NO_FIELDS_TO_UPDATE")

        return (
            update(self.table)
            .where(key_column == key_value)
            .values(**self._assignments)
            .returning(*self.table.c)
        )


class BaseRepository(Generic[RecordT]):
    """
    Thin mapping from entity operations to single parameterized statements.

    Subclasses set the table, primary key name, record schema and the
    columns a partial update may touch.
    """

    table: ClassVar[Table]
    primary_key: ClassVar[str]
    record: ClassVar[type[BaseModel]]
    updatable: ClassVar[tuple[str, ...]] = ()

    def __init__(self, gateway: StoreGateway):
        self.gateway = gateway

    @property
    def key_column(self) -> Column:
        return self.table.c[self.primary_key]

    def _select(self, descending: bool = True) -> Select:
        created = self.table.c.created_at
        if descending:
            return select(self.table).order_by(created.desc(), self.key_column.desc())
        return select(self.table).order_by(created.asc(), self.key_column.asc())

    def _to_record(self, row: Mapping[str, Any]) -> RecordT:
        return self.record.model_validate(row)

    async def _fetch_all(self, statement: Select) -> list[RecordT]:
        result = await self.gateway.execute(statement)
        return [self._to_record(row) for row in result.rows]

    async def _fetch_one(self, statement: Any) -> Optional[RecordT]:
        result = await self.gateway.execute(statement)
        row = result.first()
        return self._to_record(row) if row is not None else None

    async def get_all(self) -> list[RecordT]:
        """Get every row, newest first."""
        return await self._fetch_all(self._select())

    async def get_by_id(self, entity_id: int) -> Optional[RecordT]:
        """Get a row by primary key."""
        return await self._fetch_one(
            select(self.table).where(self.key_column == entity_id)
        )

    async def _get_by(self, column: str, value: Any, descending: bool = True) -> list[RecordT]:
        statement = self._select(descending).where(self.table.c[column] == value)
        return await self._fetch_all(statement)

    async def create(self, fields: Mapping[str, Any]) -> RecordT:
        """Insert a row and return it as persisted, including server defaults."""
        statement = insert(self.table).values(**fields).returning(*self.table.c)
        result = await self.gateway.execute(statement)
        return self._to_record(result.rows[0])

    async def update(self, entity_id: int, fields: Mapping[str, Any]) -> Optional[RecordT]:
        """
        Update the updatable columns present in fields.

        Args:
            entity_id: Primary key of the row
            fields: Partial field values keyed by column name

        Returns:
            The updated row, or None if no row has that key

        Raises:
            ValidationError: If fields contains no updatable column
        """
        builder = UpdateBuilder(self.table).set_present(fields, self.updatable)
        if not builder.is_empty:
            self._stamp(builder)
        return await self._fetch_one(builder.build(self.key_column, entity_id))

    def _stamp(self, builder: UpdateBuilder) -> None:
        """Hook for columns maintained on every update."""

    async def delete(self, entity_id: int) -> bool:
        """Delete a row by primary key. True iff a row was removed."""
        result = await self.gateway.execute(
            delete(self.table).where(self.key_column == entity_id)
        )
        return result.affected_count > 0

    async def _delete_by(self, column: str, value: Any) -> int:
        result = await self.gateway.execute(
            delete(self.table).where(self.table.c[column] == value)
        )
        return result.affected_count
