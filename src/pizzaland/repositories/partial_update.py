"""
Partial UPDATE statements built from the fields a caller actually supplied.

A builder is configured once per table with a fixed, ordered allow-list of
mutable columns. For a request it keeps only the supplied fields (zero values
and ``UNKNOWN`` enum members count as absent), refuses an empty change set and
filters by id or by name depending on the lookup key. Column names only ever
come from the allow-list; values are always bound parameters.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping, Sequence

from sqlalchemy import Table, update
from sqlalchemy.sql.dml import Update

from pizzaland.core.identifiers import ById, Identifier, resolve_identifier
from pizzaland.core.projector import is_zero
from pizzaland.exceptions.base import InvalidFieldError, NothingToUpdateError


def is_supplied(value: Any) -> bool:
    return not is_zero(value)


def supplied_unless(sentinel: Enum) -> Callable[[Any], bool]:
    """Supplied test for enum columns: anything but None and ``sentinel``."""
    def supplied(value: Any) -> bool:
        return value is not None and value != sentinel
    return supplied


@dataclass(frozen=True)
class UpdatableColumn:
    name: str
    supplied: Callable[[Any], bool] = is_supplied


@dataclass(frozen=True)
class PartialUpdate:
    key: Identifier
    assignments: tuple[tuple[str, Any], ...]
    statement: Update

    @property
    def columns(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self.assignments)


class PartialUpdateBuilder:
    """
    Builds ``UPDATE <table> SET ... WHERE id = ? | name = ? RETURNING id``.

    Args:
        table: the table being updated.
        columns: mutable columns, in table column order. Plain strings use the
            default zero-value supplied test.
        nothing_to_update: exception class raised for an empty change set.
        key_column / name_column: columns matched by ``ById`` / ``ByName``.

    Raises:
        ValueError: at construction, for unknown columns, primary-key columns
            or an order that differs from the table's.
    """

    def __init__(
        self,
        table: Table,
        columns: Sequence[UpdatableColumn | str],
        *,
        nothing_to_update: type[NothingToUpdateError] = NothingToUpdateError,
        key_column: str = "id",
        name_column: str = "name",
    ):
        self.table = table
        self.columns = tuple(c if isinstance(c, UpdatableColumn) else UpdatableColumn(c) for c in columns)
        self.nothing_to_update = nothing_to_update
        self.key_column = table.c[key_column]
        self.name_column = table.c[name_column]

        for column in self.columns:
            if column.name not in table.c:
                raise ValueError(f"{table.name} has no column {column.name!r}")
            if table.c[column.name].primary_key:
                raise ValueError(f"{table.name}.{column.name} is a key and cannot be updated")

        # SET clauses render in table order, so the allow-list must already be in it
        position = {column.name: index for index, column in enumerate(table.columns)}
        names = [column.name for column in self.columns]
        if names != sorted(names, key=position.__getitem__):
            raise ValueError(f"updatable columns for {table.name} must follow table column order")

    @property
    def allowed(self) -> frozenset[str]:
        return frozenset(column.name for column in self.columns)

    def assignments(self, fields: Mapping[str, Any]) -> tuple[tuple[str, Any], ...]:
        """Supplied (column, value) pairs in allow-list order."""
        unknown = sorted(set(fields) - self.allowed)
        if unknown:
            raise InvalidFieldError(
                f"Field(s) cannot be updated on {self.table.name}: {', '.join(unknown)}",
                fields=unknown,
            )

        pairs = []
        for column in self.columns:
            value = fields.get(column.name)
            if column.supplied(value):
                pairs.append((column.name, value.value if isinstance(value, Enum) else value))

        if not pairs:
            raise self.nothing_to_update()
        return tuple(pairs)

    def where(self, key: Identifier):
        if isinstance(key, ById):
            return self.key_column == key.value
        return self.name_column == key.value

    def build(self, identifier: Identifier | None, fields: Mapping[str, Any]) -> PartialUpdate:
        key = resolve_identifier(identifier)
        pairs = self.assignments(fields)
        statement = (
            update(self.table)
            .where(self.where(key))
            .values(dict(pairs))
            .returning(self.key_column)
        )
        return PartialUpdate(key=key, assignments=pairs, statement=statement)
