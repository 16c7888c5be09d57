"""
Field projector: copy values between storage rows and wire messages.

Fields are paired by normalized name (lower-cased, ``_`` and ``-`` removed) so
``category_id`` lines up with ``categoryId``. The pairing for a given
(source fields, target type) is computed once into a ``FieldMapping`` table and
cached; projecting afterwards just walks that table.

Per field:
  1. a zero source value (None, "", 0, False, UNKNOWN) is left unset when the
     target field is optional;
  2. otherwise the value is copied, converted to the target's scalar type when
     it is not already an instance of it (e.g. ``Decimal`` -> ``float``,
     ``int`` -> ``DoughType``); a value that cannot be converted raises
     ``InvalidArgumentError``;
  3. source fields with no matching target are skipped.

Supported record shapes are pydantic models, SQLAlchemy mapped classes and
dataclasses. Sources may also be plain mappings, such as ``RowMapping`` rows.
"""

import dataclasses
import types
from collections.abc import Mapping
from decimal import Decimal
from enum import Enum
from functools import lru_cache
from typing import Any, NamedTuple, Union, get_args, get_origin, get_type_hints

from pydantic import BaseModel
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.exc import NoInspectionAvailable

from pizzaland.exceptions.base import InvalidArgumentError

_ZERO_TYPES = (str, bytes, int, float, Decimal, list, tuple, dict, set, frozenset)


class TargetField(NamedTuple):
    name: str
    python_type: type | None
    optional: bool


class FieldMapping(NamedTuple):
    source: str
    target: TargetField


def normalize_name(name: str) -> str:
    return name.replace("_", "").replace("-", "").lower()


def is_zero(value: Any) -> bool:
    """True for None and for the zero value of scalars, enums and containers."""
    if value is None:
        return True
    if isinstance(value, Enum):
        value = value.value
    return isinstance(value, _ZERO_TYPES) and not value


def _unwrap_optional(annotation: Any) -> tuple[Any, bool]:
    if get_origin(annotation) in (Union, types.UnionType):
        args = get_args(annotation)
        rest = [arg for arg in args if arg is not type(None)]
        base = rest[0] if len(rest) == 1 else None
        return base, len(rest) < len(args)
    return annotation, False


def _concrete_type(annotation: Any) -> type | None:
    annotation = get_origin(annotation) or annotation
    return annotation if isinstance(annotation, type) else None


@lru_cache(maxsize=None)
def describe_fields(shape: type) -> dict[str, TargetField]:
    """Name, scalar type and optionality of every field a record type declares."""
    if issubclass(shape, BaseModel):
        fields = {}
        for name, info in shape.model_fields.items():
            base, optional = _unwrap_optional(info.annotation)
            fields[name] = TargetField(name, _concrete_type(base), optional)
        return fields

    if dataclasses.is_dataclass(shape):
        hints = get_type_hints(shape)
        fields = {}
        for field in dataclasses.fields(shape):
            base, optional = _unwrap_optional(hints.get(field.name, field.type))
            fields[field.name] = TargetField(field.name, _concrete_type(base), optional)
        return fields

    try:
        mapper = sa_inspect(shape)
    except NoInspectionAvailable:
        raise InvalidArgumentError(f"{shape.__name__} is not a structured record type") from None

    fields = {}
    for attr in mapper.column_attrs:
        column = attr.columns[0]
        try:
            python_type = column.type.python_type
        except NotImplementedError:
            python_type = None
        optional = bool(column.nullable) and not column.primary_key
        fields[attr.key] = TargetField(attr.key, python_type, optional)
    return fields


@lru_cache(maxsize=256)
def field_map(source_names: tuple[str, ...], target: type) -> tuple[FieldMapping, ...]:
    """Pair source field names with target fields of the same normalized name."""
    by_normalized = {normalize_name(name): field for name, field in describe_fields(target).items()}
    pairs = []
    for name in source_names:
        field = by_normalized.get(normalize_name(name))
        if field is not None:
            pairs.append(FieldMapping(name, field))
    return tuple(pairs)


def read_fields(source: Any) -> dict[str, Any]:
    """Field name -> value for any supported record instance."""
    if source is None:
        raise InvalidArgumentError("source must be a structured record, got None")
    if isinstance(source, BaseModel):
        return {name: getattr(source, name) for name in type(source).model_fields}
    if isinstance(source, Mapping):
        return {str(key): value for key, value in source.items()}
    if isinstance(source, type):
        raise InvalidArgumentError(f"source must be a record instance, got the type {source.__name__}")
    if dataclasses.is_dataclass(source):
        return {field.name: getattr(source, field.name) for field in dataclasses.fields(source)}
    try:
        state = sa_inspect(source)
    except NoInspectionAvailable:
        raise InvalidArgumentError(f"{type(source).__name__} is not a structured record") from None
    return {attr.key: getattr(source, attr.key) for attr in state.mapper.column_attrs}


def _convert(value: Any, field: TargetField) -> Any:
    target_type = field.python_type
    if isinstance(value, Enum) and not (target_type and issubclass(target_type, Enum)):
        value = value.value
    if target_type is None or isinstance(value, target_type):
        return value
    try:
        return target_type(value)
    except (TypeError, ValueError, ArithmeticError) as exc:
        raise InvalidArgumentError(
            f"cannot convert {type(value).__name__} value for {field.name!r} to {target_type.__name__}",
            fields=[field.name],
        ) from exc


def _require_record_type(target: Any) -> type:
    if target is None or not isinstance(target, type):
        raise InvalidArgumentError("destination must be a structured record type")
    describe_fields(target)
    return target


def project_values(source: Any, target: type) -> dict[str, Any]:
    """Values ``project`` would hand to the target constructor; unset fields are omitted."""
    target = _require_record_type(target)
    values = read_fields(source)

    projected = {}
    for mapping in field_map(tuple(values), target):
        value = values[mapping.source]
        field = mapping.target
        if value is None or (field.optional and is_zero(value)):
            continue
        projected[field.name] = _convert(value, field)
    return projected


def project(source: Any, target: type) -> Any:
    """
    Build a new ``target`` instance from ``source``.

    Raises:
        InvalidArgumentError: source or target is missing or not a structured
            record, or the projected values do not satisfy the target.
    """
    values = project_values(source, target)
    try:
        if issubclass(target, BaseModel):
            return target.model_validate(values)
        return target(**values)
    except (TypeError, ValueError) as exc:
        raise InvalidArgumentError(f"cannot build {target.__name__}: {exc}") from exc


def all_fields_absent(message: Any) -> bool:
    """True when every field of ``message`` holds its zero value."""
    return all(is_zero(value) for value in read_fields(message).values())
