"""
Id-or-name lookup keys.

Every Get, Update and Remove accepts exactly one of a numeric id or a unique
name. On the way in the two optional transport fields are folded into
``ById | ByName`` by ``identifier_from``; repositories then call
``resolve_identifier`` which either returns that key or raises
``InvalidIdentifierError``. Both functions are pure.
"""

from dataclasses import dataclass
from typing import Any

from pizzaland.exceptions.base import InvalidIdentifierError

NO_IDENTIFIER = "no identifier supplied"
UNKNOWN_IDENTIFIER = "unrecognized identifier kind"
AMBIGUOUS_IDENTIFIER = "ambiguous identifier: both id and name supplied"

# Upper bounds the store can hold: pizza ids are signed 64-bit, category ids and
# diameters are u32.
MAX_PIZZA_ID = 2**63 - 1
MAX_U32 = 2**32 - 1


@dataclass(frozen=True)
class ById:
    value: int
    column = "id"


@dataclass(frozen=True)
class ByName:
    value: str
    column = "name"


Identifier = ById | ByName


def identifier_from(id: int | None = None, name: str | None = None) -> Identifier | None:
    """
    Build a lookup key from two optional request fields.

    Zero and empty values count as absent. Returns None when neither field is
    present so the resolver can report it; raises when both are.
    """
    if id and name:
        raise InvalidIdentifierError(AMBIGUOUS_IDENTIFIER)
    if id:
        return ById(int(id))
    if name:
        return ByName(name)
    return None


def resolve_identifier(identifier: Any) -> Identifier:
    """
    Return the lookup key in effect.

    Raises:
        InvalidIdentifierError: nothing supplied, an empty key, or a value that
            is neither ``ById`` nor ``ByName``.
    """
    if identifier is None:
        raise InvalidIdentifierError(NO_IDENTIFIER)
    if not isinstance(identifier, (ById, ByName)):
        raise InvalidIdentifierError(UNKNOWN_IDENTIFIER)
    if not identifier.value:
        raise InvalidIdentifierError(NO_IDENTIFIER)
    return identifier
