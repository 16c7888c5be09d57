"""
Domain-level names for storage errors.

The facade re-raises storage lookups and unique violations under these names so
callers can tell a missing pizza from a missing category. Each one subclasses
the storage kind it renames, so payload and HTTP status stay the same.
"""

from .base import DuplicateError, NotFoundError


class PizzaAlreadyExistsError(DuplicateError):
    def __init__(self, message: str = "pizza already exists in the system", **kwargs):
        super().__init__(message, **kwargs)


class PizzaNotFoundError(NotFoundError):
    def __init__(self, message: str = "pizza not found in the system", **kwargs):
        super().__init__(message, **kwargs)


class CategoryAlreadyExistsError(DuplicateError):
    def __init__(self, message: str = "category already exists in the system", **kwargs):
        super().__init__(message, **kwargs)


class CategoryNotFoundError(NotFoundError):
    def __init__(self, message: str = "category not found in the system", **kwargs):
        super().__init__(message, **kwargs)


__all__ = [
    "PizzaAlreadyExistsError",
    "PizzaNotFoundError",
    "CategoryAlreadyExistsError",
    "CategoryNotFoundError",
]
