# exceptions/
# ├── __init__.py
# ├── base.py                 # RepositoryError and the public error kinds
# ├── domain.py               # pizza / category names for storage errors
# ├── integrity_classifier.py # IntegrityError -> constraint label
# └── mapper.py               # db_error_handler: constraint label -> public error kind

from .base import (
    CategoryNothingToUpdateError,
    DuplicateError,
    InternalError,
    InvalidArgumentError,
    InvalidFieldError,
    InvalidIdentifierError,
    NotFoundError,
    NothingToUpdateError,
    PizzaNothingToUpdateError,
    RepositoryError,
)
from .domain import (
    CategoryAlreadyExistsError,
    CategoryNotFoundError,
    PizzaAlreadyExistsError,
    PizzaNotFoundError,
)

__all__ = [
    "RepositoryError",
    "NotFoundError",
    "DuplicateError",
    "InvalidFieldError",
    "InvalidArgumentError",
    "InvalidIdentifierError",
    "NothingToUpdateError",
    "PizzaNothingToUpdateError",
    "CategoryNothingToUpdateError",
    "InternalError",
    "PizzaAlreadyExistsError",
    "PizzaNotFoundError",
    "CategoryAlreadyExistsError",
    "CategoryNotFoundError",
]
