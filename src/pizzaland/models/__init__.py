"""
All ORM models in one place, so ``Base.metadata`` knows every table once this
package is imported.

    from pizzaland.models import Category, Pizza, DoughType
"""

from .category import Category
from .pizza import DoughType, Pizza

__all__ = [
    "Category",
    "Pizza",
    "DoughType",
]
