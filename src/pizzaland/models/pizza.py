from enum import IntEnum

from sqlalchemy import BigInteger, CheckConstraint, Float, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from pizzaland.database.base import Base


class DoughType(IntEnum):
    """Stored as its integer value; UNKNOWN doubles as "not supplied"."""
    UNKNOWN = 0
    THIN = 1
    TRADITIONAL = 2
    THICK = 3


class Pizza(Base):
    """
    SQLAlchemy model for a catalog item.

    ``name`` is unique across all pizzas and ``category_id`` must point at an
    existing category.
    """
    __tablename__ = "items"
    __table_args__ = (
        CheckConstraint("price > 0", name="price_positive"),
        CheckConstraint("diameter > 0", name="diameter_positive"),
    )

    # BIGINT does not alias ROWID on SQLite, so keep INTEGER there for autoincrement
    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )

    category_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("categories.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name: Mapped[str] = mapped_column(String(120), unique=True, nullable=False)

    description: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    dough_type: Mapped[int] = mapped_column(Integer, nullable=False, default=DoughType.UNKNOWN.value)

    price: Mapped[float] = mapped_column(Float, nullable=False)

    diameter: Mapped[int] = mapped_column(Integer, nullable=False)

    def __repr__(self) -> str:
        return f"<Pizza(id={self.id!r}, name={self.name!r}, category_id={self.category_id!r})>"
