from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from pizzaland.database.base import Base


class Category(Base):
    """
    A named group of pizzas.

    Removing a category removes its pizzas; the cascade lives in the database
    (``ON DELETE CASCADE`` on ``items.category_id``), so bulk deletes honour it too.
    """
    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(120), unique=True, nullable=False)

    description: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    def __repr__(self) -> str:
        return f"<Category(id={self.id!r}, name={self.name!r})>"
