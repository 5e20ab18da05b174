"""Pizza ORM — the single persisted entity.

Invariants:
    - id is an auto-increment integer primary key, never reassigned
    - name is non-nullable text (missing names are stored as "")
    - description is nullable text

Design Decisions:
    - Seed row constants live next to the model: migrations and startup
      seeding insert the same record
"""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from pizzastore.db.base import Base

SEED_PIZZA = {
    "id": 1,
    "name": "Pepperoni",
    "description": "Classic Pepperoni Pizza",
}


class Pizza(Base):
    """Pizza record."""
    __tablename__ = "pizzas"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    name: Mapped[str] = mapped_column(Text, nullable=False, default="")
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"Pizza(id={self.id!r}, name={self.name!r})"
