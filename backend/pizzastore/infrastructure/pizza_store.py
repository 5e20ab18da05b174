"""SQL Pizza Store — SQLAlchemy implementation of the PizzaStore protocol.

Invariants:
    - Every mutating operation commits before returning
    - update never relies on ORM change tracking: it issues an explicit UPDATE
      and inspects the affected row count
    - A zero-row UPDATE is re-checked: vanished record → NOT_FOUND,
      record still present → CONFLICT
    - Logger is injected at construction (no module-level logger here)

Design Decisions:
    - list() ordered by id: stable output for clients and tests
    - Missing name stored as "" so the NOT NULL column holds for any body
"""

import logging
from typing import Sequence

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from pizzastore.core.domain_types import PizzaId, UpdateOutcome
from pizzastore.core.errors import IdMismatchError
from pizzastore.core.repository_protocols import PizzaData
from pizzastore.models.pizza import Pizza


class SqlPizzaStore:
    """Pizza persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession, logger: logging.Logger):
        self.db = db
        self.logger = logger

    async def list(self) -> Sequence[Pizza]:
        self.logger.info("Listing pizzas")
        result = await self.db.execute(select(Pizza).order_by(Pizza.id))
        pizzas = list(result.scalars().all())
        if not pizzas:
            self.logger.info("No pizzas stored", extra={"count": 0})
        else:
            self.logger.info(
                f"Found {len(pizzas)} pizza(s)", extra={"count": len(pizzas)},
            )
        return pizzas

    async def get(self, pizza_id: PizzaId) -> Pizza | None:
        self.logger.info(f"Fetching pizza {pizza_id}", extra={"pizza_id": pizza_id})
        pizza = await self.db.get(Pizza, pizza_id)
        if pizza is None:
            self.logger.warning(
                f"Pizza {pizza_id} not found", extra={"pizza_id": pizza_id},
            )
        return pizza

    async def exists(self, pizza_id: PizzaId) -> bool:
        found = await self.db.scalar(
            select(Pizza.id).where(Pizza.id == pizza_id),
        )
        return found is not None

    async def create(self, data: PizzaData) -> Pizza:
        pizza = Pizza(
            name=_name_or_empty(data.name), description=data.description,
        )
        self.logger.info(f"Creating pizza {pizza.name!r}")
        self.db.add(pizza)
        await self.db.commit()
        await self.db.refresh(pizza)
        self.logger.info(
            f"Pizza {pizza.id} created", extra={"pizza_id": pizza.id},
        )
        return pizza

    async def update(self, pizza_id: PizzaId, data: PizzaData) -> UpdateOutcome:
        """Replace name and description of an existing pizza."""
        if data.id is not None and data.id != pizza_id:
            self.logger.warning(
                f"Rejected update of pizza {pizza_id}: body id {data.id}",
                extra={"pizza_id": pizza_id, "error_code": "ID_MISMATCH"},
            )
            raise IdMismatchError(pizza_id, data.id)

        if not await self.exists(pizza_id):
            self.logger.warning(
                f"Pizza {pizza_id} not found for update",
                extra={"pizza_id": pizza_id, "outcome": UpdateOutcome.NOT_FOUND.value},
            )
            return UpdateOutcome.NOT_FOUND

        self.logger.info(f"Updating pizza {pizza_id}", extra={"pizza_id": pizza_id})
        result = await self.db.execute(
            update(Pizza)
            .where(Pizza.id == pizza_id)
            .values(name=_name_or_empty(data.name), description=data.description)
        )
        if result.rowcount == 0:
            await self.db.rollback()
            return await self._resolve_conflict(pizza_id)

        await self.db.commit()
        self.logger.info(
            f"Pizza {pizza_id} updated",
            extra={"pizza_id": pizza_id, "outcome": UpdateOutcome.UPDATED.value},
        )
        return UpdateOutcome.UPDATED

    async def delete(self, pizza_id: PizzaId) -> Pizza | None:
        self.logger.info(f"Deleting pizza {pizza_id}", extra={"pizza_id": pizza_id})
        pizza = await self.db.get(Pizza, pizza_id)
        if pizza is None:
            self.logger.warning(
                f"Pizza {pizza_id} not found, nothing deleted",
                extra={"pizza_id": pizza_id},
            )
            return None
        await self.db.delete(pizza)
        await self.db.commit()
        self.logger.info(f"Pizza {pizza_id} deleted", extra={"pizza_id": pizza_id})
        return pizza

    async def _resolve_conflict(self, pizza_id: PizzaId) -> UpdateOutcome:
        if not await self.exists(pizza_id):
            self.logger.warning(
                f"Pizza {pizza_id} deleted during update",
                extra={"pizza_id": pizza_id, "outcome": UpdateOutcome.NOT_FOUND.value},
            )
            return UpdateOutcome.NOT_FOUND
        self.logger.error(
            f"Update of pizza {pizza_id} matched no row",
            extra={
                "pizza_id": pizza_id,
                "outcome": UpdateOutcome.CONFLICT.value,
                "error_code": "CONCURRENCY_CONFLICT",
            },
        )
        return UpdateOutcome.CONFLICT


def _name_or_empty(name: str | None) -> str:
    return name if name is not None else ""
