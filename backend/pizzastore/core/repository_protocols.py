"""Boundary Protocols — contract between the API layer and persistence.

Invariants:
    - Routes depend on PizzaStore, never on AsyncSession directly
    - Outcomes are explicit: None for not-found, UpdateOutcome for update

Design Decisions:
    - Protocol over ABC: structural subtyping, test doubles need no inheritance
    - Async in Protocol: implementations do IO
"""

from typing import Protocol, Sequence

from pizzastore.core.domain_types import PizzaId, UpdateOutcome


class PizzaLike(Protocol):
    """Structural contract for stored pizzas returned by a store."""
    id: int
    name: str
    description: str | None


class PizzaData(Protocol):
    """Structural contract for incoming pizza fields."""
    id: int | None
    name: str | None
    description: str | None


class PizzaStore(Protocol):
    """Contract for pizza persistence — implemented by infrastructure."""
    async def list(self) -> Sequence[PizzaLike]: ...
    async def get(self, pizza_id: PizzaId) -> PizzaLike | None: ...
    async def exists(self, pizza_id: PizzaId) -> bool: ...
    async def create(self, data: PizzaData) -> PizzaLike: ...
    async def update(self, pizza_id: PizzaId, data: PizzaData) -> UpdateOutcome: ...
    async def delete(self, pizza_id: PizzaId) -> PizzaLike | None: ...
