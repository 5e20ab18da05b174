"""Pizza Routes — list, get, create, update and delete pizza records.

Invariants:
    - One handler set; main.py mounts this router under /pizzas and /api/pizza
    - Not-found, id mismatch and conflict surface as PizzaStoreError subclasses,
      mapped to HTTP by api/error_handlers.py
    - Create answers 201 with a Location header under the prefix that was called

Design Decisions:
    - Store and logger provided through Depends: tests swap either one
      via app.dependency_overrides
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from pizzastore.core.domain_types import PizzaId, UpdateOutcome
from pizzastore.core.errors import (
    ConcurrencyError, ErrorContext, ResourceNotFoundError,
)
from pizzastore.core.repository_protocols import PizzaStore
from pizzastore.infrastructure.database import get_db
from pizzastore.infrastructure.pizza_store import SqlPizzaStore
from pizzastore.schemas.pizza import PizzaIn, PizzaOut

router = APIRouter(tags=["pizzas"])

# pizzas.id is a 32-bit INTEGER column
PizzaPathId = Annotated[int, Path(ge=-2**31, le=2**31 - 1)]


def get_pizza_logger() -> logging.Logger:
    return logging.getLogger("pizzastore.pizzas")


async def get_pizza_store(
    db: AsyncSession = Depends(get_db),
    logger: logging.Logger = Depends(get_pizza_logger),
) -> PizzaStore:
    """FastAPI dependency building a store bound to the request session."""
    return SqlPizzaStore(db, logger)


@router.get("", response_model=list[PizzaOut])
async def list_pizzas(store: PizzaStore = Depends(get_pizza_store)):
    """List all pizzas ordered by id."""
    return await store.list()


@router.get("/{pizza_id}", response_model=PizzaOut)
async def get_pizza(
    pizza_id: PizzaPathId, store: PizzaStore = Depends(get_pizza_store),
):
    """Get a single pizza."""
    pizza = await store.get(PizzaId(pizza_id))
    if pizza is None:
        raise ResourceNotFoundError("Pizza", pizza_id)
    return pizza


@router.post(
    "", response_model=PizzaOut, status_code=status.HTTP_201_CREATED,
)
async def create_pizza(
    body: PizzaIn,
    request: Request,
    response: Response,
    store: PizzaStore = Depends(get_pizza_store),
):
    """Create a pizza.

    Any id in the body is ignored. A missing name is stored as "".
    """
    pizza = await store.create(body)
    response.headers["Location"] = f"{request.url.path.rstrip('/')}/{pizza.id}"
    return pizza


@router.put(
    "/{pizza_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def update_pizza(
    pizza_id: PizzaPathId,
    body: PizzaIn,
    store: PizzaStore = Depends(get_pizza_store),
):
    """Replace name and description of a pizza.

    A body id, when given, must equal the path id. A missing name is stored as "".
    """
    outcome = await store.update(PizzaId(pizza_id), body)
    if outcome is UpdateOutcome.NOT_FOUND:
        raise ResourceNotFoundError("Pizza", pizza_id)
    if outcome is UpdateOutcome.CONFLICT:
        raise ConcurrencyError(
            f"Pizza '{pizza_id}' could not be updated",
            ErrorContext(resource_id=pizza_id),
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{pizza_id}", response_model=PizzaOut)
async def delete_pizza(
    pizza_id: PizzaPathId, store: PizzaStore = Depends(get_pizza_store),
):
    """Delete a pizza and return its last stored value."""
    pizza = await store.delete(PizzaId(pizza_id))
    if pizza is None:
        raise ResourceNotFoundError("Pizza", pizza_id)
    return pizza
