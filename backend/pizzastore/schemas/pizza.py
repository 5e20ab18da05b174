"""Pizza Schemas — JSON body shapes for the pizza endpoints.

Invariants:
    - PizzaIn accepts a body without id (create) or with id (update)
    - No field-level validation beyond types: a missing name is accepted
    - PizzaOut is built straight from the ORM object (from_attributes)
"""

from pydantic import BaseModel, ConfigDict


class PizzaIn(BaseModel):
    """Incoming pizza — id is optional and only checked on update."""
    id: int | None = None
    name: str | None = None
    description: str | None = None


class PizzaOut(BaseModel):
    """Stored pizza as returned to clients."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None = None
