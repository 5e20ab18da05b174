"""Domain Types — identity type and store outcomes.

Invariants:
    - PizzaId wraps the integer primary key
    - Update results are an Enum, never a bare bool or string

Design Decisions:
    - NewType over dataclass wrapper: zero runtime cost, full type-checker support
    - str Enum: outcomes show up readably in JSON logs
"""

from enum import Enum
from typing import NewType


PizzaId = NewType("PizzaId", int)


class UpdateOutcome(str, Enum):
    """Result of PizzaStore.update."""
    UPDATED = "updated"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
