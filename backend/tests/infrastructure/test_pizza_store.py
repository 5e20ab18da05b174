"""SqlPizzaStore — CRUD semantics against an in-memory SQLite database.

Invariants:
    - list() is ordered by id and empty on an empty table
    - create() assigns fresh ids and ignores body ids
    - update() rejects id mismatches before touching the database
    - A zero-row UPDATE becomes NOT_FOUND if the row vanished, CONFLICT otherwise
    - delete() returns the last stored value
"""

import logging
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.sql.dml import Update

from pizzastore.core.domain_types import PizzaId, UpdateOutcome
from pizzastore.core.errors import IdMismatchError
from pizzastore.schemas.pizza import PizzaIn


async def test_empty_store_lists_nothing(empty_store):
    assert await empty_store.list() == []


async def test_list_returns_every_created_pizza(empty_store):
    for name in ("Margherita", "Hawaiian", "Funghi"):
        await empty_store.create(PizzaIn(name=name))
    pizzas = await empty_store.list()
    assert [p.name for p in pizzas] == ["Margherita", "Hawaiian", "Funghi"]


async def test_list_is_ordered_by_id(store):
    await store.create(PizzaIn(name="Margherita"))
    await store.create(PizzaIn(name="Hawaiian"))
    ids = [p.id for p in await store.list()]
    assert ids == sorted(ids)


async def test_seeded_store_contains_only_pepperoni(store):
    pizzas = await store.list()
    assert len(pizzas) == 1
    assert pizzas[0].id == 1
    assert pizzas[0].name == "Pepperoni"
    assert pizzas[0].description == "Classic Pepperoni Pizza"


async def test_create_assigns_unused_id(store):
    pizza = await store.create(
        PizzaIn(name="Margherita", description="Tomato, basil"),
    )
    assert pizza.id != 1

    fetched = await store.get(PizzaId(pizza.id))
    assert fetched.name == "Margherita"
    assert fetched.description == "Tomato, basil"


async def test_create_ignores_body_id(store):
    pizza = await store.create(PizzaIn(id=1, name="Impostor"))
    assert pizza.id != 1
    assert (await store.get(PizzaId(1))).name == "Pepperoni"


async def test_create_without_name_stores_empty_string(empty_store):
    pizza = await empty_store.create(PizzaIn(description="Mystery"))
    assert pizza.name == ""
    assert pizza.description == "Mystery"


async def test_get_missing_returns_none(store):
    assert await store.get(PizzaId(9999)) is None


async def test_get_missing_logs_warning(store, caplog):
    caplog.set_level(logging.INFO, logger="tests.pizzastore.store")
    await store.get(PizzaId(9999))
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert warnings[0].pizza_id == 9999


async def test_exists(store):
    assert await store.exists(PizzaId(1)) is True
    assert await store.exists(PizzaId(2)) is False


async def test_update_replaces_fields(store):
    outcome = await store.update(
        PizzaId(1),
        PizzaIn(id=1, name="Pepperoni Deluxe", description="Extra cheese"),
    )
    assert outcome is UpdateOutcome.UPDATED

    pizza = await store.get(PizzaId(1))
    assert pizza.name == "Pepperoni Deluxe"
    assert pizza.description == "Extra cheese"


async def test_update_without_body_id_is_accepted(store):
    outcome = await store.update(PizzaId(1), PizzaIn(name="Plain"))
    assert outcome is UpdateOutcome.UPDATED
    pizza = await store.get(PizzaId(1))
    assert pizza.name == "Plain"
    assert pizza.description is None


async def test_update_id_mismatch_raises_and_leaves_record(store):
    with pytest.raises(IdMismatchError) as exc_info:
        await store.update(PizzaId(1), PizzaIn(id=2, name="Hijack"))
    assert exc_info.value.http_status == 400

    pizza = await store.get(PizzaId(1))
    assert pizza.name == "Pepperoni"


async def test_update_missing_returns_not_found(store):
    outcome = await store.update(PizzaId(9999), PizzaIn(name="Ghost"))
    assert outcome is UpdateOutcome.NOT_FOUND


def _zero_row_updates(db, monkeypatch):
    real_execute = db.execute

    async def execute(statement, *args, **kwargs):
        if isinstance(statement, Update):
            return SimpleNamespace(rowcount=0)
        return await real_execute(statement, *args, **kwargs)

    monkeypatch.setattr(db, "execute", execute)


async def test_update_vanished_row_reports_not_found(store, test_db, monkeypatch):
    _zero_row_updates(test_db, monkeypatch)
    store.exists = AsyncMock(side_effect=[True, False])

    outcome = await store.update(PizzaId(1), PizzaIn(id=1, name="Late"))
    assert outcome is UpdateOutcome.NOT_FOUND


async def test_update_zero_rows_on_present_record_is_conflict(
    store, test_db, monkeypatch, caplog,
):
    caplog.set_level(logging.INFO, logger="tests.pizzastore.store")
    _zero_row_updates(test_db, monkeypatch)

    outcome = await store.update(PizzaId(1), PizzaIn(id=1, name="Racing"))
    assert outcome is UpdateOutcome.CONFLICT
    assert any(
        r.levelno == logging.ERROR and r.error_code == "CONCURRENCY_CONFLICT"
        for r in caplog.records
    )


async def test_delete_returns_last_value(store):
    pizza = await store.delete(PizzaId(1))
    assert pizza.id == 1
    assert pizza.name == "Pepperoni"
    assert await store.get(PizzaId(1)) is None


async def test_delete_twice_returns_none(store):
    await store.delete(PizzaId(1))
    assert await store.delete(PizzaId(1)) is None
