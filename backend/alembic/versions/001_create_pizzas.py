"""Create pizzas table with the Pepperoni seed row.

Revision ID: 001_create_pizzas
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_create_pizzas"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    pizzas = op.create_table(
        "pizzas",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.Text, nullable=False, server_default=""),
        sa.Column("description", sa.Text, nullable=True),
    )
    op.bulk_insert(pizzas, [
        {"id": 1, "name": "Pepperoni", "description": "Classic Pepperoni Pizza"},
    ])
    if op.get_bind().dialect.name == "postgresql":
        op.execute(
            "SELECT setval(pg_get_serial_sequence('pizzas', 'id'), "
            "(SELECT MAX(id) FROM pizzas))"
        )


def downgrade() -> None:
    op.drop_table("pizzas")
