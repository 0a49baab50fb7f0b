"""Initial schema: dealers, users, orders, cars, user_favorite_cars.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at", sa.DateTime(timezone=True), nullable=False,
        server_default=sa.func.now(),
    )


def upgrade() -> None:
    op.create_table(
        "dealers",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(100), nullable=False, unique=True),
        sa.Column("address", sa.String(200), nullable=False, unique=True),
        sa.Column("phone_number", sa.String(20), nullable=False, unique=True),
        _created_at(),
    )

    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("username", sa.String(20), nullable=False, unique=True),
        _created_at(),
    )

    op.create_table(
        "orders",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "user_id", sa.Integer,
            sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("order_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("total_price", sa.Float, nullable=False, server_default="0"),
    )
    op.create_index("ix_orders_user_id", "orders", ["user_id"])

    op.create_table(
        "cars",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("vin", sa.String(17), nullable=False, unique=True),
        sa.Column("model", sa.String(50), nullable=False),
        sa.Column("brand", sa.String(50), nullable=False),
        sa.Column("year", sa.Integer, nullable=False),
        sa.Column("price", sa.Float, nullable=False),
        sa.Column("color", sa.String(30), nullable=False),
        sa.Column("mileage", sa.Float, nullable=False, server_default="0"),
        sa.Column(
            "dealer_id", sa.Integer,
            sa.ForeignKey("dealers.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column(
            "order_id", sa.Integer,
            sa.ForeignKey("orders.id", ondelete="SET NULL"), nullable=True,
        ),
        _created_at(),
    )
    op.create_index("ix_cars_brand", "cars", ["brand"])
    op.create_index("ix_cars_dealer_id", "cars", ["dealer_id"])
    op.create_index("ix_cars_order_id", "cars", ["order_id"])

    op.create_table(
        "user_favorite_cars",
        sa.Column(
            "user_id", sa.Integer,
            sa.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True,
        ),
        sa.Column(
            "car_id", sa.Integer,
            sa.ForeignKey("cars.id", ondelete="CASCADE"), primary_key=True,
        ),
        _created_at(),
    )
    op.create_index("ix_user_favorite_cars_car_id", "user_favorite_cars", ["car_id"])


def downgrade() -> None:
    op.drop_index("ix_user_favorite_cars_car_id", "user_favorite_cars")
    op.drop_table("user_favorite_cars")
    op.drop_index("ix_cars_order_id", "cars")
    op.drop_index("ix_cars_dealer_id", "cars")
    op.drop_index("ix_cars_brand", "cars")
    op.drop_table("cars")
    op.drop_index("ix_orders_user_id", "orders")
    op.drop_table("orders")
    op.drop_table("users")
    op.drop_table("dealers")
