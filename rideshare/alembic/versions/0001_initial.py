"""users, cars, rides, bookings

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 00:00:00

"""
from alembic import op
import sqlalchemy as sa

revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("username", sa.String(80), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password", sa.String(255), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("phone", sa.String(50), nullable=False),
        sa.Column("role", sa.String(20), nullable=False, server_default="user"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "cars",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("make", sa.String(80), nullable=False),
        sa.Column("model", sa.String(80), nullable=False),
        sa.Column("year", sa.Integer, nullable=False),
        sa.Column("color", sa.String(40), nullable=False),
        sa.Column("registration_number", sa.String(20), nullable=False, unique=True),
        sa.Column("seating_capacity", sa.Integer, nullable=False),
        sa.Column("verification_status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("documents_uploaded", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_cars_user_id", "cars", ["user_id"])
    op.create_index("ix_cars_verification_status", "cars", ["verification_status"])

    op.create_table(
        "rides",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("driver_id", sa.String(36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("car_id", sa.String(36), sa.ForeignKey("cars.id", ondelete="CASCADE"), nullable=False),
        sa.Column("pickup_location", sa.String(255), nullable=False),
        sa.Column("pickup_latitude", sa.Numeric(10, 8)),
        sa.Column("pickup_longitude", sa.Numeric(11, 8)),
        sa.Column("destination", sa.String(255), nullable=False),
        sa.Column("destination_latitude", sa.Numeric(10, 8)),
        sa.Column("destination_longitude", sa.Numeric(11, 8)),
        sa.Column("departure_date", sa.DateTime, nullable=False),
        sa.Column("departure_time", sa.String(20), nullable=False),
        sa.Column("total_seats", sa.Integer, nullable=False),
        sa.Column("available_seats", sa.Integer, nullable=False),
        sa.Column("fare_per_seat", sa.Numeric(8, 2), nullable=False),
        sa.Column("additional_info", sa.Text),
        sa.Column("preferences", sa.JSON),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint(
            "available_seats >= 0 AND available_seats <= total_seats",
            name="ck_rides_available_seats_range",
        ),
    )
    op.create_index("ix_rides_driver_id", "rides", ["driver_id"])
    op.create_index("ix_rides_car_id", "rides", ["car_id"])
    op.create_index("ix_rides_status_departure", "rides", ["status", "departure_date"])

    op.create_table(
        "bookings",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("ride_id", sa.String(36), sa.ForeignKey("rides.id", ondelete="CASCADE"), nullable=False),
        sa.Column("passenger_id", sa.String(36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("seats_booked", sa.Integer, nullable=False),
        sa.Column("total_fare", sa.Numeric(8, 2), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="confirmed"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint("seats_booked > 0", name="ck_bookings_seats_positive"),
    )
    op.create_index("ix_bookings_ride_id", "bookings", ["ride_id"])
    op.create_index("ix_bookings_passenger_id", "bookings", ["passenger_id"])


def downgrade() -> None:
    op.drop_table("bookings")
    op.drop_table("rides")
    op.drop_table("cars")
    op.drop_table("users")
