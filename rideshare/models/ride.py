# rideshare/models/ride.py
import enum

from sqlalchemy import (
    Column, Integer, String, Text, DateTime, Numeric, JSON, ForeignKey, Enum, Index, CheckConstraint
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from .base import Base
from .user import new_uuid


class RideStatus(str, enum.Enum):
    ACTIVE    = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Ride(Base):
    __tablename__ = "rides"

    id = Column(String(36), primary_key=True, default=new_uuid)
    driver_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    car_id = Column(String(36), ForeignKey("cars.id", ondelete="CASCADE"), nullable=False, index=True)

    pickup_location = Column(String(255), nullable=False)
    pickup_latitude = Column(Numeric(10, 8), nullable=True)
    pickup_longitude = Column(Numeric(11, 8), nullable=True)

    destination = Column(String(255), nullable=False)
    destination_latitude = Column(Numeric(10, 8), nullable=True)
    destination_longitude = Column(Numeric(11, 8), nullable=True)

    departure_date = Column(DateTime, nullable=False)
    departure_time = Column(String(20), nullable=False)

    # total_seats фиксируется при создании, available_seats уменьшают брони
    total_seats = Column(Integer, nullable=False)
    available_seats = Column(Integer, nullable=False)
    fare_per_seat = Column(Numeric(8, 2), nullable=False)

    additional_info = Column(Text, nullable=True)
    preferences = Column(JSON, nullable=True)  # {instantBooking, womenOnly, noSmoking}

    status = Column(
        Enum(RideStatus, values_callable=lambda e: [m.value for m in e], native_enum=False, length=20),
        nullable=False,
        default=RideStatus.ACTIVE,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    driver = relationship("User", back_populates="rides")
    car = relationship("Car", back_populates="rides")
    bookings = relationship(
        "Booking", back_populates="ride", cascade="all, delete-orphan", passive_deletes=True,
        order_by="Booking.created_at",
    )

    __table_args__ = (
        CheckConstraint(
            "available_seats >= 0 AND available_seats <= total_seats",
            name="ck_rides_available_seats_range",
        ),
        Index("ix_rides_status_departure", "status", "departure_date"),
    )
