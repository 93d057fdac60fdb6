# rideshare/models/booking.py
import enum

from sqlalchemy import Column, Integer, String, DateTime, Numeric, ForeignKey, Enum, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from .base import Base
from .user import new_uuid


class BookingStatus(str, enum.Enum):
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(String(36), primary_key=True, default=new_uuid)
    ride_id = Column(String(36), ForeignKey("rides.id", ondelete="CASCADE"), nullable=False, index=True)
    passenger_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    seats_booked = Column(Integer, nullable=False)
    total_fare = Column(Numeric(8, 2), nullable=False)

    status = Column(
        Enum(BookingStatus, values_callable=lambda e: [m.value for m in e], native_enum=False, length=20),
        nullable=False,
        default=BookingStatus.CONFIRMED,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    ride = relationship("Ride", back_populates="bookings")
    passenger = relationship("User", back_populates="bookings")

    __table_args__ = (CheckConstraint("seats_booked > 0", name="ck_bookings_seats_positive"),)
