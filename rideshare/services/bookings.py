from __future__ import annotations

import logging
from decimal import Decimal

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from ..errors import InsufficientSeats, NotFound
from ..models.booking import Booking, BookingStatus
from ..models.ride import Ride

logger = logging.getLogger(__name__)


def insert_booking(db: Session, data: dict, passenger_id: str, commit: bool = True) -> Booking:
    b = Booking(
        ride_id=data["ride_id"],
        passenger_id=passenger_id,
        seats_booked=data["seats_booked"],
        total_fare=Decimal(str(data["total_fare"])).quantize(Decimal("0.01")),
        status=BookingStatus.CONFIRMED,
    )
    db.add(b)
    if commit:
        db.commit()
        db.refresh(b)
    return b


def _reserve_seats(db: Session, ride_id: str, seats: int) -> bool:
    """
    Атомарное списание мест: UPDATE ... WHERE available_seats >= :n.
    Две параллельные брони не могут обе пройти, если мест хватает только на одну.
    """
    res = db.execute(
        update(Ride)
        .where(Ride.id == ride_id, Ride.available_seats >= seats)
        .values(available_seats=Ride.available_seats - seats)
        .execution_options(synchronize_session=False)
    )
    return res.rowcount == 1


def create_booking(db: Session, data: dict, passenger_id: str) -> Booking:
    ride_id = data["ride_id"]
    seats = data["seats_booked"]

    ride = db.get(Ride, ride_id)
    if not ride:
        raise NotFound("Ride not found")
    if ride.available_seats < seats:
        logger.warning("booking rejected ride=%s requested=%s available=%s", ride_id, seats, ride.available_seats)
        raise InsufficientSeats("Not enough seats available")

    # списание мест и бронь — одна транзакция
    try:
        if not _reserve_seats(db, ride_id, seats):
            logger.warning("booking lost seat race ride=%s requested=%s", ride_id, seats)
            raise InsufficientSeats("Not enough seats available")
        booking = insert_booking(db, data, passenger_id, commit=False)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(booking)
    # в identity map остался старый остаток мест
    db.expire(ride)
    logger.info("booking created id=%s ride=%s passenger=%s seats=%s", booking.id, ride_id, passenger_id, seats)
    return booking


def get_user_bookings(db: Session, passenger_id: str) -> list[Booking]:
    return list(
        db.execute(
            select(Booking).where(Booking.passenger_id == passenger_id).order_by(Booking.created_at.desc())
        ).scalars().all()
    )


def get_ride_bookings(db: Session, ride_id: str) -> list[Booking]:
    return list(
        db.execute(select(Booking).where(Booking.ride_id == ride_id).order_by(Booking.created_at)).scalars().all()
    )
