from __future__ import annotations

import datetime as dt
import logging

from sqlalchemy import select, update
from sqlalchemy.orm import Session, joinedload, selectinload

from ..errors import BadRequest, NotFound
from ..models.car import Car
from ..models.ride import Ride, RideStatus

logger = logging.getLogger(__name__)


def _with_details(stmt):
    # водитель, авто и брони подтягиваются одним проходом
    return stmt.options(
        joinedload(Ride.driver),
        joinedload(Ride.car),
        selectinload(Ride.bookings),
    )


def parse_search_date(value: str | dt.date | dt.datetime) -> dt.datetime:
    if isinstance(value, dt.datetime):
        return value
    if isinstance(value, dt.date):
        return dt.datetime.combine(value, dt.time.min)
    value = (value or "").strip()
    try:
        if len(value) == 10:
            return dt.datetime.combine(dt.date.fromisoformat(value), dt.time.min)
        parsed = dt.datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        raise BadRequest("Invalid date")
    # departure_date хранится без таймзоны
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(dt.timezone.utc).replace(tzinfo=None)
    return parsed


def create_ride(db: Session, data: dict, driver_id: str) -> Ride:
    car = db.get(Car, data["car_id"])
    if not car or car.user_id != driver_id:
        raise NotFound("Car not found")

    seats = data["available_seats"]
    ride = Ride(
        driver_id=driver_id,
        car_id=car.id,
        pickup_location=data["pickup_location"],
        pickup_latitude=data.get("pickup_latitude"),
        pickup_longitude=data.get("pickup_longitude"),
        destination=data["destination"],
        destination_latitude=data.get("destination_latitude"),
        destination_longitude=data.get("destination_longitude"),
        departure_date=data["departure_date"],
        departure_time=data["departure_time"],
        total_seats=seats,
        available_seats=seats,
        fare_per_seat=data["fare_per_seat"],
        additional_info=data.get("additional_info"),
        preferences=data.get("preferences"),
        status=RideStatus.ACTIVE,
    )
    db.add(ride)
    db.commit()
    db.refresh(ride)
    logger.info("ride created id=%s driver=%s seats=%s", ride.id, driver_id, seats)
    return ride


def get_ride_by_id(db: Session, ride_id: str) -> Ride | None:
    return db.execute(_with_details(select(Ride).where(Ride.id == ride_id))).unique().scalar_one_or_none()


def search_rides(db: Session, pickup: str, destination: str, date) -> list[Ride]:
    """
    Поиск по подстроке без учёта регистра ("dha" находит "DHA Phase 5"),
    только активные поездки с отправлением не раньше указанной даты,
    ближайшие первыми.
    """
    since = parse_search_date(date)
    stmt = _with_details(
        select(Ride).where(
            # autoescape: % и _ из запроса ищутся буквально
            Ride.pickup_location.icontains(pickup, autoescape=True),
            Ride.destination.icontains(destination, autoescape=True),
            Ride.departure_date >= since,
            Ride.status == RideStatus.ACTIVE,
        ).order_by(Ride.departure_date.asc())
    )
    return list(db.execute(stmt).unique().scalars().all())


def get_user_rides(db: Session, driver_id: str) -> list[Ride]:
    stmt = _with_details(
        select(Ride).where(Ride.driver_id == driver_id).order_by(Ride.created_at.desc(), Ride.id)
    )
    return list(db.execute(stmt).unique().scalars().all())


def update_ride_seats(db: Session, ride_id: str, new_count: int) -> None:
    # без проверок: значение считает вызывающий код
    db.execute(update(Ride).where(Ride.id == ride_id).values(available_seats=new_count))
    db.commit()
