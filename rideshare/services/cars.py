from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..errors import BadRequest, Conflict
from ..models.car import Car, VerificationStatus

logger = logging.getLogger(__name__)

# переходы модерации: из pending только в окончательные статусы
_ALLOWED = {
    VerificationStatus.PENDING: [VerificationStatus.APPROVED, VerificationStatus.REJECTED],
}


def create_car(db: Session, data: dict, owner_id: str) -> Car:
    """
    Любое новое авто уходит на проверку (pending), документы не загружены.
    """
    car = Car(
        user_id=owner_id,
        make=data["make"],
        model=data["model"],
        year=data["year"],
        color=data["color"],
        registration_number=data["registration_number"],
        seating_capacity=data["seating_capacity"],
        verification_status=VerificationStatus.PENDING,
        documents_uploaded=False,
    )
    db.add(car)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict("A car with this registration number already exists")
    db.refresh(car)
    logger.info("car created id=%s owner=%s plate=%s", car.id, owner_id, car.registration_number)
    return car


def get_user_cars(db: Session, owner_id: str) -> list[Car]:
    return list(
        db.execute(select(Car).where(Car.user_id == owner_id).order_by(Car.created_at.desc())).scalars().all()
    )


def get_car_by_id(db: Session, car_id: str) -> Car | None:
    return db.get(Car, car_id)


def update_car_verification(db: Session, car_id: str, status: str) -> Car | None:
    try:
        new_status = VerificationStatus(status)
    except ValueError:
        raise BadRequest("Invalid verification status")

    car = get_car_by_id(db, car_id)
    if not car:
        return None

    allowed = _ALLOWED.get(car.verification_status, [])
    if new_status not in allowed:
        raise Conflict(
            f"Cannot change verification status from {car.verification_status.value} to {new_status.value}"
        )

    car.verification_status = new_status
    db.commit()
    db.refresh(car)
    logger.info("car verification changed id=%s status=%s", car.id, new_status.value)
    return car


def get_pending_cars(db: Session) -> list[Car]:
    return list(
        db.execute(
            select(Car).where(Car.verification_status == VerificationStatus.PENDING).order_by(Car.created_at)
        ).scalars().all()
    )
