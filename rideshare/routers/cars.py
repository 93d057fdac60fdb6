# rideshare/routers/cars.py
from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..admin.security import require_admin
from ..db import get_db
from ..deps import require_auth
from ..errors import NotFound, failure_message
from ..models.user import User
from ..schemas import CarCreate, CarOut, CarVerifyRequest
from ..services.cars import create_car, get_user_cars, update_car_verification

router = APIRouter(prefix="/api/cars", tags=["cars"])


@router.get("", response_model=list[CarOut], dependencies=[Depends(failure_message("Failed to fetch cars"))])
def api_my_cars(user: User = Depends(require_auth), db: Session = Depends(get_db)):
    return get_user_cars(db, user.id)


@router.post("", response_model=CarOut, status_code=status.HTTP_201_CREATED, dependencies=[Depends(failure_message("Failed to create car"))])
def api_create_car(payload: CarCreate, user: User = Depends(require_auth), db: Session = Depends(get_db)):
    return create_car(db, payload.model_dump(), user.id)


@router.patch("/{car_id}/verify", response_model=CarOut, dependencies=[Depends(failure_message("Failed to update car verification"))])
def api_verify_car(
    car_id: str,
    payload: CarVerifyRequest,
    _: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    car = update_car_verification(db, car_id, payload.status)
    if not car:
        raise NotFound("Car not found")
    return car
