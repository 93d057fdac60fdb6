# rideshare/routers/bookings.py
from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..db import get_db
from ..deps import require_auth
from ..errors import failure_message
from ..models.user import User
from ..schemas import BookingCreate, BookingOut
from ..services.bookings import create_booking, get_user_bookings

router = APIRouter(prefix="/api/bookings", tags=["bookings"])


@router.post("", response_model=BookingOut, status_code=status.HTTP_201_CREATED, dependencies=[Depends(failure_message("Failed to create booking"))])
def api_create_booking(payload: BookingCreate, user: User = Depends(require_auth), db: Session = Depends(get_db)):
    # пассажир — всегда текущий пользователь, из тела не берётся
    return create_booking(db, payload.model_dump(), user.id)


@router.get("", response_model=list[BookingOut], dependencies=[Depends(failure_message("Failed to fetch bookings"))])
def api_my_bookings(user: User = Depends(require_auth), db: Session = Depends(get_db)):
    return get_user_bookings(db, user.id)
