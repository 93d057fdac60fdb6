# rideshare/routers/rides.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ..db import get_db
from ..deps import require_auth
from ..errors import BadRequest, Forbidden, NotFound, failure_message
from ..models.user import User
from ..schemas import BookingOut, RideCreate, RideOut, RideWithDetails
from ..services.bookings import get_ride_bookings
from ..services.rides import create_ride, get_ride_by_id, get_user_rides, search_rides

router = APIRouter(prefix="/api", tags=["rides"])


@router.post("/rides", response_model=RideOut, status_code=status.HTTP_201_CREATED, dependencies=[Depends(failure_message("Failed to create ride"))])
def api_create_ride(payload: RideCreate, user: User = Depends(require_auth), db: Session = Depends(get_db)):
    data = payload.model_dump(exclude={"preferences"})
    if payload.preferences is not None:
        data["preferences"] = payload.preferences.model_dump(by_alias=True)
    return create_ride(db, data, user.id)


# /rides/search объявлен раньше /rides/{ride_id}, иначе "search" уйдёт в id
@router.get("/rides/search", response_model=list[RideWithDetails], dependencies=[Depends(failure_message("Failed to search rides"))])
def api_search_rides(
    pickup: Optional[str] = Query(None),
    destination: Optional[str] = Query(None),
    date: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    pickup = (pickup or "").strip()
    destination = (destination or "").strip()
    date = (date or "").strip()
    # пробелы считаются пустым параметром, иначе icontains("") найдёт всё
    if not pickup or not destination or not date:
        raise BadRequest("Pickup, destination, and date are required")
    return search_rides(db, pickup, destination, date)


@router.get("/rides/{ride_id}", response_model=RideWithDetails, dependencies=[Depends(failure_message("Failed to fetch ride"))])
def api_get_ride(ride_id: str, db: Session = Depends(get_db)):
    ride = get_ride_by_id(db, ride_id)
    if not ride:
        raise NotFound("Ride not found")
    return ride


@router.get("/rides/{ride_id}/bookings", response_model=list[BookingOut], dependencies=[Depends(failure_message("Failed to fetch ride bookings"))])
def api_ride_bookings(ride_id: str, user: User = Depends(require_auth), db: Session = Depends(get_db)):
    """
    Брони своей поездки видит только её водитель.
    """
    ride = get_ride_by_id(db, ride_id)
    if not ride:
        raise NotFound("Ride not found")
    if ride.driver_id != user.id:
        raise Forbidden("Only the driver can view bookings for this ride")
    return get_ride_bookings(db, ride_id)


@router.get("/my-rides", response_model=list[RideWithDetails], dependencies=[Depends(failure_message("Failed to fetch user rides"))])
def api_my_rides(user: User = Depends(require_auth), db: Session = Depends(get_db)):
    return get_user_rides(db, user.id)
