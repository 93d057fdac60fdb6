"""
Схемы запросов и ответов.

JSON ходит в camelCase (availableSeats, verificationStatus, ...),
атрибуты в Python остаются snake_case и совпадают с колонками ORM.
"""
from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from .models.booking import BookingStatus
from .models.car import VerificationStatus
from .models.ride import RideStatus
from .models.user import UserRole


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ---------- Users ----------

class UserCreate(CamelModel):
    # role намеренно отсутствует: лишние ключи отбрасываются
    username: str = Field(..., min_length=3, max_length=80)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    name: str = Field(..., min_length=1, max_length=200)
    phone: str = Field(..., min_length=1, max_length=50)


class LoginRequest(CamelModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserOut(CamelModel):
    id: str
    username: str
    email: str
    name: str
    phone: str
    role: UserRole
    created_at: Optional[dt.datetime] = None


class UserBrief(CamelModel):
    id: str
    username: str
    role: UserRole


class PromoteResponse(BaseModel):
    message: str
    user: UserBrief


# ---------- Cars ----------

class CarCreate(CamelModel):
    make: str = Field(..., min_length=1, max_length=80)
    model: str = Field(..., min_length=1, max_length=80)
    year: int = Field(..., ge=1950, le=2100)
    color: str = Field(..., min_length=1, max_length=40)
    registration_number: str = Field(..., min_length=1, max_length=20)
    seating_capacity: int = Field(..., ge=1, le=50)

    @field_validator("registration_number")
    @classmethod
    def _normalize_plate(cls, v: str) -> str:
        return v.strip().upper()


class CarVerifyRequest(CamelModel):
    status: Literal["approved", "rejected"]


class CarOut(CamelModel):
    id: str
    user_id: str
    make: str
    model: str
    year: int
    color: str
    registration_number: str
    seating_capacity: int
    verification_status: VerificationStatus
    documents_uploaded: bool = False
    created_at: Optional[dt.datetime] = None


# ---------- Rides ----------

class RidePreferences(CamelModel):
    instant_booking: bool = False
    women_only: bool = False
    no_smoking: bool = False


class RideCreate(CamelModel):
    car_id: str = Field(..., min_length=1)
    pickup_location: str = Field(..., min_length=1, max_length=255)
    pickup_latitude: Optional[Decimal] = Field(None, ge=-90, le=90)
    pickup_longitude: Optional[Decimal] = Field(None, ge=-180, le=180)
    destination: str = Field(..., min_length=1, max_length=255)
    destination_latitude: Optional[Decimal] = Field(None, ge=-90, le=90)
    destination_longitude: Optional[Decimal] = Field(None, ge=-180, le=180)
    departure_date: dt.datetime
    departure_time: str = Field(..., min_length=1, max_length=20)
    available_seats: int = Field(..., ge=1, le=50)
    fare_per_seat: Decimal = Field(..., ge=0, max_digits=8, decimal_places=2)
    additional_info: Optional[str] = None
    preferences: Optional[RidePreferences] = None

    @field_validator("departure_date", mode="before")
    @classmethod
    def _date_only(cls, v):
        # форма присылает просто дату "2025-03-01"
        if isinstance(v, str) and len(v) == 10:
            return f"{v}T00:00:00"
        if isinstance(v, dt.date) and not isinstance(v, dt.datetime):
            return dt.datetime.combine(v, dt.time.min)
        return v

    @field_validator("departure_date")
    @classmethod
    def _naive_utc(cls, v: dt.datetime) -> dt.datetime:
        # в БД departure_date без таймзоны
        if v.tzinfo is not None:
            return v.astimezone(dt.timezone.utc).replace(tzinfo=None)
        return v


class RideOut(CamelModel):
    id: str
    driver_id: str
    car_id: str
    pickup_location: str
    pickup_latitude: Optional[Decimal] = None
    pickup_longitude: Optional[Decimal] = None
    destination: str
    destination_latitude: Optional[Decimal] = None
    destination_longitude: Optional[Decimal] = None
    departure_date: dt.datetime
    departure_time: str
    total_seats: int
    available_seats: int
    fare_per_seat: Decimal
    additional_info: Optional[str] = None
    preferences: Optional[RidePreferences] = None
    status: RideStatus
    created_at: Optional[dt.datetime] = None


# ---------- Bookings ----------

class BookingCreate(CamelModel):
    ride_id: str = Field(..., min_length=1)
    seats_booked: int = Field(..., ge=1)
    total_fare: Decimal = Field(..., ge=0, max_digits=8, decimal_places=2)


class BookingOut(CamelModel):
    id: str
    ride_id: str
    passenger_id: str
    seats_booked: int
    total_fare: Decimal
    status: BookingStatus
    created_at: Optional[dt.datetime] = None


class RideWithDetails(RideOut):
    driver: UserOut
    car: CarOut
    bookings: list[BookingOut] = []
