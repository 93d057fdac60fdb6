# rideshare/models/user.py
import enum
import uuid

from sqlalchemy import Column, String, DateTime, Enum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from .base import Base


def new_uuid() -> str:
    return str(uuid.uuid4())


class UserRole(str, enum.Enum):
    USER  = "user"
    ADMIN = "admin"


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_uuid)
    username = Column(String(80), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)  # хэш, не сам пароль
    name = Column(String(200), nullable=False)
    phone = Column(String(50), nullable=False)

    role = Column(
        Enum(UserRole, values_callable=lambda e: [m.value for m in e], native_enum=False, length=20),
        nullable=False,
        default=UserRole.USER,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    cars = relationship("Car", back_populates="owner", cascade="all, delete-orphan", passive_deletes=True)
    rides = relationship("Ride", back_populates="driver", cascade="all, delete-orphan", passive_deletes=True)
    bookings = relationship("Booking", back_populates="passenger", cascade="all, delete-orphan", passive_deletes=True)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
