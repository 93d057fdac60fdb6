# rideshare/models/car.py
import enum

from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Enum, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from .base import Base
from .user import new_uuid


class VerificationStatus(str, enum.Enum):
    PENDING  = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Car(Base):
    __tablename__ = "cars"

    id = Column(String(36), primary_key=True, default=new_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    make = Column(String(80), nullable=False)
    model = Column(String(80), nullable=False)
    year = Column(Integer, nullable=False)
    color = Column(String(40), nullable=False)
    registration_number = Column(String(20), unique=True, nullable=False)
    seating_capacity = Column(Integer, nullable=False)

    # модерация: pending -> approved | rejected, меняет только админ
    verification_status = Column(
        Enum(VerificationStatus, values_callable=lambda e: [m.value for m in e], native_enum=False, length=20),
        nullable=False,
        default=VerificationStatus.PENDING,
    )
    documents_uploaded = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    owner = relationship("User", back_populates="cars")
    rides = relationship("Ride", back_populates="car", cascade="all, delete-orphan", passive_deletes=True)

    __table_args__ = (Index("ix_cars_verification_status", "verification_status"),)
