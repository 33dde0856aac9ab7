"""SQLAlchemy database models."""

from datetime import datetime
from uuid import uuid4

from sqlalchemy import Column, Date, DateTime, ForeignKey, Index, Integer, String, Uuid
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class StylistModel(Base):
    """SQLAlchemy model for stylists."""

    __tablename__ = "stylists"

    id = Column(Uuid, primary_key=True, default=uuid4)
    name = Column(String(100), nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=datetime.now)

    def __repr__(self) -> str:
        return f"<StylistModel(id={self.id}, name='{self.name}')>"


class AppointmentModel(Base):
    """SQLAlchemy model for appointments."""

    __tablename__ = "appointments"
    __table_args__ = (
        Index("ix_appointments_stylist_day", "stylist_id", "date"),
    )

    id = Column(Uuid, primary_key=True, default=uuid4)
    stylist_id = Column(Uuid, ForeignKey("stylists.id"), nullable=False)

    # Customer
    customer_name = Column(String(200), nullable=False)
    customer_phone = Column(String(50), nullable=False)

    # Schedule; date is always the bare calendar day
    date = Column(Date, nullable=False)
    time_slot_hour = Column(Integer, nullable=False)
    time_slot_minute = Column(Integer, nullable=False)
    duration_minutes = Column(Integer, nullable=False, default=60)

    # Timestamps
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)

    def __repr__(self) -> str:
        return (
            f"<AppointmentModel(id={self.id}, date={self.date}, "
            f"start={self.time_slot_hour:02d}:{self.time_slot_minute:02d})>"
        )
