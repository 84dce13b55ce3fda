"""Appointment model for the database."""

from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey, Numeric, func

from components.core.database import Base


class Appointment(Base):
    """
    Booking of a service for a client.

    ``client_name``, ``service_name`` and ``value`` are copied from the client
    and service when the appointment is created or edited, so history does not
    move when those records are renamed, repriced or deleted. The ids are kept
    without foreign keys for the same reason.
    """
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("accounts.id"), nullable=False, index=True)
    client_id = Column(Integer, nullable=True)
    service_id = Column(Integer, nullable=True)
    client_name = Column(String(255), nullable=True)
    service_name = Column(String(255), nullable=True)
    value = Column(Numeric(10, 2), nullable=False, default=0)
    date = Column(Date, nullable=False, index=True)
    time = Column(String(5), nullable=False)  # HH:MM, 24h
    notes = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default="scheduled")
    created_date = Column(DateTime, nullable=False, server_default=func.now())
