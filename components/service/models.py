"""Service model for the database."""

from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, Numeric, func

from components.core.database import Base


class Service(Base):
    """Service offered by a professional, with its current price."""
    __tablename__ = "services"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("accounts.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False, default=0)
    duration = Column(Integer, nullable=False, default=0)  # Minutes
    active = Column(Boolean, nullable=False, default=True)
    created_date = Column(DateTime, nullable=False, server_default=func.now())
