"""Client model for the database."""

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, func

from components.core.database import Base


class Client(Base):
    """Customer of a service professional."""
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("accounts.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    tax_id = Column(String(50), nullable=True)
    address = Column(String(500), nullable=True)
    notes = Column(Text, nullable=True)
    created_date = Column(DateTime, nullable=False, server_default=func.now())
