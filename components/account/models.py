"""Account model for the database."""

from sqlalchemy import Column, Integer, String, DateTime, func

from components.core.database import Base


class Account(Base):
    """Account of a service professional, carrying the subscription plan."""
    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False)
    full_name = Column(String(255), nullable=False, default="")
    password = Column(String(255), nullable=False)  # Hashed password
    role = Column(String(20), nullable=False, default="user")
    plan = Column(String(20), nullable=False, default="free")

    # Denormalized quota fast path, only valid while reference_month is current
    appointments_this_month = Column(Integer, nullable=True)
    reference_month = Column(String(7), nullable=True)  # YYYY-MM

    created_date = Column(DateTime, nullable=False, server_default=func.now())
