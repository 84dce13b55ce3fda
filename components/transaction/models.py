"""Transaction model for the database."""

from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey, Numeric, func

from components.core.database import Base


class Transaction(Base):
    """Bookkeeping entry of a premium account."""
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("accounts.id"), nullable=False, index=True)
    type = Column(String(20), nullable=False)  # income / expense
    category = Column(String(50), nullable=False, default="other")
    description = Column(Text, nullable=True)
    amount = Column(Numeric(10, 2), nullable=False)
    date = Column(Date, nullable=False, index=True)
    client_name = Column(String(255), nullable=True)
    created_date = Column(DateTime, nullable=False, server_default=func.now())
