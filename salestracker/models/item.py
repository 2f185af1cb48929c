"""Item model."""
from sqlalchemy import Column, Integer, String, Text, DateTime, Numeric
from sqlalchemy.sql import func

from salestracker.database import Base


class ItemRecord(Base):
    """Item row - a sellable product with its stock levels."""
    __tablename__ = "items"
    
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    sale_price = Column(Numeric(18, 2), nullable=True, default=None)
    cost = Column(Numeric(18, 2), nullable=False)
    current_quantity = Column(Integer, default=0, nullable=False)
    # Units reserved by orders that have not been delivered yet
    allocated_quantity = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    modified_at = Column(DateTime, server_default=func.now())
