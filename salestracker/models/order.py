"""Order model."""
from sqlalchemy import Column, Integer, String, DateTime, Numeric, Boolean
from sqlalchemy.sql import func

from salestracker.database import Base


class OrderRecord(Base):
    """Order row - a sale of one item to a customer."""
    __tablename__ = "orders"
    
    id = Column(Integer, primary_key=True, index=True)
    customer_name = Column(String(255), nullable=False)
    # Not a foreign key: orders outlive deleted items
    item_id = Column(Integer, nullable=False, index=True)
    sell_date = Column(DateTime, nullable=False, index=True)
    price = Column(Numeric(18, 2), default=0, nullable=False)  # Unit price
    quantity = Column(Integer, default=1, nullable=False)
    has_received_payment = Column(Boolean, default=False, nullable=False)
    payment_date = Column(DateTime, nullable=True)
    has_delivered = Column(Boolean, default=False, nullable=False)
    delivery_date = Column(DateTime, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    modified_at = Column(DateTime, server_default=func.now())
