"""Settings model for application flags."""
from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.sql import func

from salestracker.database import Base


class Settings(Base):
    """Application settings - stored in database."""
    __tablename__ = "settings"
    
    id = Column(Integer, primary_key=True, index=True)
    key = Column(String(100), unique=True, index=True, nullable=False)
    value = Column(Text, nullable=True)
    description = Column(Text, nullable=True)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now(), server_default=func.now())


# Known settings keys
SETTINGS_KEYS = {
    "salestracker_demo_data_loaded": {
        "default": "false",
        "description": "Whether the demo items and orders have been loaded"
    }
}
