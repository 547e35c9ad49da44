"""PingResult model - one row per successful probe."""
from datetime import datetime
from sqlalchemy import Column, Integer, Float, String, DateTime

from ..database import Base


class PingResult(Base):
    """Latency measured to a container address at a point in time."""
    
    __tablename__ = "ping_results"
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    ip_address = Column(String, nullable=False)
    ping_time = Column(Float, nullable=False)  # milliseconds
    last_seen = Column(DateTime, nullable=False, default=datetime.utcnow)
