"""温度告警记录模型"""

from sqlalchemy import Column, Integer, String, DateTime, Float, Boolean
from ..database.connection import Base


class Alarm(Base):
    """温度超限告警表"""
    __tablename__ = "alarms"

    id = Column(Integer, primary_key=True, index=True)
    order_number = Column(String(64), nullable=False, index=True)
    event_datetime = Column(DateTime, nullable=False)
    current_temperature = Column(Float, nullable=False)
    threshold_temperature = Column(Float, nullable=False)  # 触发时生效的阈值
    acknowledged = Column(Boolean, nullable=False, default=False)
    acknowledged_by = Column(String(100), nullable=True)
    observations = Column(String(500), nullable=True)
    accepted_datetime = Column(DateTime, nullable=True)
