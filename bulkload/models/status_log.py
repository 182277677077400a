"""订单状态变更审计表"""

from sqlalchemy import Column, Integer, String, DateTime, Enum, Text
from ..database.connection import Base
from .order import OrderState


class OrderStatusLog(Base):
    """状态变更日志（只追加）"""
    __tablename__ = "order_status_log"

    id = Column(Integer, primary_key=True, index=True)
    order_number = Column(String(64), nullable=False, index=True)
    from_state = Column(Enum(OrderState), nullable=True)  # 第一次变更时为空
    to_state = Column(Enum(OrderState), nullable=False)
    actor = Column(String(50), nullable=False)  # 触发变更的子系统，如 TMS / TELEMETRY
    note = Column(Text, nullable=True)
    timestamp = Column(DateTime, nullable=False)
