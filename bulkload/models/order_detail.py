"""订单遥测明细模型

每条流量计消息对应一行，写入后不再修改
"""

from sqlalchemy import Column, Integer, DateTime, Float, ForeignKey
from sqlalchemy.orm import relationship
from ..database.connection import Base


class OrderDetail(Base):
    """遥测快照表"""
    __tablename__ = "order_details"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    timestamp = Column(DateTime, nullable=False, index=True)
    accumulated_mass = Column(Float, nullable=False)  # kg
    density = Column(Float, nullable=False)
    temperature = Column(Float, nullable=False)  # °C
    flow_rate = Column(Float, nullable=False)  # kg/h

    order = relationship("Order", back_populates="details")
