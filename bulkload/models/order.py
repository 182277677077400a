"""订单模型定义"""

import enum

from sqlalchemy import Column, Integer, String, DateTime, Float, Enum, ForeignKey
from sqlalchemy.orm import relationship
from ..database.connection import Base


class OrderState(str, enum.Enum):
    """订单状态，只能单向前进"""
    PENDING = "PENDING"
    TARA_REGISTERED = "TARA_REGISTERED"
    LOADING = "LOADING"
    FINALIZED = "FINALIZED"


class Order(Base):
    """装车订单（聚合根）"""
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    number = Column(String(64), unique=True, nullable=False, index=True)  # 外部订单号，创建后不可变
    external_code = Column(String(100), unique=True, nullable=True)
    activation_code = Column(String(5), nullable=True, index=True)  # 皮重登记时生成

    client_id = Column(Integer, ForeignKey("clients.id"), nullable=True)
    driver_id = Column(Integer, ForeignKey("drivers.id"), nullable=True)
    truck_id = Column(Integer, ForeignKey("trucks.id"), nullable=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=True)

    scheduled_date = Column(DateTime, nullable=False)  # 计划装车时间
    preset = Column(Float, nullable=False, default=0.0)  # 计划装载量 (kg)
    state = Column(Enum(OrderState), nullable=False, default=OrderState.PENDING, index=True)

    # 各阶段时间
    initial_reception = Column(DateTime, nullable=True)  # 接收订单
    initial_weighing = Column(DateTime, nullable=True)  # 登记皮重
    start_loading = Column(DateTime, nullable=True)  # 第一条遥测
    end_loading = Column(DateTime, nullable=True)  # 最近一条遥测
    end_weighing = Column(DateTime, nullable=True)  # 登记毛重
    close_order = Column(DateTime, nullable=True)

    # 地磅数据
    initial_weight = Column(Float, nullable=True)  # 皮重
    final_weight = Column(Float, nullable=True)  # 毛重

    # 实时读数，始终等于时间戳最新的一条 OrderDetail
    accumulated_mass = Column(Float, nullable=True)
    density = Column(Float, nullable=True)
    temperature = Column(Float, nullable=True)
    flow_rate = Column(Float, nullable=True)
    last_reading_at = Column(DateTime, nullable=True)

    client = relationship("Client")
    driver = relationship("Driver")
    truck = relationship("Truck")
    product = relationship("Product")
    details = relationship("OrderDetail", back_populates="order", order_by="OrderDetail.timestamp")
