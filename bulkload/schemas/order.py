"""订单数据结构定义

定义订单相关的Pydantic模型
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from ..models.order import OrderState
from .master import ClientRead, DriverRead, TruckRead, ProductRead


class OrderRead(BaseModel):
    """读取订单时的模型"""
    id: int
    number: str
    external_code: Optional[str] = None
    activation_code: Optional[str] = None
    state: OrderState
    scheduled_date: datetime
    preset: float

    client: Optional[ClientRead] = None
    driver: Optional[DriverRead] = None
    truck: Optional[TruckRead] = None
    product: Optional[ProductRead] = None

    initial_reception: Optional[datetime] = None
    initial_weighing: Optional[datetime] = None
    start_loading: Optional[datetime] = None
    end_loading: Optional[datetime] = None
    end_weighing: Optional[datetime] = None

    initial_weight: Optional[float] = None
    final_weight: Optional[float] = None

    accumulated_mass: Optional[float] = None
    density: Optional[float] = None
    temperature: Optional[float] = None
    flow_rate: Optional[float] = None
    last_reading_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class StatusLogRead(BaseModel):
    """状态变更审计记录"""
    id: int
    order_number: str
    from_state: Optional[OrderState] = None
    to_state: OrderState
    actor: str
    note: Optional[str] = None
    timestamp: datetime

    class Config:
        from_attributes = True


class WeighingRequest(BaseModel):
    """地磅称重请求"""
    number: str
    weight: float = Field(..., allow_inf_nan=False)


class PresetRead(BaseModel):
    number: str
    preset: float
