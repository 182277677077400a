"""遥测数据结构定义"""

from pydantic import BaseModel
from typing import Optional
from datetime import datetime

ALERT_SENT = "sent"
ALERT_BELOW_THRESHOLD = "below_threshold"
ALERT_ALREADY_SENT = "already_sent"


class OrderDetailRead(BaseModel):
    id: int
    order_id: int
    timestamp: datetime
    accumulated_mass: float
    density: float
    temperature: float
    flow_rate: float

    class Config:
        from_attributes = True


class AlertOutcome(BaseModel):
    """一次阈值检查的结果"""
    sent: bool
    reason: str
    alarm_id: Optional[int] = None
    threshold: Optional[float] = None


class TelemetryResult(BaseModel):
    detail: OrderDetailRead
    alert: AlertOutcome
