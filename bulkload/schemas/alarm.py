"""告警与告警配置数据结构定义"""

from pydantic import BaseModel, EmailStr
from typing import List, Optional
from datetime import datetime


class AlarmRead(BaseModel):
    id: int
    order_number: str
    event_datetime: datetime
    current_temperature: float
    threshold_temperature: float
    acknowledged: bool
    acknowledged_by: Optional[str] = None
    observations: Optional[str] = None
    accepted_datetime: Optional[datetime] = None

    class Config:
        from_attributes = True


class AlarmAcknowledge(BaseModel):
    """确认告警时提交的数据"""
    user: str
    observations: Optional[str] = None


class AlertConfigRead(BaseModel):
    threshold: float
    recipients: List[str]
    email_already_sent: bool

    class Config:
        from_attributes = True


class AlertConfigUpdate(BaseModel):
    """未提供的字段保持不变"""
    threshold: Optional[float] = None
    recipients: Optional[List[EmailStr]] = None
