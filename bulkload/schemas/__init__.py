"""API数据模型模块

定义所有 Pydantic 模型（请求/响应结构体）
"""

from .master import ClientRead, DriverRead, TruckRead, ProductRead
from .order import OrderRead, StatusLogRead, WeighingRequest, PresetRead
from .telemetry import (
    OrderDetailRead,
    AlertOutcome,
    TelemetryResult,
    ALERT_SENT,
    ALERT_BELOW_THRESHOLD,
    ALERT_ALREADY_SENT,
)
from .alarm import AlarmRead, AlarmAcknowledge, AlertConfigRead, AlertConfigUpdate
from .conciliation import Conciliation
from .intake import OrderIntake, DriverIntake, ClientIntake, TruckIntake, ProductIntake

__all__ = [
    "ClientRead",
    "DriverRead",
    "TruckRead",
    "ProductRead",
    "OrderRead",
    "StatusLogRead",
    "WeighingRequest",
    "PresetRead",
    "OrderDetailRead",
    "AlertOutcome",
    "TelemetryResult",
    "ALERT_SENT",
    "ALERT_BELOW_THRESHOLD",
    "ALERT_ALREADY_SENT",
    "AlarmRead",
    "AlarmAcknowledge",
    "AlertConfigRead",
    "AlertConfigUpdate",
    "Conciliation",
    "OrderIntake",
    "DriverIntake",
    "ClientIntake",
    "TruckIntake",
    "ProductIntake",
]
