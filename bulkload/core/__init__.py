"""核心业务逻辑

- intake：外部订单报文解析与主数据查找/创建
- lifecycle：订单状态机
- telemetry / alerting：遥测接入与温度告警
- reconciliation：地磅与流量计对账
"""

from .exceptions import (
    LoadingOrderError,
    DuplicateOrder,
    OrderNotFound,
    AlarmNotFound,
    InvalidActivationCode,
    InvalidState,
    InvalidWeight,
    MissingRequiredField,
    NoRecipientsConfigured,
    NoTelemetryData,
    ProcessingFailure,
)
from .intake import create_order_from_payload, SCHEMA_ERP, SCHEMA_CHARGING
from .lifecycle import register_initial_weighing, register_final_weighing, begin_loading
from .telemetry import ingest_telemetry, parse_telemetry_payload, get_preset
from .alerting import (
    get_alert_config,
    update_alert_config,
    reset_alert_dedup,
    acknowledge_alarm,
)
from .reconciliation import get_reconciliation, classify_difference

__all__ = [
    "LoadingOrderError",
    "DuplicateOrder",
    "OrderNotFound",
    "AlarmNotFound",
    "InvalidActivationCode",
    "InvalidState",
    "InvalidWeight",
    "MissingRequiredField",
    "NoRecipientsConfigured",
    "NoTelemetryData",
    "ProcessingFailure",
    "create_order_from_payload",
    "SCHEMA_ERP",
    "SCHEMA_CHARGING",
    "register_initial_weighing",
    "register_final_weighing",
    "begin_loading",
    "ingest_telemetry",
    "parse_telemetry_payload",
    "get_preset",
    "get_alert_config",
    "update_alert_config",
    "reset_alert_dedup",
    "acknowledge_alarm",
    "get_reconciliation",
    "classify_difference",
]
