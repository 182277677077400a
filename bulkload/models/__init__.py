"""数据库模型模块

定义所有 SQLAlchemy ORM 模型
"""

from .master import Client, Driver, Truck, Product
from .order import Order, OrderState
from .order_detail import OrderDetail
from .status_log import OrderStatusLog
from .alarm import Alarm
from .alert_config import TemperatureAlertConfig, ALERT_CONFIG_ID

__all__ = [
    "Client",
    "Driver",
    "Truck",
    "Product",
    "Order",
    "OrderState",
    "OrderDetail",
    "OrderStatusLog",
    "Alarm",
    "TemperatureAlertConfig",
    "ALERT_CONFIG_ID",
]
