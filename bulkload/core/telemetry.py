"""遥测数据接入

流量计每条消息写入一行 OrderDetail，并更新订单实时读数。
订单处于 TARA_REGISTERED 时，先通过状态机切换到 LOADING；
PENDING 和 FINALIZED 的订单不接受遥测数据。
"""

import logging
import math
from typing import Mapping

from sqlalchemy.orm import Session

from .. import crud
from ..models import OrderState
from ..utils.helpers import utcnow
from . import aliases, lifecycle
from .alerting import check_temperature
from .exceptions import (
    InvalidActivationCode,
    InvalidState,
    MissingRequiredField,
    db_failure_guard,
)

logger = logging.getLogger(__name__)

ACCUMULATED_MASS = ("accumulatedMass", "accumulated_mass", "masa", "masa_acumulada")
DENSITY = ("density", "densidad")
TEMPERATURE = ("temperature", "temperatura")
FLOW_RATE = ("caudal", "caudales", "flow_rate", "flowRate")
TIMESTAMP = ("timestamp", "time", "fecha")

ACCEPTS_TELEMETRY = (OrderState.TARA_REGISTERED, OrderState.LOADING)


def parse_telemetry_payload(document: Mapping) -> dict:
    """按别名提取装车系统的遥测报文，缺少读数时抛出 MissingRequiredField"""
    reading = {
        "accumulated_mass": aliases.get_float(document, ACCUMULATED_MASS),
        "density": aliases.get_float(document, DENSITY),
        "temperature": aliases.get_float(document, TEMPERATURE),
        "flow_rate": aliases.get_float(document, FLOW_RATE),
    }
    for field, value in reading.items():
        if value is None:
            raise MissingRequiredField(field)
    reading["timestamp"] = aliases.get_datetime(document, TIMESTAMP, utcnow())
    return reading


def _ensure_loading(db: Session, number: str):
    order = lifecycle.load_order(db, number)
    if order.state == OrderState.TARA_REGISTERED:
        try:
            order = lifecycle.begin_loading(db, number)
        except InvalidState:
            # a concurrent reading may have started loading already
            order = lifecycle.load_order(db, number)
    if order.state not in ACCEPTS_TELEMETRY:
        raise InvalidState(f"Order {number} is {order.state.value} and does not accept telemetry")
    return order


def ingest_telemetry(db: Session, number: str, timestamp, accumulated_mass, density, temperature,
                     flow_rate, notifier):
    """接收一条遥测数据

    返回 (OrderDetail, AlertOutcome)。明细先提交，再做温度阈值检查。
    """
    readings = {
        "timestamp": timestamp,
        "accumulated_mass": accumulated_mass,
        "density": density,
        "temperature": temperature,
        "flow_rate": flow_rate,
    }
    for field, value in readings.items():
        if value is None or (field != "timestamp" and not math.isfinite(value)):
            raise MissingRequiredField(field)

    order = _ensure_loading(db, number)

    with db_failure_guard(db, f"storing telemetry for order {number}"):
        last_timestamp = crud.get_last_timestamp(db, order.id)
        if last_timestamp is not None and timestamp < last_timestamp:
            logger.warning("Order %s telemetry out of order: %s is before %s", number, timestamp, last_timestamp)

        if not crud.lock_order_for_reading(db, order.id, ACCEPTS_TELEMETRY):
            # finalized by another request after the state check above
            db.rollback()
            current = lifecycle.load_order(db, number)
            raise InvalidState(f"Order {number} is {current.state.value} and does not accept telemetry")

        detail = crud.create_order_detail(db, order.id, **readings)
        crud.update_live_readout(db, order.id, detail)
        db.commit()
        db.refresh(detail)

    logger.debug(
        "Order %s reading: mass=%s density=%s temperature=%s flow=%s",
        number, accumulated_mass, density, temperature, flow_rate,
    )
    outcome = check_temperature(db, number, detail, notifier)
    return detail, outcome


def get_preset(db: Session, number: str, activation_code: str) -> float:
    """装车系统凭订单号和激活码获取计划装载量"""
    with db_failure_guard(db, f"loading preset for order {number}"):
        order = crud.get_order_by_activation_code(db, number, activation_code)
    if order is None:
        raise InvalidActivationCode(f"Wrong order number or activation code: {number}/{activation_code}")
    return order.preset
