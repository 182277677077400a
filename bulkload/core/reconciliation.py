"""对账计算

订单完成后，对比地磅净重（毛重 - 皮重）与流量计累计质量：
- net_weight = final_weight - initial_weight
- accumulated_mass = 时间戳最新的一条遥测明细的累计质量
- difference_weight = net_weight - accumulated_mass
- 温度、密度、流量取该订单全部明细的算术平均

差值分级：|差值| < 10 为 excellent，< 50 为 acceptable，其余为 requires review。
"""

import logging

from sqlalchemy.orm import Session

from .. import crud, schemas
from ..models import OrderState
from . import lifecycle
from .exceptions import InvalidState, NoTelemetryData, db_failure_guard

logger = logging.getLogger(__name__)

EXCELLENT_LIMIT = 10.0
ACCEPTABLE_LIMIT = 50.0

EXCELLENT = "excellent"
ACCEPTABLE = "acceptable"
REQUIRES_REVIEW = "requires review"


def classify_difference(difference: float) -> str:
    """按差值绝对值分级"""
    magnitude = abs(difference)
    if magnitude < EXCELLENT_LIMIT:
        return EXCELLENT
    if magnitude < ACCEPTABLE_LIMIT:
        return ACCEPTABLE
    return REQUIRES_REVIEW


def build_conciliation(order_number: str, initial_weight: float, final_weight: float,
                       accumulated_mass: float, average_temperature: float,
                       average_density: float, average_caudal: float) -> schemas.Conciliation:
    net_weight = final_weight - initial_weight
    difference = net_weight - accumulated_mass
    return schemas.Conciliation(
        order_number=order_number,
        initial_weight=initial_weight,
        final_weight=final_weight,
        net_weight=net_weight,
        accumulated_mass=accumulated_mass,
        difference_weight=difference,
        average_temperature=average_temperature,
        average_density=average_density,
        average_caudal=average_caudal,
        classification=classify_difference(difference),
    )


def get_reconciliation(db: Session, number: str) -> schemas.Conciliation:
    """计算已完成订单的对账结果"""
    order = lifecycle.load_order(db, number)
    if order.state != OrderState.FINALIZED:
        raise InvalidState(f"Order {number} is {order.state.value}, reconciliation needs FINALIZED")

    with db_failure_guard(db, f"computing reconciliation for order {number}"):
        count, avg_temperature, avg_density, avg_caudal = crud.get_telemetry_averages(db, order.id)
        if not count:
            raise NoTelemetryData(f"Order {number} has no telemetry readings")
        latest = crud.get_latest_order_detail(db, order.id)

    if order.accumulated_mass is not None and order.accumulated_mass != latest.accumulated_mass:
        logger.warning(
            "Order %s live readout %s differs from latest reading %s",
            number, order.accumulated_mass, latest.accumulated_mass,
        )

    conciliation = build_conciliation(
        order.number,
        order.initial_weight,
        order.final_weight,
        latest.accumulated_mass,
        float(avg_temperature),
        float(avg_density),
        float(avg_caudal),
    )
    logger.info(
        "Order %s reconciliation: net=%s mass=%s difference=%s (%s)",
        number, conciliation.net_weight, conciliation.accumulated_mass,
        conciliation.difference_weight, conciliation.classification,
    )
    return conciliation
