"""订单状态机

状态只能按 PENDING -> TARA_REGISTERED -> LOADING -> FINALIZED 前进，不能回退或跳过。
- register_initial_weighing：地磅登记皮重，生成激活码
- begin_loading：第一条遥测到达时由接入流程调用
- register_final_weighing：地磅登记毛重，订单完成

每次状态切换都是一条带状态条件的 UPDATE，提交后再写审计日志；
审计日志写入失败只记录日志，不影响已经提交的状态切换。
"""

import logging
import math

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .. import crud
from ..models import Order, OrderState
from ..utils.helpers import format_weight, generate_activation_code, utcnow
from .exceptions import InvalidState, InvalidWeight, OrderNotFound, db_failure_guard

logger = logging.getLogger(__name__)

ACTOR_TMS = "TMS"
ACTOR_TELEMETRY = "TELEMETRY"

# 每个状态允许的下一个状态
TRANSITIONS = {
    OrderState.PENDING: OrderState.TARA_REGISTERED,
    OrderState.TARA_REGISTERED: OrderState.LOADING,
    OrderState.LOADING: OrderState.FINALIZED,
    OrderState.FINALIZED: None,
}


def can_transition(current: OrderState, target: OrderState) -> bool:
    return TRANSITIONS.get(current) == target


def load_order(db: Session, number: str) -> Order:
    """根据订单号加载订单，不存在时抛出 OrderNotFound"""
    order = crud.get_order_by_number(db, number)
    if order is None:
        raise OrderNotFound(number)
    return order


def record_state_change(db: Session, number: str, from_state, to_state, actor: str, note: str) -> None:
    """写入状态变更审计记录，失败时只记录日志"""
    try:
        crud.create_status_log(db, number, from_state, to_state, actor, note, utcnow())
        logger.debug("Order %s audit entry written: %s -> %s", number, from_state, to_state)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Could not write audit entry for order %s (%s -> %s)", number, from_state, to_state)


def _check_weight(weight) -> None:
    if weight is None or not math.isfinite(weight):
        raise InvalidWeight(f"Weight must be a finite number, got {weight}")


def _reject(db: Session, number: str, expected: OrderState) -> None:
    """条件更新没有命中时，重新读取订单以给出具体原因"""
    db.rollback()
    order = load_order(db, number)
    raise InvalidState(
        f"Order {number} is {order.state.value}, expected {expected.value}"
    )


def _transition(db: Session, number: str, expected: OrderState, actor: str, note: str,
                extra_conditions=(), **values) -> Order:
    target = TRANSITIONS[expected]
    with db_failure_guard(db, f"moving order {number} to {target.value}"):
        if not crud.transition_order(db, number, expected, target, extra_conditions, **values):
            _reject(db, number, expected)
        db.commit()
    logger.info("Order %s: %s -> %s (%s)", number, expected.value, target.value, actor)

    record_state_change(db, number, expected, target, actor, note)
    return load_order(db, number)


def register_initial_weighing(db: Session, number: str, weight: float) -> Order:
    """登记皮重：PENDING -> TARA_REGISTERED

    生成 5 位激活码并记录皮重和称重时间。
    """
    logger.info("TMS: initial weighing for order %s, weight %s", number, weight)
    _check_weight(weight)
    activation_code = generate_activation_code()
    order = _transition(
        db, number, OrderState.PENDING, ACTOR_TMS,
        f"Initial weighing registered. Weight: {format_weight(weight)}",
        initial_weight=weight,
        initial_weighing=utcnow(),
        activation_code=activation_code,
    )
    logger.info("TMS: order %s activation code issued", number)
    return order


def begin_loading(db: Session, number: str) -> Order:
    """开始装车：TARA_REGISTERED -> LOADING"""
    return _transition(
        db, number, OrderState.TARA_REGISTERED, ACTOR_TELEMETRY,
        "First telemetry reading received",
        start_loading=utcnow(),
    )


def register_final_weighing(db: Session, number: str, weight: float) -> Order:
    """登记毛重：LOADING -> FINALIZED

    毛重不能小于皮重，否则抛出 InvalidWeight，订单不做任何修改。
    """
    logger.info("TMS: final weighing for order %s, weight %s", number, weight)
    _check_weight(weight)
    now = utcnow()
    guard = (
        Order.initial_weight.isnot(None),
        Order.initial_weight <= weight,
    )
    try:
        return _transition(
            db, number, OrderState.LOADING, ACTOR_TMS,
            f"Final weighing registered. Weight: {format_weight(weight)}",
            extra_conditions=guard,
            final_weight=weight,
            end_weighing=now,
            close_order=now,
        )
    except InvalidState:
        order = load_order(db, number)
        if order.state != OrderState.LOADING:
            raise
        # still LOADING, so the weight guard rejected the update
        if order.initial_weight is None:
            raise InvalidState(f"Order {number} has no initial weighing")
        if weight < order.initial_weight:
            raise InvalidWeight(
                f"Final weight {weight} is lower than initial weight {order.initial_weight}"
            )
        raise
