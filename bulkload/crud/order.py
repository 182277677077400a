"""数据库操作（CRUD）- 订单相关

封装订单的读写。状态变更和实时读数更新都是带条件的单条 UPDATE，
在数据库中一次完成“检查当前状态 + 修改”，不持有长时间的锁；
这些函数不提交事务，由调用方统一 commit。
"""

from sqlalchemy.orm import Session
from .. import models


def get_order_by_number(db: Session, number: str):
    """根据订单号获取订单"""
    return db.query(models.Order).filter(models.Order.number == number).first()


def get_order_by_external_code(db: Session, external_code: str):
    return db.query(models.Order).filter(models.Order.external_code == external_code).first()


def get_order_by_activation_code(db: Session, number: str, activation_code: str):
    """根据订单号和激活码获取订单"""
    return db.query(models.Order).filter(
        models.Order.number == number,
        models.Order.activation_code == activation_code,
    ).first()


def list_orders(db: Session, skip: int = 0, limit: int = 100):
    """获取订单列表（按 id 倒序）"""
    return db.query(models.Order).order_by(models.Order.id.desc()).offset(skip).limit(limit).all()


def create_order(db: Session, **fields):
    """创建新订单（状态为 PENDING）"""
    db_order = models.Order(state=models.OrderState.PENDING, **fields)
    db.add(db_order)
    db.commit()
    db.refresh(db_order)
    return db_order


def transition_order(db: Session, number: str, expected: models.OrderState, target: models.OrderState,
                     extra_conditions=(), **values) -> bool:
    """仅当订单仍处于 expected 状态时切换到 target 并写入 values

    返回是否有一行被更新。
    """
    query = db.query(models.Order).filter(
        models.Order.number == number,
        models.Order.state == expected,
        *extra_conditions,
    )
    updated = query.update(dict(values, state=target), synchronize_session=False)
    return updated == 1


def update_live_readout(db: Session, order_id: int, detail: models.OrderDetail) -> bool:
    """用新的遥测数据更新订单实时读数

    只有当该条数据的时间戳不早于当前读数时才覆盖，保证实时读数始终等于
    时间戳最新的明细行。
    """
    updated = db.query(models.Order).filter(
        models.Order.id == order_id,
        (models.Order.last_reading_at.is_(None)) | (models.Order.last_reading_at <= detail.timestamp),
    ).update(
        {
            "accumulated_mass": detail.accumulated_mass,
            "density": detail.density,
            "temperature": detail.temperature,
            "flow_rate": detail.flow_rate,
            "last_reading_at": detail.timestamp,
            "end_loading": detail.timestamp,
        },
        synchronize_session=False,
    )
    return updated == 1


def lock_order_for_reading(db: Session, order_id: int, states) -> bool:
    """在当前事务内锁定仍处于 states 之一的订单（不提交）

    返回 False 表示订单已不接受遥测数据。必须在写入明细之前调用，
    锁一直持有到调用方 commit，期间其他请求无法完成状态切换。
    """
    updated = db.query(models.Order).filter(
        models.Order.id == order_id,
        models.Order.state.in_(states),
    ).update({"state": models.Order.state}, synchronize_session=False)
    return updated == 1
