"""数据库操作（CRUD）- 状态变更审计"""

from sqlalchemy.orm import Session
from .. import models


def create_status_log(db: Session, order_number: str, from_state, to_state, actor: str, note: str, timestamp):
    """追加一条状态变更记录"""
    entry = models.OrderStatusLog(
        order_number=order_number,
        from_state=from_state,
        to_state=to_state,
        actor=actor,
        note=note,
        timestamp=timestamp,
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry


def list_status_logs(db: Session, order_number: str):
    """获取订单的状态变更记录（按时间排序）"""
    return db.query(models.OrderStatusLog).filter(
        models.OrderStatusLog.order_number == order_number
    ).order_by(models.OrderStatusLog.timestamp, models.OrderStatusLog.id).all()
