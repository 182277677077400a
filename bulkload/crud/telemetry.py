"""数据库操作（CRUD）- 遥测明细"""

from sqlalchemy import func
from sqlalchemy.orm import Session
from .. import models


def create_order_detail(db: Session, order_id: int, timestamp, accumulated_mass: float,
                        density: float, temperature: float, flow_rate: float):
    """新增一条遥测明细（flush，不提交）"""
    detail = models.OrderDetail(
        order_id=order_id,
        timestamp=timestamp,
        accumulated_mass=accumulated_mass,
        density=density,
        temperature=temperature,
        flow_rate=flow_rate,
    )
    db.add(detail)
    db.flush()
    return detail


def list_order_details(db: Session, order_id: int):
    """获取订单的遥测明细（按时间排序）"""
    return db.query(models.OrderDetail).filter(
        models.OrderDetail.order_id == order_id
    ).order_by(models.OrderDetail.timestamp, models.OrderDetail.id).all()


def get_latest_order_detail(db: Session, order_id: int):
    """时间戳最新的一条明细；时间戳相同时取后写入的"""
    return db.query(models.OrderDetail).filter(
        models.OrderDetail.order_id == order_id
    ).order_by(models.OrderDetail.timestamp.desc(), models.OrderDetail.id.desc()).first()


def get_last_timestamp(db: Session, order_id: int):
    return db.query(func.max(models.OrderDetail.timestamp)).filter(
        models.OrderDetail.order_id == order_id
    ).scalar()


def get_telemetry_averages(db: Session, order_id: int):
    """返回 (行数, 平均温度, 平均密度, 平均流量)"""
    return db.query(
        func.count(models.OrderDetail.id),
        func.avg(models.OrderDetail.temperature),
        func.avg(models.OrderDetail.density),
        func.avg(models.OrderDetail.flow_rate),
    ).filter(models.OrderDetail.order_id == order_id).one()
