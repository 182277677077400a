"""数据库操作（CRUD）- 温度告警"""

from sqlalchemy.orm import Session
from .. import models


def create_alarm(db: Session, order_number: str, event_datetime, current_temperature: float,
                 threshold_temperature: float):
    """新增告警记录（flush，不提交）"""
    alarm = models.Alarm(
        order_number=order_number,
        event_datetime=event_datetime,
        current_temperature=current_temperature,
        threshold_temperature=threshold_temperature,
        acknowledged=False,
    )
    db.add(alarm)
    db.flush()
    return alarm


def get_alarm(db: Session, alarm_id: int):
    return db.query(models.Alarm).filter(models.Alarm.id == alarm_id).first()


def list_alarms(db: Session, skip: int = 0, limit: int = 100):
    """获取所有告警，最新的在前"""
    return db.query(models.Alarm).order_by(
        models.Alarm.event_datetime.desc(), models.Alarm.id.desc()
    ).offset(skip).limit(limit).all()


def list_alarms_by_order(db: Session, order_number: str):
    return db.query(models.Alarm).filter(
        models.Alarm.order_number == order_number
    ).order_by(models.Alarm.event_datetime.desc(), models.Alarm.id.desc()).all()


def acknowledge_alarm(db: Session, alarm: models.Alarm, user: str, observations, accepted_datetime):
    """确认告警"""
    alarm.acknowledged = True
    alarm.acknowledged_by = user
    alarm.observations = observations
    alarm.accepted_datetime = accepted_datetime
    db.commit()
    db.refresh(alarm)
    return alarm
