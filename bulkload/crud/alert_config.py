"""数据库操作（CRUD）- 温度告警配置（单例）

配置只有一行，主键固定为 ALERT_CONFIG_ID。去重标志的置位使用
compare-and-set：UPDATE ... WHERE email_already_sent = false，
只有影响行数为 1 的请求拥有发送权。
"""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from .. import models
from ..models import ALERT_CONFIG_ID


def get_alert_config(db: Session):
    return db.query(models.TemperatureAlertConfig).filter(
        models.TemperatureAlertConfig.id == ALERT_CONFIG_ID
    ).first()


def get_or_create_alert_config(db: Session, threshold: float, recipients=None):
    """获取配置，不存在时用给定的初始值创建"""
    config = get_alert_config(db)
    if config is not None:
        return config
    config = models.TemperatureAlertConfig(
        id=ALERT_CONFIG_ID,
        threshold=threshold,
        recipients=list(recipients or []),
        email_already_sent=False,
    )
    db.add(config)
    try:
        db.commit()
    except IntegrityError:
        # another request created the row first
        db.rollback()
        return get_alert_config(db)
    db.refresh(config)
    return config


def update_alert_config(db: Session, config: models.TemperatureAlertConfig, threshold=None, recipients=None):
    """更新阈值和接收人，None 表示不修改"""
    if threshold is not None:
        config.threshold = threshold
    if recipients is not None:
        config.recipients = list(recipients)
    db.commit()
    db.refresh(config)
    return config


def claim_email_sent(db: Session) -> bool:
    """原子地把去重标志从 False 置为 True（不提交）"""
    updated = db.query(models.TemperatureAlertConfig).filter(
        models.TemperatureAlertConfig.id == ALERT_CONFIG_ID,
        models.TemperatureAlertConfig.email_already_sent == False,  # noqa: E712
    ).update({"email_already_sent": True}, synchronize_session=False)
    return updated == 1


def reset_email_sent(db: Session) -> bool:
    updated = db.query(models.TemperatureAlertConfig).filter(
        models.TemperatureAlertConfig.id == ALERT_CONFIG_ID,
    ).update({"email_already_sent": False}, synchronize_session=False)
    db.commit()
    return updated == 1
