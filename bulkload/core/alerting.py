"""温度告警

阈值检查规则：
1. 去重标志已置位时直接返回“未发送”
2. 温度不超过阈值时返回“未发送”，无副作用
3. 超过阈值时必须至少配置一个接收人，否则抛出 NoRecipientsConfigured
4. 用 compare-and-set 置位去重标志，只有置位成功的请求创建告警并发送通知

去重标志只能通过 reset_alert_dedup 清除；确认告警不会影响它。
"""

import logging

from sqlalchemy.orm import Session

from .. import crud, schemas
from ..config.settings import settings
from ..models import OrderDetail
from ..utils.helpers import utcnow
from .exceptions import AlarmNotFound, NoRecipientsConfigured, db_failure_guard

logger = logging.getLogger(__name__)

ALERT_SUBJECT = "Temperature alert - order {number}"
ALERT_BODY = """TEMPERATURE ALERT

The product temperature exceeded the configured limit.

Order number: {number}
Event time: {event_time}

Current temperature: {temperature:.2f} °C
Configured threshold: {threshold:.2f} °C
"""


def get_alert_config(db: Session):
    """获取单例告警配置，不存在时按默认值创建"""
    with db_failure_guard(db, "loading the alert configuration"):
        return crud.get_or_create_alert_config(
            db, settings.DEFAULT_TEMPERATURE_THRESHOLD, settings.ALERT_RECIPIENTS
        )


def update_alert_config(db: Session, threshold=None, recipients=None):
    """更新阈值和接收人列表"""
    config = get_alert_config(db)
    with db_failure_guard(db, "updating the alert configuration"):
        config = crud.update_alert_config(db, config, threshold=threshold, recipients=recipients)
    logger.info("Alert config updated: threshold=%s, %d recipient(s)", config.threshold, len(config.recipients))
    return config


def reset_alert_dedup(db: Session) -> None:
    """清除去重标志，允许再次发送告警"""
    get_alert_config(db)
    with db_failure_guard(db, "resetting the alert flag"):
        crud.reset_email_sent(db)
    logger.info("Temperature alert flag reset")


def _notify(notifier, recipients, order_number: str, detail: OrderDetail, threshold: float) -> int:
    subject = ALERT_SUBJECT.format(number=order_number)
    body = ALERT_BODY.format(
        number=order_number,
        event_time=detail.timestamp.isoformat(),
        temperature=detail.temperature,
        threshold=threshold,
    )
    delivered = 0
    for recipient in recipients:
        try:
            notifier.send(recipient, subject, body)
            delivered += 1
        except Exception:
            # one unreachable recipient must not stop the others
            logger.exception("Could not send temperature alert to %s", recipient)
    return delivered


def check_temperature(db: Session, order_number: str, detail: OrderDetail, notifier) -> schemas.AlertOutcome:
    """对一条遥测数据做阈值检查"""
    config = get_alert_config(db)
    threshold = config.threshold

    if config.email_already_sent:
        logger.info("Temperature alert already sent, skipping order %s reading", order_number)
        return schemas.AlertOutcome(sent=False, reason=schemas.ALERT_ALREADY_SENT, threshold=threshold)

    if detail.temperature <= threshold:
        logger.debug("Temperature %s within threshold %s", detail.temperature, threshold)
        return schemas.AlertOutcome(sent=False, reason=schemas.ALERT_BELOW_THRESHOLD, threshold=threshold)

    recipients = list(config.recipients or [])
    if not recipients:
        logger.error("Temperature %s exceeded %s but no recipients are configured", detail.temperature, threshold)
        raise NoRecipientsConfigured("No alert recipients configured")

    with db_failure_guard(db, f"recording temperature alarm for order {order_number}"):
        if not crud.claim_email_sent(db):
            # another reading flipped the flag first
            db.rollback()
            return schemas.AlertOutcome(sent=False, reason=schemas.ALERT_ALREADY_SENT, threshold=threshold)
        alarm = crud.create_alarm(
            db,
            order_number=order_number,
            event_datetime=detail.timestamp,
            current_temperature=detail.temperature,
            threshold_temperature=threshold,
        )
        db.commit()
        alarm_id = alarm.id

    logger.warning(
        "Order %s temperature %.2f °C exceeded threshold %.2f °C, alarm %s",
        order_number, detail.temperature, threshold, alarm_id,
    )
    delivered = _notify(notifier, recipients, order_number, detail, threshold)
    logger.info("Temperature alert delivered to %d of %d recipient(s)", delivered, len(recipients))
    return schemas.AlertOutcome(sent=True, reason=schemas.ALERT_SENT, alarm_id=alarm_id, threshold=threshold)


def acknowledge_alarm(db: Session, alarm_id: int, user: str, observations=None):
    """确认告警，不影响去重标志"""
    with db_failure_guard(db, f"acknowledging alarm {alarm_id}"):
        alarm = crud.get_alarm(db, alarm_id)
        if alarm is None:
            raise AlarmNotFound(alarm_id)
        alarm = crud.acknowledge_alarm(db, alarm, user, observations, utcnow())
    logger.info("Alarm %s acknowledged by %s", alarm_id, user)
    return alarm
