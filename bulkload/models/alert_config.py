"""温度告警配置模型

全局只有一行，主键固定为 ALERT_CONFIG_ID
"""

from sqlalchemy import Column, Integer, Float, Boolean, JSON
from ..database.connection import Base

ALERT_CONFIG_ID = 1


class TemperatureAlertConfig(Base):
    """温度告警配置（单例）"""
    __tablename__ = "temperature_alert_config"

    id = Column(Integer, primary_key=True, default=ALERT_CONFIG_ID)
    threshold = Column(Float, nullable=False)  # °C
    recipients = Column(JSON, nullable=False, default=list)  # 邮件接收人
    email_already_sent = Column(Boolean, nullable=False, default=False)  # 去重标志
