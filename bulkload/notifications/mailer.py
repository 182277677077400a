"""告警通知发送

SmtpNotifier 通过 SMTP 发送邮件，连接带超时；LogNotifier 只写日志，
在未配置 SMTP_HOST 时使用。两者都提供 send(recipient, subject, body)。
"""

import logging
import smtplib
from email.message import EmailMessage

from ..config.settings import settings

logger = logging.getLogger(__name__)


class LogNotifier:
    """只记录日志的通知器"""

    def send(self, recipient: str, subject: str, body: str) -> None:
        logger.warning("Alert for %s: %s\n%s", recipient, subject, body)


class SmtpNotifier:
    """SMTP 邮件通知器"""

    def __init__(self, host: str, port: int, sender: str, user=None, password=None,
                 use_tls: bool = True, timeout: float = 10.0):
        self.host = host
        self.port = port
        self.sender = sender
        self.user = user
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout

    def send(self, recipient: str, subject: str, body: str) -> None:
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = recipient
        message["Subject"] = subject
        message.set_content(body)

        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
            if self.use_tls:
                smtp.starttls()
            if self.user:
                smtp.login(self.user, self.password or "")
            smtp.send_message(message)
        logger.info("Alert email sent to %s", recipient)


def get_notifier():
    """根据配置返回通知器（FastAPI 依赖）"""
    if settings.smtp_enabled:
        return SmtpNotifier(
            host=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            sender=settings.SMTP_SENDER,
            user=settings.SMTP_USER,
            password=settings.SMTP_PASSWORD,
            use_tls=settings.SMTP_USE_TLS,
            timeout=settings.SMTP_TIMEOUT,
        )
    return LogNotifier()
