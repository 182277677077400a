"""业务异常定义

所有业务规则错误都继承 LoadingOrderError，并带有 category，
接口层据此映射为 not_found / conflict / bad_request / server_error。
"""

import logging
from contextlib import contextmanager
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

NOT_FOUND = "not_found"
CONFLICT = "conflict"
BAD_REQUEST = "bad_request"
SERVER_ERROR = "server_error"


class LoadingOrderError(Exception):
    """业务异常基类"""
    category = SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def kind(self) -> str:
        return type(self).__name__


class DuplicateOrder(LoadingOrderError):
    category = CONFLICT


class OrderNotFound(LoadingOrderError):
    category = NOT_FOUND

    def __init__(self, number: str):
        super().__init__(f"Order {number} not found")
        self.number = number


class AlarmNotFound(LoadingOrderError):
    category = NOT_FOUND

    def __init__(self, alarm_id: int):
        super().__init__(f"Alarm {alarm_id} not found")
        self.alarm_id = alarm_id


class InvalidActivationCode(LoadingOrderError):
    category = NOT_FOUND


class InvalidState(LoadingOrderError):
    """订单当前状态不允许请求的操作"""
    category = CONFLICT


class InvalidWeight(LoadingOrderError):
    category = BAD_REQUEST


class MissingRequiredField(LoadingOrderError):
    category = BAD_REQUEST

    def __init__(self, field: str, message: Optional[str] = None):
        super().__init__(message or f"Field '{field}' is required")
        self.field = field


class NoRecipientsConfigured(LoadingOrderError):
    category = BAD_REQUEST


class NoTelemetryData(LoadingOrderError):
    category = NOT_FOUND


class ProcessingFailure(LoadingOrderError):
    """底层（数据库等）意外错误的包装"""
    category = SERVER_ERROR

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


@contextmanager
def db_failure_guard(db, action: str):
    """把数据库异常回滚并包装为 ProcessingFailure"""
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Database failure while %s", action)
        raise ProcessingFailure(f"Unexpected failure while {action}", cause=exc) from exc
