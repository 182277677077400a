"""工具函数模块

包含一些常用的工具函数
"""

import secrets
from datetime import datetime, timezone

ACTIVATION_CODE_DIGITS = 5


def utcnow() -> datetime:
    """当前 UTC 时间（naive，与数据库列一致）"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def generate_activation_code() -> str:
    """生成 5 位数字激活码，不足位数左侧补零

    例如 "00042"、"99999"。不检查与其他订单的激活码是否重复。
    """
    code = secrets.randbelow(10 ** ACTIVATION_CODE_DIGITS)
    return f"{code:0{ACTIVATION_CODE_DIGITS}d}"


def is_blank(value) -> bool:
    """None 或只有空白字符"""
    return value is None or not str(value).strip()


def format_weight(weight: float) -> str:
    """将重量格式化为审计备注中使用的文本"""
    return f"{weight:g} kg"
