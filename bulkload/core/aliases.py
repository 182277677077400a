"""别名字段提取

外部系统对同一逻辑字段使用不同的键名，例如订单号可能是
"order"、"number" 或 "order_number"。每个逻辑字段对应一个有序的候选键列表，
按顺序取第一个存在的键。这里只负责提取，不做任何业务校验。
"""

import math
from datetime import datetime, timezone
from typing import List, Mapping, Optional


def get_node(node, aliases, default=None):
    """取第一个值为对象（dict）的候选键"""
    if not isinstance(node, Mapping):
        return default
    for key in aliases:
        value = node.get(key)
        if isinstance(value, Mapping):
            return value
    return default


def get_string(node, aliases, default: Optional[str] = None) -> Optional[str]:
    """取第一个标量值的候选键，转为字符串"""
    if not isinstance(node, Mapping):
        return default
    for key in aliases:
        value = node.get(key)
        if value is None or isinstance(value, (Mapping, list)):
            continue
        return str(value)
    return default


def get_float(node, aliases, default: Optional[float] = None) -> Optional[float]:
    """取第一个可解析为有限数字的候选键；bool、NaN、inf 不视为数字"""
    if not isinstance(node, Mapping):
        return default
    for key in aliases:
        value = node.get(key)
        if value is None or isinstance(value, bool):
            continue
        try:
            if isinstance(value, (int, float)):
                number = float(value)
            elif isinstance(value, str):
                number = float(value.strip())
            else:
                continue
        except (ValueError, OverflowError):
            continue
        if math.isfinite(number):
            return number
    return default


def get_int_list(node, aliases, default: Optional[List[int]] = None) -> Optional[List[int]]:
    """取第一个值为数组的候选键，元素转为整数"""
    if not isinstance(node, Mapping):
        return default
    for key in aliases:
        value = node.get(key)
        if isinstance(value, list):
            try:
                return [int(v) for v in value]
            except (TypeError, ValueError):
                continue
    return default


def get_datetime(node, aliases, default: Optional[datetime] = None) -> Optional[datetime]:
    """ISO 8601 字符串；无法解析时返回默认值"""
    value = get_string(node, aliases)
    if value is None:
        return default
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return default
    # 数据库中统一存 naive UTC
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed
