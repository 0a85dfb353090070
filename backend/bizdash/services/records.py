"""记录字段读取 - 兼容 dict、ORM 对象和 Pydantic 模型"""

from collections.abc import Mapping
from datetime import date, datetime
from typing import Any, Optional


def get_field(record: Any, name: str, default: Any = None) -> Any:
    if isinstance(record, Mapping):
        return record.get(name, default)
    return getattr(record, name, default)


def to_date(value: Any) -> Optional[date]:
    """把 date / datetime / ISO 字符串转换为日期，无法识别时返回 None"""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and len(value) >= 10:
        try:
            return date.fromisoformat(value[:10])
        except ValueError:
            return None
    return None
