"""Schema 公共的字段预处理"""

from decimal import Decimal
from typing import Any

from bizdash.core.config import settings
from bizdash.services.calculations import coerce_number, to_cents


def coerce_amount(v: Any) -> Any:
    """
    金额字段：非法输入按 0 处理，保留两位小数
    STRICT_NUMBERS 打开时原样交给 Pydantic，由其拒绝
    """
    if v is None or settings.STRICT_NUMBERS:
        return v
    return to_cents(v)


def coerce_count(v: Any) -> Any:
    """整数字段：非法输入按 0 处理，小数交给 Pydantic 拒绝"""
    if v is None or settings.STRICT_NUMBERS:
        return v
    number = coerce_number(v)
    if isinstance(number, Decimal) and number == number.to_integral_value():
        return int(number)
    return number


def strip_text(v: Any) -> Any:
    if isinstance(v, str):
        return v.strip()
    return v


def blank_to_none(v: Any) -> Any:
    """可选文本：空白字符串存为 NULL"""
    if isinstance(v, str):
        v = v.strip()
        return v or None
    return v


def fix_null_amount(v: Any) -> float:
    """数据库中的 NULL 值转换为 0"""
    return float(v) if v is not None else 0.0
