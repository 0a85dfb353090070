"""
派生金额计算

- 明细金额 = 数量 × 单价
- 单据合计 = 小计 + 税额

金额一律用 Decimal 计算，入库前按分四舍五入；非数字或缺失的输入按 0 处理（strict=True 时抛出校验异常）。
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from bizdash.core.exceptions import ValidationError

ZERO = Decimal("0")
CENT = Decimal("0.01")


def _to_decimal(value: Any) -> Decimal:
    if value is None or isinstance(value, bool):
        raise InvalidOperation(value)
    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, int):
        number = Decimal(value)
    elif isinstance(value, float):
        # 通过 repr 转换，3 * 25.0 得到 75.0 而不是二进制误差
        number = Decimal(repr(value))
    elif isinstance(value, str):
        number = Decimal(value.strip())
    else:
        raise InvalidOperation(value)
    if not number.is_finite():
        raise InvalidOperation(value)
    return number


def coerce_number(value: Any, *, strict: bool = False, field: str = None) -> Decimal:
    """把输入转换为 Decimal，非法输入返回 0"""
    try:
        return _to_decimal(value)
    except (InvalidOperation, ValueError):
        if strict:
            raise ValidationError(f"{field or 'Value'} must be a number.", field=field)
        return ZERO


def to_cents(value: Any, *, strict: bool = False, field: str = None) -> Decimal:
    """金额保留两位小数（四舍五入），与 DECIMAL(12, 2) 列一致"""
    return coerce_number(value, strict=strict, field=field).quantize(CENT, rounding=ROUND_HALF_UP)


def compute_line_total(quantity: Any, price: Any, *, strict: bool = False) -> Decimal:
    """明细金额 = 数量 × 单价"""
    return (
        coerce_number(quantity, strict=strict, field="quantity")
        * coerce_number(price, strict=strict, field="price")
    )


def compute_invoice_total(subtotal: Any, tax: Any, *, strict: bool = False) -> Decimal:
    """单据合计 = 小计 + 税额"""
    return (
        coerce_number(subtotal, strict=strict, field="subtotal")
        + coerce_number(tax, strict=strict, field="tax")
    )
