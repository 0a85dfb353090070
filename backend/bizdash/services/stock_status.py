"""库存状态分类"""

from enum import Enum
from typing import Any

from bizdash.services.calculations import coerce_number


class StockStatus(str, Enum):
    OUT_OF_STOCK = "out_of_stock"
    LOW_STOCK = "low_stock"
    IN_STOCK = "in_stock"

    @property
    def label(self) -> str:
        return {
            StockStatus.OUT_OF_STOCK: "Out of Stock",
            StockStatus.LOW_STOCK: "Low Stock",
            StockStatus.IN_STOCK: "In Stock",
        }[self]


def classify_stock(quantity: Any, min_stock: Any) -> StockStatus:
    """
    根据当前库存和最低库存分类：
    - 数量为 0 → 缺货（优先级最高）
    - 0 < 数量 ≤ 最低库存 → 低库存
    - 数量 > 最低库存 → 正常
    """
    qty = coerce_number(quantity)
    threshold = coerce_number(min_stock)
    if qty == 0:
        return StockStatus.OUT_OF_STOCK
    if qty <= threshold:
        return StockStatus.LOW_STOCK
    return StockStatus.IN_STOCK


def needs_reorder(quantity: Any, min_stock: Any) -> bool:
    """库存预警：数量不高于最低库存（包含缺货）"""
    return coerce_number(quantity) <= coerce_number(min_stock)
