"""统计 Schema"""

from dataclasses import asdict
from typing import Any

from pydantic import BaseModel


class StatsModel(BaseModel):
    @classmethod
    def from_stats(cls, stats: Any) -> "StatsModel":
        """从计算模块返回的 dataclass 构建"""
        return cls(**asdict(stats))


class LedgerStatsResponse(StatsModel):
    """往来账统计：净额 = 贷方 - 借方"""
    total_debits: float = 0
    total_credits: float = 0
    net_balance: float = 0


class InvoiceStatsResponse(StatsModel):
    """销售/采购统计"""
    total_value: float = 0
    today_value: float = 0
    pending_amount: float = 0
    total_count: int = 0


class LineItemStatsResponse(StatsModel):
    """明细统计"""
    total_items: int = 0
    total_value: float = 0
    avg_price: float = 0


class StockStatsResponse(StatsModel):
    """库存预警"""
    total_products: int = 0
    low_stock_alerts: int = 0
    out_of_stock: int = 0
    inventory_value: float = 0


class PartyStatsResponse(StatsModel):
    total_parties: int = 0
    total_balance: float = 0
