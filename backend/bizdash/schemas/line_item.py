"""单据明细Schema

金额（total）= 数量 × 单价，由服务端计算
"""
from datetime import datetime
from decimal import Decimal
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator

from bizdash.schemas.common import coerce_amount, coerce_count, fix_null_amount, strip_text
from bizdash.schemas.statistics import LineItemStatsResponse


class LineItemFields(BaseModel):
    product_id: Optional[int] = Field(None, description="商品ID（手工录入时为空）")
    product_name: Optional[str] = Field("", max_length=100, description="商品名称")
    quantity: Optional[int] = Field(1, description="数量")
    price: Optional[Decimal] = Field(None, description="单价")

    @field_validator("product_name", mode="before")
    @classmethod
    def strip_name(cls, v: Any) -> Any:
        return strip_text(v)

    @field_validator("quantity", mode="before")
    @classmethod
    def coerce_quantity(cls, v: Any) -> Any:
        return coerce_count(v)

    @field_validator("price", mode="before")
    @classmethod
    def coerce_price(cls, v: Any) -> Any:
        return coerce_amount(v)


class LineItemResponseFields(BaseModel):
    id: int
    product_id: Optional[int] = None
    product_name: str
    quantity: int
    price: float = 0.0
    total: float = 0.0
    created_at: datetime
    updated_at: datetime

    @field_validator("price", "total", mode="before")
    @classmethod
    def fix_null_amounts(cls, v: Any) -> float:
        return fix_null_amount(v)


# ==================== 销售明细 ====================

class SaleItemCreate(LineItemFields):
    sale_id: Optional[int] = Field(None, description="销售单ID")


class SaleItemUpdate(SaleItemCreate):
    product_name: Optional[str] = Field(None, max_length=100)
    quantity: Optional[int] = None


class SaleItemResponse(LineItemResponseFields):
    sale_id: int

    class Config:
        from_attributes = True


class SaleItemListResponse(BaseModel):
    data: List[SaleItemResponse]
    total: int
    page: int
    limit: int
    stats: LineItemStatsResponse


# ==================== 采购明细 ====================

class PurchaseItemCreate(LineItemFields):
    purchase_id: Optional[int] = Field(None, description="采购单ID")


class PurchaseItemUpdate(PurchaseItemCreate):
    product_name: Optional[str] = Field(None, max_length=100)
    quantity: Optional[int] = None


class PurchaseItemResponse(LineItemResponseFields):
    purchase_id: int

    class Config:
        from_attributes = True


class PurchaseItemListResponse(BaseModel):
    data: List[PurchaseItemResponse]
    total: int
    page: int
    limit: int
    stats: LineItemStatsResponse
