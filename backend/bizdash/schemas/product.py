"""商品Schema"""
from datetime import datetime
from decimal import Decimal
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator

from bizdash.schemas.common import coerce_amount, coerce_count, fix_null_amount, strip_text
from bizdash.schemas.statistics import StockStatsResponse
from bizdash.services.stock_status import StockStatus


class ProductBase(BaseModel):
    """商品基础字段"""
    name: Optional[str] = Field("", max_length=100, description="品名")
    category: Optional[str] = Field("", max_length=50, description="分类")
    quantity: Optional[int] = Field(0, description="当前库存")
    price: Optional[Decimal] = Field(None, description="单价")
    min_stock: Optional[int] = Field(0, description="最低库存")

    @field_validator("name", "category", mode="before")
    @classmethod
    def strip_names(cls, v: Any) -> Any:
        return strip_text(v)

    @field_validator("quantity", "min_stock", mode="before")
    @classmethod
    def coerce_counts(cls, v: Any) -> Any:
        return coerce_count(v)

    @field_validator("price", mode="before")
    @classmethod
    def coerce_price(cls, v: Any) -> Any:
        return coerce_amount(v)


class ProductCreate(ProductBase):
    """创建商品"""
    pass


class ProductUpdate(ProductBase):
    """更新商品（只修改传入的字段）"""
    name: Optional[str] = Field(None, max_length=100)
    category: Optional[str] = Field(None, max_length=50)
    quantity: Optional[int] = None
    min_stock: Optional[int] = None


class ProductResponse(BaseModel):
    """商品响应"""
    id: int
    name: str
    category: str = ""
    quantity: int = 0
    price: float = 0.0
    min_stock: int = 0
    stock_status: StockStatus
    stock_status_display: str = ""
    created_at: datetime
    updated_at: datetime

    @field_validator("price", mode="before")
    @classmethod
    def fix_null_price(cls, v: Any) -> float:
        return fix_null_amount(v)

    class Config:
        from_attributes = True


class ProductListResponse(BaseModel):
    """商品列表响应"""
    data: List[ProductResponse]
    total: int
    page: int
    limit: int
    stats: StockStatsResponse
