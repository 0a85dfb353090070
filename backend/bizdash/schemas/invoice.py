"""销售单/采购单Schema

合计（total）是派生字段，请求中即使传入也会被忽略
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator

from bizdash.schemas.common import coerce_amount, fix_null_amount, strip_text
from bizdash.schemas.statistics import InvoiceStatsResponse


class InvoiceAmounts(BaseModel):
    subtotal: Optional[Decimal] = Field(None, description="小计")
    tax: Optional[Decimal] = Field(Decimal("0"), description="税额")
    status: Optional[str] = Field("pending", description="状态：paid / pending")

    @field_validator("subtotal", "tax", mode="before")
    @classmethod
    def coerce_amounts(cls, v: Any) -> Any:
        return coerce_amount(v)


class InvoiceAmountsResponse(BaseModel):
    subtotal: float = 0.0
    tax: float = 0.0
    total: float = 0.0
    status: str = "pending"
    status_display: str = ""

    @field_validator("subtotal", "tax", "total", mode="before")
    @classmethod
    def fix_null_amounts(cls, v: Any) -> float:
        return fix_null_amount(v)


# ==================== 销售单 ====================

class SaleCreate(InvoiceAmounts):
    customer_id: Optional[int] = Field(None, description="客户ID（可选）")
    customer_name: Optional[str] = Field("", max_length=100, description="客户名称")
    sale_date: date = Field(default_factory=date.today, description="销售日期")

    @field_validator("customer_name", mode="before")
    @classmethod
    def strip_name(cls, v: Any) -> Any:
        return strip_text(v)


class SaleUpdate(SaleCreate):
    customer_name: Optional[str] = Field(None, max_length=100)
    sale_date: Optional[date] = None
    tax: Optional[Decimal] = None
    status: Optional[str] = None


class SaleResponse(InvoiceAmountsResponse):
    id: int
    customer_id: Optional[int] = None
    customer_name: str
    sale_date: date
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class SaleListResponse(BaseModel):
    data: List[SaleResponse]
    total: int
    page: int
    limit: int
    stats: InvoiceStatsResponse


# ==================== 采购单 ====================

class PurchaseCreate(InvoiceAmounts):
    vendor_id: Optional[int] = Field(None, description="供应商ID（可选）")
    vendor_name: Optional[str] = Field("", max_length=100, description="供应商名称")
    purchase_date: date = Field(default_factory=date.today, description="采购日期")

    @field_validator("vendor_name", mode="before")
    @classmethod
    def strip_name(cls, v: Any) -> Any:
        return strip_text(v)


class PurchaseUpdate(PurchaseCreate):
    vendor_name: Optional[str] = Field(None, max_length=100)
    purchase_date: Optional[date] = None
    tax: Optional[Decimal] = None
    status: Optional[str] = None


class PurchaseResponse(InvoiceAmountsResponse):
    id: int
    vendor_id: Optional[int] = None
    vendor_name: str
    purchase_date: date
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class PurchaseListResponse(BaseModel):
    data: List[PurchaseResponse]
    total: int
    page: int
    limit: int
    stats: InvoiceStatsResponse
