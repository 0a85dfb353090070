"""往来账Schema"""
from datetime import datetime
from decimal import Decimal
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator

from bizdash.schemas.common import blank_to_none, coerce_amount, fix_null_amount, strip_text
from bizdash.schemas.statistics import LedgerStatsResponse


class LedgerEntryCreate(BaseModel):
    entity_type: Optional[str] = Field("customer", description="customer / vendor")
    entity_id: Optional[int] = Field(None, description="客户或供应商ID（可选）")
    entity_name: Optional[str] = Field("", max_length=100, description="往来单位名称")
    transaction_type: Optional[str] = Field("debit", description="debit / credit")
    amount: Optional[Decimal] = Field(None, description="金额")
    description: Optional[str] = Field(None, description="摘要")
    reference_id: Optional[str] = Field(None, max_length=50, description="关联单据ID")
    reference_type: Optional[str] = Field(None, max_length=50, description="关联单据类型")

    @field_validator("entity_name", mode="before")
    @classmethod
    def strip_name(cls, v: Any) -> Any:
        return strip_text(v)

    @field_validator("description", "reference_id", "reference_type", mode="before")
    @classmethod
    def empty_text_to_none(cls, v: Any) -> Any:
        return blank_to_none(v)

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_amount_field(cls, v: Any) -> Any:
        return coerce_amount(v)


class LedgerEntryUpdate(LedgerEntryCreate):
    entity_type: Optional[str] = None
    entity_name: Optional[str] = Field(None, max_length=100)
    transaction_type: Optional[str] = None


class LedgerEntryResponse(BaseModel):
    id: int
    entity_type: str
    entity_id: Optional[int] = None
    entity_name: str
    transaction_type: str
    type_display: str = ""
    amount: float = 0.0
    description: Optional[str] = None
    reference_id: Optional[str] = None
    reference_type: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @field_validator("amount", mode="before")
    @classmethod
    def fix_null_amount_field(cls, v: Any) -> float:
        return fix_null_amount(v)

    class Config:
        from_attributes = True


class LedgerEntryListResponse(BaseModel):
    data: List[LedgerEntryResponse]
    total: int
    page: int
    limit: int
    stats: LedgerStatsResponse
