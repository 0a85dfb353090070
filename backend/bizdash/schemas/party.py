"""客户/供应商Schema（两者字段相同）"""
from datetime import datetime
from decimal import Decimal
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator

from bizdash.schemas.common import blank_to_none, coerce_amount, fix_null_amount, strip_text
from bizdash.schemas.statistics import PartyStatsResponse


class PartyBase(BaseModel):
    name: Optional[str] = Field("", max_length=100, description="名称")
    email: Optional[str] = Field(None, max_length=100, description="邮箱")
    phone: Optional[str] = Field(None, max_length=30, description="电话")
    address: Optional[str] = Field(None, description="地址")
    balance: Optional[Decimal] = Field(Decimal("0"), description="余额")

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v: Any) -> Any:
        return strip_text(v)

    @field_validator("email", "phone", "address", mode="before")
    @classmethod
    def empty_contact_to_none(cls, v: Any) -> Any:
        return blank_to_none(v)

    @field_validator("balance", mode="before")
    @classmethod
    def coerce_balance(cls, v: Any) -> Any:
        return coerce_amount(v)


class PartyCreate(PartyBase):
    pass


class PartyUpdate(PartyBase):
    name: Optional[str] = Field(None, max_length=100)
    balance: Optional[Decimal] = None


class PartyResponse(BaseModel):
    id: int
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    balance: float = 0.0
    created_at: datetime
    updated_at: datetime

    @field_validator("balance", mode="before")
    @classmethod
    def fix_null_balance(cls, v: Any) -> float:
        return fix_null_amount(v)

    class Config:
        from_attributes = True


class PartyListResponse(BaseModel):
    data: List[PartyResponse]
    total: int
    page: int
    limit: int
    stats: PartyStatsResponse
