"""
往来单位模型 - 客户与供应商
两张表字段完全一致
"""

from datetime import datetime
from decimal import Decimal
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, DECIMAL
from sqlalchemy.orm import declared_attr

from bizdash.db.base import Base


class PartyMixin:
    id = Column(Integer, primary_key=True, index=True)

    @declared_attr
    def user_id(cls):
        return Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    name = Column(String(100), nullable=False, index=True, comment="名称")
    email = Column(String(100), comment="邮箱")
    phone = Column(String(30), comment="电话")
    address = Column(Text, comment="地址")
    balance = Column(DECIMAL(12, 2), nullable=False, default=Decimal("0.00"), comment="余额")

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<{type(self).__name__} {self.id}: {self.name}>"


class Customer(PartyMixin, Base):
    """客户"""
    __tablename__ = "customers"


class Vendor(PartyMixin, Base):
    """供应商"""
    __tablename__ = "vendors"
