"""
单据模型 - 销售单与采购单

合计 = 小计 + 税额，保存前由服务端计算
状态：
- pending: 待付款
- paid: 已付款
"""

from datetime import date, datetime
from decimal import Decimal
from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey, DECIMAL

from bizdash.db.base import Base

STATUS_DISPLAY = {
    "pending": "Pending",
    "paid": "Paid",
}


class Sale(Base):
    """销售单"""
    __tablename__ = "sales"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    customer_id = Column(Integer, ForeignKey("customers.id", ondelete="SET NULL"), nullable=True, index=True)
    customer_name = Column(String(100), nullable=False, comment="客户名称")
    sale_date = Column(Date, nullable=False, default=date.today, index=True, comment="销售日期")

    subtotal = Column(DECIMAL(12, 2), nullable=False, default=Decimal("0.00"), comment="小计")
    tax = Column(DECIMAL(12, 2), nullable=False, default=Decimal("0.00"), comment="税额")
    total = Column(DECIMAL(12, 2), nullable=False, default=Decimal("0.00"), comment="合计")
    status = Column(String(20), nullable=False, default="pending", index=True, comment="状态")

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<Sale {self.id}: {self.customer_name} ¥{self.total}>"

    @property
    def status_display(self) -> str:
        return STATUS_DISPLAY.get(self.status, self.status)


class Purchase(Base):
    """采购单"""
    __tablename__ = "purchases"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    vendor_id = Column(Integer, ForeignKey("vendors.id", ondelete="SET NULL"), nullable=True, index=True)
    vendor_name = Column(String(100), nullable=False, comment="供应商名称")
    purchase_date = Column(Date, nullable=False, default=date.today, index=True, comment="采购日期")

    subtotal = Column(DECIMAL(12, 2), nullable=False, default=Decimal("0.00"), comment="小计")
    tax = Column(DECIMAL(12, 2), nullable=False, default=Decimal("0.00"), comment="税额")
    total = Column(DECIMAL(12, 2), nullable=False, default=Decimal("0.00"), comment="合计")
    status = Column(String(20), nullable=False, default="pending", index=True, comment="状态")

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<Purchase {self.id}: {self.vendor_name} ¥{self.total}>"

    @property
    def status_display(self) -> str:
        return STATUS_DISPLAY.get(self.status, self.status)
