"""
单据明细模型

明细金额 = 数量 × 单价，始终由服务端重新计算
商品可以从商品表选择，也可以手工录入（product_id 为空）
删除单据时明细随之删除
"""

from datetime import datetime
from decimal import Decimal
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, DECIMAL

from bizdash.db.base import Base


class SaleItem(Base):
    """销售明细"""
    __tablename__ = "sale_items"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    sale_id = Column(Integer, ForeignKey("sales.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="SET NULL"), nullable=True, index=True)

    product_name = Column(String(100), nullable=False, comment="商品名称")
    quantity = Column(Integer, nullable=False, default=1, comment="数量")
    price = Column(DECIMAL(12, 2), nullable=False, comment="单价")
    total = Column(DECIMAL(12, 2), nullable=False, comment="金额")

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<SaleItem {self.id}: {self.product_name} {self.quantity} x {self.price}>"


class PurchaseItem(Base):
    """采购明细"""
    __tablename__ = "purchase_items"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    purchase_id = Column(Integer, ForeignKey("purchases.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="SET NULL"), nullable=True, index=True)

    product_name = Column(String(100), nullable=False, comment="商品名称")
    quantity = Column(Integer, nullable=False, default=1, comment="数量")
    price = Column(DECIMAL(12, 2), nullable=False, comment="单价")
    total = Column(DECIMAL(12, 2), nullable=False, comment="金额")

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<PurchaseItem {self.id}: {self.product_name} {self.quantity} x {self.price}>"
