"""
商品模型 - 库存商品
库存状态由数量和最低库存派生，不单独存储
"""

from datetime import datetime
from decimal import Decimal
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, DECIMAL

from bizdash.db.base import Base
from bizdash.services.stock_status import StockStatus, classify_stock


class Product(Base):
    """商品"""
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    name = Column(String(100), nullable=False, index=True, comment="品名")
    category = Column(String(50), nullable=False, default="", comment="分类")
    quantity = Column(Integer, nullable=False, default=0, comment="当前库存")
    price = Column(DECIMAL(12, 2), nullable=False, default=Decimal("0.00"), comment="单价")
    min_stock = Column(Integer, nullable=False, default=0, comment="最低库存")

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<Product {self.id}: {self.name} x{self.quantity}>"

    @property
    def stock_status(self) -> StockStatus:
        return classify_stock(self.quantity, self.min_stock)

    @property
    def stock_status_display(self) -> str:
        return self.stock_status.label
