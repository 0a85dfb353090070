"""
往来账模型 - 对客户或供应商的借方/贷方记录

净额 = 贷方合计 - 借方合计
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, DECIMAL

from bizdash.db.base import Base


class LedgerEntry(Base):
    """往来账记录"""
    __tablename__ = "ledger_entries"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # customer(客户) / vendor(供应商)
    entity_type = Column(String(20), nullable=False, index=True, comment="往来单位类型")
    # 客户和供应商在两张表里，不加外键
    entity_id = Column(Integer, nullable=True, index=True, comment="往来单位ID")
    entity_name = Column(String(100), nullable=False, comment="往来单位名称")

    # debit(借方) / credit(贷方)
    transaction_type = Column(String(10), nullable=False, index=True, comment="借贷方向")
    amount = Column(DECIMAL(12, 2), nullable=False, comment="金额")
    description = Column(Text, comment="摘要")

    # 关联单据（可选）
    reference_id = Column(String(50), comment="关联单据ID")
    reference_type = Column(String(50), comment="关联单据类型")

    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<LedgerEntry {self.id}: {self.transaction_type} {self.entity_name} ¥{self.amount}>"

    @property
    def type_display(self) -> str:
        type_map = {
            "debit": "Debit",
            "credit": "Credit"
        }
        return type_map.get(self.transaction_type, self.transaction_type)
