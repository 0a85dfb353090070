from datetime import datetime
from sqlalchemy import Column, Integer, String, Boolean, DateTime

from bizdash.db.base import Base


class User(Base):
    """登录用户 - 所有业务数据都归属于某个用户"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, index=True, nullable=False)
    # 访问令牌（Authorization: Bearer <api_token>）
    api_token = Column(String(64), unique=True, index=True, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<User {self.id}: {self.username}>"
