"""
数据访问 - 按用户隔离的通用增删改查

所有读写都带上 user_id 条件，其他用户的记录一律视为不存在。
数据库异常会回滚会话并转换为 PersistenceError，不做重试。
"""

import logging
from typing import Any, Generic, List, Mapping, Optional, Sequence, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bizdash.core.exceptions import PersistenceError, RecordNotFoundError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")

# 不允许通过 insert/update 修改的字段
PROTECTED_FIELDS = frozenset({"id", "user_id", "created_at", "updated_at"})


class Repository(Generic[ModelT]):
    def __init__(self, db: AsyncSession, model: Type[ModelT], owner_id: int, label: Optional[str] = None):
        self.db = db
        self.model = model
        self.owner_id = owner_id
        self.label = label or model.__name__

    def _scoped(self):
        return select(self.model).where(self.model.user_id == self.owner_id)

    async def _fail(self, action: str, exc: SQLAlchemyError):
        await self.db.rollback()
        reason = str(getattr(exc, "orig", None) or exc)
        logger.error(f"{action} {self.label} 失败: {reason}")
        raise PersistenceError(reason) from exc

    async def list(
        self,
        filters: Optional[Mapping[str, Any]] = None,
        order_by: Sequence[Any] = (),
    ) -> List[ModelT]:
        """查询当前用户的记录，filters 为字段等值条件"""
        query = self._scoped()
        for field, value in (filters or {}).items():
            query = query.where(getattr(self.model, field) == value)
        if order_by:
            query = query.order_by(*order_by)
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as exc:
            await self._fail("查询", exc)
        return list(result.scalars().all())

    async def find(self, record_id: Any) -> Optional[ModelT]:
        try:
            result = await self.db.execute(self._scoped().where(self.model.id == record_id))
        except SQLAlchemyError as exc:
            await self._fail("查询", exc)
        return result.scalar_one_or_none()

    async def get(self, record_id: Any) -> ModelT:
        record = await self.find(record_id)
        if record is None:
            raise RecordNotFoundError(f"{self.label} {record_id} not found.")
        return record

    async def insert(self, data: Mapping[str, Any]) -> ModelT:
        values = {k: v for k, v in data.items() if k not in PROTECTED_FIELDS}
        record = self.model(**values, user_id=self.owner_id)
        self.db.add(record)
        try:
            await self.db.commit()
            await self.db.refresh(record)
        except SQLAlchemyError as exc:
            await self._fail("新增", exc)
        logger.info(f"新增 {self.label} {record.id} (user {self.owner_id})")
        return record

    async def update(self, record_id: Any, patch: Mapping[str, Any]) -> ModelT:
        """修改并返回最新记录"""
        record = await self.get(record_id)
        for field, value in patch.items():
            if field in PROTECTED_FIELDS:
                continue
            setattr(record, field, value)
        try:
            await self.db.commit()
            await self.db.refresh(record)
        except SQLAlchemyError as exc:
            await self._fail("更新", exc)
        logger.info(f"更新 {self.label} {record.id} (user {self.owner_id})")
        return record

    async def delete(self, record_id: Any) -> None:
        record = await self.get(record_id)
        try:
            await self.db.delete(record)
            await self.db.commit()
        except SQLAlchemyError as exc:
            await self._fail("删除", exc)
        logger.info(f"删除 {self.label} {record_id} (user {self.owner_id})")
