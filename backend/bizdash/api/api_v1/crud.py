"""
通用增删改查路由

各资源的接口流程完全相同：
  列表：查询当前用户的全部记录 → 内存筛选 → 分页，统计基于全部记录
  新增/修改：关联选择补全 → 校验（遇到第一条错误即停止）→ 派生字段计算 → 保存
  删除：显式删除
新增和修改都返回保存后的记录，调用方无需重新拉取列表。
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Awaitable, Callable, Dict, Optional, Sequence, Set, Tuple, Type

from fastapi import APIRouter, Depends, Query, Request
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from bizdash.core.config import settings
from bizdash.core.deps import get_current_user, get_db, get_notifier, get_today
from bizdash.core.exceptions import PersistenceError, ValidationError
from bizdash.core.notifications import Notifier
from bizdash.db.repository import Repository
from bizdash.models.user import User
from bizdash.schemas.statistics import StatsModel
from bizdash.services.calculations import ZERO, coerce_number, compute_invoice_total
from bizdash.services.filters import DateRange, FilterSpec, FilterState, StockFilter, apply_filters
from bizdash.services.validation import ensure_valid

logger = logging.getLogger(__name__)


@dataclass
class ResourceContext:
    """一次请求内的数据库会话和当前用户"""
    db: AsyncSession
    user: User

    def repository(self, model: Any, label: Optional[str] = None) -> Repository:
        return Repository(self.db, model, self.user.id, label)


# (上下文, 待保存数据, 调用方显式传入的字段) -> 待保存数据
Hook = Callable[[ResourceContext, Dict[str, Any], Set[str]], Awaitable[Dict[str, Any]]]


@dataclass(frozen=True)
class EntitySchema:
    """一种资源的描述，通用路由据此生成接口"""
    kind: str                 # 校验规则名
    label: str                # 单数显示名，用于通知
    plural: str
    model: Any
    create_schema: Type[BaseModel]
    update_schema: Type[BaseModel]
    response_schema: Type[BaseModel]
    list_schema: Type[BaseModel]
    stats_schema: Type[StatsModel]
    summarize: Callable[[Sequence[Any], date], Any]
    filter_spec: FilterSpec = field(default_factory=FilterSpec)
    # 等值筛选：查询参数名与记录字段名相同
    equality_filters: Tuple[str, ...] = ()
    display_field: str = "name"
    resolve: Optional[Hook] = None
    derive: Optional[Hook] = None

    def order_by(self) -> Sequence[Any]:
        return (self.model.created_at.desc(), self.model.id.desc())

    def describe(self, record: Any) -> str:
        return str(getattr(record, self.display_field, None) or self.label)


def drop_required_nulls(model: Any, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    去掉非空列上的 null：新增时使用列默认值，修改时保留原值
    """
    columns = model.__table__.columns
    return {
        name: value for name, value in data.items()
        if value is not None or name not in columns or columns[name].nullable
    }


@contextmanager
def failure_title(title: str):
    """给数据库异常加上通知标题，如 "Failed to Create Product" """
    try:
        yield
    except PersistenceError as exc:
        exc.title = title
        raise


async def prepare_record(
    schema: EntitySchema,
    ctx: ResourceContext,
    data: Dict[str, Any],
    provided: Set[str],
) -> Dict[str, Any]:
    if schema.resolve is not None:
        data = await schema.resolve(ctx, data, provided)
    try:
        ensure_valid(schema.kind, data)
    except ValidationError as exc:
        logger.info(f"{schema.label} 校验失败: {exc.detail}")
        raise
    if schema.derive is not None:
        data = await schema.derive(ctx, data, provided)
    return data


def build_crud_router(schema: EntitySchema) -> APIRouter:
    router = APIRouter()

    @router.get("/", response_model=schema.list_schema)
    async def list_records(
        request: Request,
        *,
        db: AsyncSession = Depends(get_db),
        user: User = Depends(get_current_user),
        today: date = Depends(get_today),
        page: int = Query(1, ge=1),
        limit: int = Query(settings.DEFAULT_PAGE_LIMIT, ge=1, le=settings.MAX_PAGE_LIMIT),
        search: Optional[str] = Query(None, description="搜索"),
        date_range: DateRange = Query(DateRange.ALL, description="日期范围"),
        stock: StockFilter = Query(StockFilter.ALL, description="库存状态"),
    ) -> Any:
        repo = Repository(db, schema.model, user.id, schema.label)
        with failure_title(f"Failed to Fetch {schema.plural}"):
            rows = await repo.list(order_by=schema.order_by())
        records = [schema.response_schema.model_validate(row) for row in rows]

        state = FilterState.build(
            search=search,
            equals={name: request.query_params.get(name) for name in schema.equality_filters},
            date_range=date_range,
            stock=stock,
        )
        filtered = apply_filters(records, state, schema.filter_spec, today)

        # 统计基于全部记录，不受筛选影响
        stats = schema.stats_schema.from_stats(schema.summarize(records, today))
        start = (page - 1) * limit
        return schema.list_schema(
            data=filtered[start:start + limit],
            total=len(filtered),
            page=page,
            limit=limit,
            stats=stats,
        )

    @router.post("/", response_model=schema.response_schema)
    async def create_record(
        *,
        db: AsyncSession = Depends(get_db),
        user: User = Depends(get_current_user),
        notifier: Notifier = Depends(get_notifier),
        payload: schema.create_schema,
    ) -> Any:
        ctx = ResourceContext(db, user)
        data = drop_required_nulls(schema.model, payload.model_dump())
        provided = set(payload.model_fields_set) & set(data)
        data = await prepare_record(schema, ctx, data, provided)
        with failure_title(f"Failed to Create {schema.label}"):
            record = await ctx.repository(schema.model, schema.label).insert(data)
        notifier.success(
            f"{schema.label} Created",
            f"{schema.describe(record)} has been successfully created.",
        )
        return schema.response_schema.model_validate(record)

    @router.get("/{record_id}", response_model=schema.response_schema)
    async def get_record(
        *,
        db: AsyncSession = Depends(get_db),
        user: User = Depends(get_current_user),
        record_id: int,
    ) -> Any:
        repo = Repository(db, schema.model, user.id, schema.label)
        with failure_title(f"Failed to Fetch {schema.label}"):
            record = await repo.get(record_id)
        return schema.response_schema.model_validate(record)

    @router.put("/{record_id}", response_model=schema.response_schema)
    async def update_record(
        *,
        db: AsyncSession = Depends(get_db),
        user: User = Depends(get_current_user),
        notifier: Notifier = Depends(get_notifier),
        record_id: int,
        payload: schema.update_schema,
    ) -> Any:
        ctx = ResourceContext(db, user)
        repo = ctx.repository(schema.model, schema.label)
        title = f"Failed to Update {schema.label}"
        with failure_title(title):
            existing = await repo.get(record_id)

        # 用库里的当前值补齐未传入的字段，整条记录重新校验
        current = {name: getattr(existing, name) for name in schema.create_schema.model_fields}
        patch = drop_required_nulls(schema.model, payload.model_dump(exclude_unset=True))
        data = await prepare_record(schema, ctx, {**current, **patch}, set(patch))

        with failure_title(title):
            record = await repo.update(record_id, data)
        notifier.success(
            f"{schema.label} Updated",
            f"{schema.describe(record)} has been successfully updated.",
        )
        return schema.response_schema.model_validate(record)

    @router.delete("/{record_id}")
    async def delete_record(
        *,
        db: AsyncSession = Depends(get_db),
        user: User = Depends(get_current_user),
        notifier: Notifier = Depends(get_notifier),
        record_id: int,
    ) -> Any:
        repo = Repository(db, schema.model, user.id, schema.label)
        with failure_title(f"Failed to Delete {schema.label}"):
            existing = await repo.get(record_id)
            name = schema.describe(existing)
            await repo.delete(record_id)
        notifier.success(f"{schema.label} Deleted", f"{name} has been successfully deleted.")
        return {"message": "Deleted successfully.", "id": record_id}

    return router


def add_recalculate_route(
    router: APIRouter,
    schema: EntitySchema,
    item_model: Any,
    parent_field: str,
) -> None:
    """
    按明细重算单据：小计 = 明细金额之和，合计 = 小计 + 税额
    读取和写入在同一个会话里，只提交一次
    """

    @router.post("/{record_id}/recalculate", response_model=schema.response_schema)
    async def recalculate_totals(
        *,
        db: AsyncSession = Depends(get_db),
        user: User = Depends(get_current_user),
        notifier: Notifier = Depends(get_notifier),
        record_id: int,
    ) -> Any:
        ctx = ResourceContext(db, user)
        repo = ctx.repository(schema.model, schema.label)
        with failure_title(f"Failed to Update {schema.label}"):
            invoice = await repo.get(record_id)
            items = await ctx.repository(item_model).list(filters={parent_field: record_id})
            subtotal = sum((coerce_number(item.total) for item in items), ZERO)
            record = await repo.update(record_id, {
                "subtotal": subtotal,
                "total": compute_invoice_total(subtotal, invoice.tax),
            })
        notifier.success(
            f"{schema.label} Updated",
            f"Totals of {schema.describe(record)} recalculated from {len(items)} item(s).",
        )
        return schema.response_schema.model_validate(record)
