"""商品管理API"""

from typing import Any, List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bizdash.api.api_v1.crud import EntitySchema, build_crud_router, failure_title
from bizdash.core.deps import get_current_user, get_db
from bizdash.db.repository import Repository
from bizdash.models.product import Product
from bizdash.models.user import User
from bizdash.schemas.product import (
    ProductCreate, ProductUpdate, ProductResponse, ProductListResponse
)
from bizdash.schemas.statistics import StockStatsResponse
from bizdash.services.aggregators import summarize_stock
from bizdash.services.filters import FilterSpec

product_schema = EntitySchema(
    kind="product",
    label="Product",
    plural="Products",
    model=Product,
    create_schema=ProductCreate,
    update_schema=ProductUpdate,
    response_schema=ProductResponse,
    list_schema=ProductListResponse,
    stats_schema=StockStatsResponse,
    summarize=lambda records, today: summarize_stock(records),
    filter_spec=FilterSpec(
        search_fields=("name", "category"),
        quantity_field="quantity",
        min_stock_field="min_stock",
    ),
    equality_filters=("category",),
)

router = APIRouter()


@router.get("/categories", response_model=List[str])
async def list_categories(
    *,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
) -> Any:
    """已使用的分类（去重、排序）"""
    repo = Repository(db, Product, user.id, "Product")
    with failure_title("Failed to Fetch Products"):
        products = await repo.list()
    return sorted({p.category for p in products if p.category})


router.include_router(build_crud_router(product_schema))
