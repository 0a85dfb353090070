"""单据明细API

明细金额 = 数量 × 单价，每次保存前重新计算；
选择商品时带出商品名称和单价。
"""

from typing import Any, Dict, Set

from bizdash.api.api_v1.crud import EntitySchema, ResourceContext, build_crud_router
from bizdash.api.api_v1.selection import fill_name, fill_price, load_selected
from bizdash.core.config import settings
from bizdash.models.invoice import Purchase, Sale
from bizdash.models.line_item import PurchaseItem, SaleItem
from bizdash.models.product import Product
from bizdash.schemas.line_item import (
    SaleItemCreate, SaleItemUpdate, SaleItemResponse, SaleItemListResponse,
    PurchaseItemCreate, PurchaseItemUpdate, PurchaseItemResponse, PurchaseItemListResponse
)
from bizdash.schemas.statistics import LineItemStatsResponse
from bizdash.services.aggregators import summarize_line_items
from bizdash.services.calculations import compute_line_total, to_cents
from bizdash.services.filters import FilterSpec


def _resolver(parent_model: Any, parent_label: str, parent_field: str):
    async def resolve(ctx: ResourceContext, data: Dict[str, Any], provided: Set[str]) -> Dict[str, Any]:
        # 单据必须属于当前用户
        await load_selected(ctx, parent_model, parent_label, data.get(parent_field))
        product = await load_selected(ctx, Product, "Product", data.get("product_id"))
        fill_name(data, provided, "product_id", "product_name", product)
        fill_price(data, provided, "product_id", product)
        return data
    return resolve


async def derive_line_total(ctx: ResourceContext, data: Dict[str, Any], provided: Set[str]) -> Dict[str, Any]:
    # 单价先按分取整，金额与入库的单价一致
    data["price"] = to_cents(data.get("price"), strict=settings.STRICT_NUMBERS, field="price")
    data["total"] = compute_line_total(data.get("quantity"), data.get("price"), strict=settings.STRICT_NUMBERS)
    return data


def _line_item_schema(kind, label, plural, model, parent_model, parent_label, parent_field, schemas) -> EntitySchema:
    create_schema, update_schema, response_schema, list_schema = schemas
    return EntitySchema(
        kind=kind,
        label=label,
        plural=plural,
        model=model,
        create_schema=create_schema,
        update_schema=update_schema,
        response_schema=response_schema,
        list_schema=list_schema,
        stats_schema=LineItemStatsResponse,
        summarize=lambda records, today: summarize_line_items(records),
        filter_spec=FilterSpec(search_fields=("product_name", "id")),
        equality_filters=(parent_field,),
        display_field="product_name",
        resolve=_resolver(parent_model, parent_label, parent_field),
        derive=derive_line_total,
    )


sale_item_schema = _line_item_schema(
    "sale_item", "Sale Item", "Sale Items", SaleItem, Sale, "Sale", "sale_id",
    (SaleItemCreate, SaleItemUpdate, SaleItemResponse, SaleItemListResponse),
)
purchase_item_schema = _line_item_schema(
    "purchase_item", "Purchase Item", "Purchase Items", PurchaseItem, Purchase, "Purchase", "purchase_id",
    (PurchaseItemCreate, PurchaseItemUpdate, PurchaseItemResponse, PurchaseItemListResponse),
)

sale_items_router = build_crud_router(sale_item_schema)
purchase_items_router = build_crud_router(purchase_item_schema)
