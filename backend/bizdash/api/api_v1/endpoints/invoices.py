"""销售单/采购单API

合计 = 小计 + 税额，每次保存前重新计算
"""

from typing import Any, Dict, Set

from fastapi import APIRouter

from bizdash.api.api_v1.crud import (
    EntitySchema, ResourceContext, add_recalculate_route, build_crud_router
)
from bizdash.api.api_v1.selection import fill_name, load_selected
from bizdash.core.config import settings
from bizdash.models.invoice import Purchase, Sale
from bizdash.models.line_item import PurchaseItem, SaleItem
from bizdash.models.party import Customer, Vendor
from bizdash.schemas.invoice import (
    SaleCreate, SaleUpdate, SaleResponse, SaleListResponse,
    PurchaseCreate, PurchaseUpdate, PurchaseResponse, PurchaseListResponse
)
from bizdash.schemas.statistics import InvoiceStatsResponse
from bizdash.services.aggregators import summarize_invoices
from bizdash.services.calculations import ZERO, compute_invoice_total, to_cents
from bizdash.services.filters import FilterSpec


async def derive_invoice_total(ctx: ResourceContext, data: Dict[str, Any], provided: Set[str]) -> Dict[str, Any]:
    strict = settings.STRICT_NUMBERS
    data["subtotal"] = to_cents(data.get("subtotal"), strict=strict, field="subtotal")
    # 税额未填写按 0 处理
    tax = data.get("tax")
    data["tax"] = ZERO if tax is None else to_cents(tax, strict=strict, field="tax")
    data["total"] = compute_invoice_total(data["subtotal"], data["tax"], strict=strict)
    return data


async def resolve_customer(ctx: ResourceContext, data: Dict[str, Any], provided: Set[str]) -> Dict[str, Any]:
    customer = await load_selected(ctx, Customer, "Customer", data.get("customer_id"))
    fill_name(data, provided, "customer_id", "customer_name", customer)
    return data


async def resolve_vendor(ctx: ResourceContext, data: Dict[str, Any], provided: Set[str]) -> Dict[str, Any]:
    vendor = await load_selected(ctx, Vendor, "Vendor", data.get("vendor_id"))
    fill_name(data, provided, "vendor_id", "vendor_name", vendor)
    return data


sale_schema = EntitySchema(
    kind="sale",
    label="Sale",
    plural="Sales",
    model=Sale,
    create_schema=SaleCreate,
    update_schema=SaleUpdate,
    response_schema=SaleResponse,
    list_schema=SaleListResponse,
    stats_schema=InvoiceStatsResponse,
    summarize=lambda records, today: summarize_invoices(records, "sale_date", today),
    filter_spec=FilterSpec(search_fields=("customer_name", "id"), date_field="sale_date"),
    equality_filters=("status",),
    display_field="customer_name",
    resolve=resolve_customer,
    derive=derive_invoice_total,
)

purchase_schema = EntitySchema(
    kind="purchase",
    label="Purchase",
    plural="Purchases",
    model=Purchase,
    create_schema=PurchaseCreate,
    update_schema=PurchaseUpdate,
    response_schema=PurchaseResponse,
    list_schema=PurchaseListResponse,
    stats_schema=InvoiceStatsResponse,
    summarize=lambda records, today: summarize_invoices(records, "purchase_date", today),
    filter_spec=FilterSpec(search_fields=("vendor_name", "id"), date_field="purchase_date"),
    equality_filters=("status",),
    display_field="vendor_name",
    resolve=resolve_vendor,
    derive=derive_invoice_total,
)

sales_router = APIRouter()
add_recalculate_route(sales_router, sale_schema, SaleItem, "sale_id")
sales_router.include_router(build_crud_router(sale_schema))

purchases_router = APIRouter()
add_recalculate_route(purchases_router, purchase_schema, PurchaseItem, "purchase_id")
purchases_router.include_router(build_crud_router(purchase_schema))
