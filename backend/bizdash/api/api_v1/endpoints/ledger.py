"""往来账API

统计：借方合计、贷方合计、净额（贷方 - 借方）
"""

from typing import Any, Dict, Set

from bizdash.api.api_v1.crud import EntitySchema, ResourceContext, build_crud_router
from bizdash.api.api_v1.selection import fill_name, load_selected
from bizdash.models.ledger_entry import LedgerEntry
from bizdash.models.party import Customer, Vendor
from bizdash.schemas.ledger import (
    LedgerEntryCreate, LedgerEntryUpdate, LedgerEntryResponse, LedgerEntryListResponse
)
from bizdash.schemas.statistics import LedgerStatsResponse
from bizdash.services.aggregators import summarize_ledger
from bizdash.services.filters import FilterSpec

PARTY_MODELS = {
    "customer": (Customer, "Customer"),
    "vendor": (Vendor, "Vendor"),
}


async def resolve_entity(ctx: ResourceContext, data: Dict[str, Any], provided: Set[str]) -> Dict[str, Any]:
    """按往来单位类型到客户表或供应商表查找"""
    if data.get("entity_type") in PARTY_MODELS:
        model, label = PARTY_MODELS[data["entity_type"]]
        party = await load_selected(ctx, model, label, data.get("entity_id"))
        fill_name(data, provided, "entity_id", "entity_name", party)
    return data


ledger_schema = EntitySchema(
    kind="ledger_entry",
    label="Ledger Entry",
    plural="Ledger Entries",
    model=LedgerEntry,
    create_schema=LedgerEntryCreate,
    update_schema=LedgerEntryUpdate,
    response_schema=LedgerEntryResponse,
    list_schema=LedgerEntryListResponse,
    stats_schema=LedgerStatsResponse,
    summarize=lambda records, today: summarize_ledger(records),
    filter_spec=FilterSpec(search_fields=("entity_name", "description", "id")),
    equality_filters=("entity_type", "transaction_type"),
    display_field="entity_name",
    resolve=resolve_entity,
)

router = build_crud_router(ledger_schema)
