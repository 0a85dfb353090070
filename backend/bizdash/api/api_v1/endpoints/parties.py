"""客户/供应商管理API"""

from bizdash.api.api_v1.crud import EntitySchema, build_crud_router
from bizdash.models.party import Customer, Vendor
from bizdash.schemas.party import (
    PartyCreate, PartyUpdate, PartyResponse, PartyListResponse
)
from bizdash.schemas.statistics import PartyStatsResponse
from bizdash.services.aggregators import summarize_parties
from bizdash.services.filters import FilterSpec

PARTY_FILTERS = FilterSpec(search_fields=("name", "email", "phone", "address"))


def _party_schema(kind: str, label: str, plural: str, model) -> EntitySchema:
    return EntitySchema(
        kind=kind,
        label=label,
        plural=plural,
        model=model,
        create_schema=PartyCreate,
        update_schema=PartyUpdate,
        response_schema=PartyResponse,
        list_schema=PartyListResponse,
        stats_schema=PartyStatsResponse,
        summarize=lambda records, today: summarize_parties(records),
        filter_spec=PARTY_FILTERS,
    )


customer_schema = _party_schema("customer", "Customer", "Customers", Customer)
vendor_schema = _party_schema("vendor", "Vendor", "Vendors", Vendor)

customers_router = build_crud_router(customer_schema)
vendors_router = build_crud_router(vendor_schema)
