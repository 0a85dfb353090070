# 账本与库存计算模块

from bizdash.services.calculations import (
    coerce_number, to_cents, compute_line_total, compute_invoice_total
)
from bizdash.services.stock_status import StockStatus, classify_stock, needs_reorder
from bizdash.services.aggregators import (
    LedgerStats, InvoiceStats, LineItemStats, StockStats, PartyStats,
    summarize_ledger, summarize_invoices, summarize_line_items,
    summarize_stock, summarize_parties
)
from bizdash.services.filters import (
    DateRange, StockFilter, FilterSpec, FilterState, apply_filters
)
from bizdash.services.validation import Violation, validate, ensure_valid

__all__ = [
    "coerce_number",
    "to_cents",
    "compute_line_total",
    "compute_invoice_total",
    "StockStatus",
    "classify_stock",
    "needs_reorder",
    "LedgerStats",
    "InvoiceStats",
    "LineItemStats",
    "StockStats",
    "PartyStats",
    "summarize_ledger",
    "summarize_invoices",
    "summarize_line_items",
    "summarize_stock",
    "summarize_parties",
    "DateRange",
    "StockFilter",
    "FilterSpec",
    "FilterState",
    "apply_filters",
    "Violation",
    "validate",
    "ensure_valid",
]
