"""
统计汇总

每次都对整个记录集重新计算，不做增量更新；求和与顺序无关。
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Iterable, Optional

from bizdash.services.calculations import ZERO, coerce_number
from bizdash.services.records import get_field, to_date
from bizdash.services.stock_status import needs_reorder


@dataclass(frozen=True)
class LedgerStats:
    total_debits: Decimal = ZERO
    total_credits: Decimal = ZERO
    net_balance: Decimal = ZERO


@dataclass(frozen=True)
class InvoiceStats:
    total_value: Decimal = ZERO
    today_value: Decimal = ZERO
    pending_amount: Decimal = ZERO
    total_count: int = 0


@dataclass(frozen=True)
class LineItemStats:
    total_items: int = 0
    total_value: Decimal = ZERO
    avg_price: Decimal = ZERO


@dataclass(frozen=True)
class StockStats:
    total_products: int = 0
    low_stock_alerts: int = 0
    out_of_stock: int = 0
    inventory_value: Decimal = ZERO


@dataclass(frozen=True)
class PartyStats:
    total_parties: int = 0
    total_balance: Decimal = ZERO


def summarize_ledger(entries: Iterable[Any]) -> LedgerStats:
    """
    往来账汇总

    净额 = 贷方合计 - 借方合计；类型不是 debit/credit 的记录不计入。
    """
    debits = ZERO
    credits = ZERO
    for entry in entries:
        amount = coerce_number(get_field(entry, "amount"))
        transaction_type = get_field(entry, "transaction_type")
        if transaction_type == "debit":
            debits += amount
        elif transaction_type == "credit":
            credits += amount
    return LedgerStats(
        total_debits=debits,
        total_credits=credits,
        net_balance=credits - debits,
    )


def summarize_invoices(
    invoices: Iterable[Any],
    date_field: str,
    today: Optional[date] = None,
) -> InvoiceStats:
    """销售单/采购单汇总：总额、今日金额、待付款金额"""
    today = today or date.today()
    total = ZERO
    today_total = ZERO
    pending = ZERO
    count = 0
    for invoice in invoices:
        amount = coerce_number(get_field(invoice, "total"))
        count += 1
        total += amount
        if to_date(get_field(invoice, date_field)) == today:
            today_total += amount
        if get_field(invoice, "status") == "pending":
            pending += amount
    return InvoiceStats(
        total_value=total,
        today_value=today_total,
        pending_amount=pending,
        total_count=count,
    )


def summarize_line_items(items: Iterable[Any]) -> LineItemStats:
    count = 0
    total = ZERO
    for item in items:
        count += 1
        total += coerce_number(get_field(item, "total"))
    avg = total / count if count else ZERO
    return LineItemStats(total_items=count, total_value=total, avg_price=avg)


def summarize_stock(products: Iterable[Any]) -> StockStats:
    """库存预警：低库存提醒包含缺货商品"""
    count = 0
    alerts = 0
    out = 0
    value = ZERO
    for product in products:
        quantity = get_field(product, "quantity")
        min_stock = get_field(product, "min_stock")
        count += 1
        if needs_reorder(quantity, min_stock):
            alerts += 1
        if coerce_number(quantity) == 0:
            out += 1
        value += coerce_number(quantity) * coerce_number(get_field(product, "price"))
    return StockStats(
        total_products=count,
        low_stock_alerts=alerts,
        out_of_stock=out,
        inventory_value=value,
    )


def summarize_parties(parties: Iterable[Any]) -> PartyStats:
    count = 0
    balance = ZERO
    for party in parties:
        count += 1
        balance += coerce_number(get_field(party, "balance"))
    return PartyStats(total_parties=count, total_balance=balance)
