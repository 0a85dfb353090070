"""
提交前校验

每种记录一组有序规则，遇到第一条不满足的规则即停止，只返回一个原因。
"""

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, Tuple

from bizdash.core.exceptions import ValidationError
from bizdash.services.calculations import coerce_number

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

INVOICE_STATUSES = ("paid", "pending")
ENTITY_TYPES = ("customer", "vendor")
TRANSACTION_TYPES = ("debit", "credit")


@dataclass(frozen=True)
class Violation:
    field: str
    message: str


Rule = Callable[[Mapping[str, Any]], Optional[Violation]]


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def required(field: str, message: str) -> Rule:
    def rule(data: Mapping[str, Any]) -> Optional[Violation]:
        if _blank(data.get(field)):
            return Violation(field, message)
        return None
    return rule


def required_any(fields: Sequence[str], message: str) -> Rule:
    """至少填写其中一个字段（如：选择客户或直接填写名称）"""
    def rule(data: Mapping[str, Any]) -> Optional[Violation]:
        if all(_blank(data.get(f)) for f in fields):
            return Violation(fields[0], message)
        return None
    return rule


def positive(field: str, message: str) -> Rule:
    """必须大于 0，缺失或非数字视为 0"""
    def rule(data: Mapping[str, Any]) -> Optional[Violation]:
        if coerce_number(data.get(field)) <= 0:
            return Violation(field, message)
        return None
    return rule


def non_negative(field: str, message: str) -> Rule:
    """不能为负数，未填写时不检查"""
    def rule(data: Mapping[str, Any]) -> Optional[Violation]:
        value = data.get(field)
        if value is not None and coerce_number(value) < 0:
            return Violation(field, message)
        return None
    return rule


def one_of(field: str, choices: Sequence[str], message: str) -> Rule:
    def rule(data: Mapping[str, Any]) -> Optional[Violation]:
        if data.get(field) not in choices:
            return Violation(field, message)
        return None
    return rule


def email_format(field: str, message: str) -> Rule:
    def rule(data: Mapping[str, Any]) -> Optional[Violation]:
        value = data.get(field)
        if not _blank(value) and not EMAIL_PATTERN.match(str(value)):
            return Violation(field, message)
        return None
    return rule


def _party_rules(label: str) -> Tuple[Rule, ...]:
    return (
        required("name", f"{label} name is required."),
        email_format("email", "Please enter a valid email address."),
        non_negative("balance", "Balance cannot be negative."),
    )


def _invoice_rules(counterparty_field: str, label: str) -> Tuple[Rule, ...]:
    return (
        required(counterparty_field, f"{label} name is required."),
        positive("subtotal", "Subtotal must be greater than zero."),
        non_negative("tax", "Tax cannot be negative."),
        one_of("status", INVOICE_STATUSES, "Status must be either paid or pending."),
    )


def _line_item_rules(parent_field: str, label: str) -> Tuple[Rule, ...]:
    return (
        required(parent_field, f"{label} selection is required."),
        required("product_name", "Product name is required."),
        positive("quantity", "Quantity must be greater than zero."),
        positive("price", "Price must be greater than zero."),
    )


RULES: Dict[str, Tuple[Rule, ...]] = {
    "product": (
        required("name", "Product name is required."),
        required("category", "Category is required."),
        positive("price", "Price must be greater than zero."),
        non_negative("quantity", "Quantity cannot be negative."),
        non_negative("min_stock", "Minimum stock cannot be negative."),
    ),
    "customer": _party_rules("Customer"),
    "vendor": _party_rules("Vendor"),
    "sale": _invoice_rules("customer_name", "Customer"),
    "purchase": _invoice_rules("vendor_name", "Vendor"),
    "sale_item": _line_item_rules("sale_id", "Sale"),
    "purchase_item": _line_item_rules("purchase_id", "Purchase"),
    "ledger_entry": (
        required("entity_type", "Entity type is required."),
        one_of("entity_type", ENTITY_TYPES, "Entity type must be either customer or vendor."),
        required_any(("entity_name", "entity_id"), "Entity selection or name is required."),
        required("transaction_type", "Transaction type is required."),
        one_of("transaction_type", TRANSACTION_TYPES, "Transaction type must be either debit or credit."),
        positive("amount", "Amount must be greater than zero."),
    ),
}


def validate(kind: str, data: Mapping[str, Any]) -> Optional[Violation]:
    """返回第一条不满足的规则，全部通过返回 None"""
    try:
        rules = RULES[kind]
    except KeyError:
        raise ValueError(f"未知的记录类型: {kind}")
    for rule in rules:
        violation = rule(data)
        if violation is not None:
            return violation
    return None


def ensure_valid(kind: str, data: Mapping[str, Any]) -> None:
    violation = validate(kind, data)
    if violation is not None:
        raise ValidationError(violation.message, field=violation.field)
