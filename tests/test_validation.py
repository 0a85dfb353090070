"""
Tests for bizdash.services.validation: pre-submit rules.
"""

import pytest

from bizdash.core.exceptions import ValidationError
from bizdash.services.validation import ensure_valid, validate

VALID = {
    "product": {"name": "Widget", "category": "Tools", "price": 2.5, "quantity": 4, "min_stock": 10},
    "customer": {"name": "Acme", "email": "a@b.co", "balance": 0},
    "vendor": {"name": "Northwind", "email": None},
    "sale": {"customer_name": "Acme", "subtotal": 75, "tax": 7.5, "status": "pending"},
    "purchase": {"vendor_name": "Northwind", "subtotal": 10, "tax": 0, "status": "paid"},
    "sale_item": {"sale_id": 1, "product_name": "Widget", "quantity": 3, "price": 25},
    "purchase_item": {"purchase_id": 1, "product_name": "Widget", "quantity": 1, "price": 1},
    "ledger_entry": {"entity_type": "customer", "entity_name": "Acme", "transaction_type": "debit", "amount": 100},
}


class TestValidRecords:
    @pytest.mark.parametrize("kind", sorted(VALID))
    def test_passes(self, kind):
        assert validate(kind, VALID[kind]) is None
        ensure_valid(kind, VALID[kind])

    def test_unknown_kind(self):
        with pytest.raises(ValueError):
            validate("invoice", {})


class TestProductRules:
    def test_missing_name(self):
        violation = validate("product", {**VALID["product"], "name": "  "})
        assert violation.field == "name"
        assert violation.message == "Product name is required."

    def test_first_violation_wins(self):
        violation = validate("product", {"name": "Widget", "price": 0, "quantity": -1})
        assert violation.field == "category"

    @pytest.mark.parametrize("price", [0, -1, None, "abc"])
    def test_price_must_be_positive(self, price):
        violation = validate("product", {**VALID["product"], "price": price})
        assert violation.field == "price"

    def test_negative_quantity(self):
        violation = validate("product", {**VALID["product"], "quantity": -1})
        assert violation.message == "Quantity cannot be negative."


class TestPartyRules:
    @pytest.mark.parametrize("email", ["not-an-email", "a@b", "a b@c.d", "@b.co"])
    def test_bad_email(self, email):
        violation = validate("customer", {"name": "Acme", "email": email})
        assert violation.field == "email"
        assert violation.message == "Please enter a valid email address."

    def test_blank_email_is_allowed(self):
        assert validate("vendor", {"name": "Northwind", "email": ""}) is None

    def test_vendor_name_message(self):
        assert validate("vendor", {}).message == "Vendor name is required."


class TestInvoiceRules:
    def test_subtotal_must_be_positive(self):
        violation = validate("sale", {**VALID["sale"], "subtotal": 0})
        assert violation.field == "subtotal"

    def test_negative_tax(self):
        violation = validate("purchase", {**VALID["purchase"], "tax": -0.01})
        assert violation.field == "tax"

    def test_status(self):
        violation = validate("sale", {**VALID["sale"], "status": "overdue"})
        assert violation.field == "status"


class TestLineItemRules:
    def test_parent_required(self):
        violation = validate("sale_item", {**VALID["sale_item"], "sale_id": None})
        assert violation.message == "Sale selection is required."

    def test_quantity_must_be_positive(self):
        violation = validate("purchase_item", {**VALID["purchase_item"], "quantity": 0})
        assert violation.field == "quantity"


class TestLedgerRules:
    def test_entity_type_values(self):
        violation = validate("ledger_entry", {**VALID["ledger_entry"], "entity_type": "supplier"})
        assert violation.field == "entity_type"

    def test_selection_or_name(self):
        data = {**VALID["ledger_entry"], "entity_name": ""}
        assert validate("ledger_entry", data).message == "Entity selection or name is required."
        assert validate("ledger_entry", {**data, "entity_id": 3}) is None

    def test_amount(self):
        violation = validate("ledger_entry", {**VALID["ledger_entry"], "amount": -5})
        assert violation.field == "amount"


class TestEnsureValid:
    def test_raises_single_reason(self):
        with pytest.raises(ValidationError) as exc_info:
            ensure_valid("customer", {"name": "", "email": "bad"})
        assert exc_info.value.detail == "Customer name is required."
        assert exc_info.value.field == "name"
        assert exc_info.value.status_code == 422
