# models包初始化文件

from bizdash.models.user import User
from bizdash.models.product import Product
from bizdash.models.party import Customer, Vendor
from bizdash.models.invoice import Sale, Purchase
from bizdash.models.line_item import SaleItem, PurchaseItem
from bizdash.models.ledger_entry import LedgerEntry

__all__ = [
    "User",
    "Product",
    "Customer",
    "Vendor",
    "Sale",
    "Purchase",
    "SaleItem",
    "PurchaseItem",
    "LedgerEntry",
]
