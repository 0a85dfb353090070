"""
演示数据初始化脚本
- 创建（或复用）演示用户
- 清除该用户已有的业务数据
- 创建演示用的商品、客户、供应商、单据和往来账

用法:
    python scripts/init_demo_data.py [username]
"""

import asyncio
import os
import secrets
import sys
from datetime import date, timedelta
from decimal import Decimal

# 添加项目路径
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import delete, select  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from bizdash.db.init_db import ensure_tables_exist  # noqa: E402
from bizdash.db.session import SessionLocal  # noqa: E402
from bizdash.models import (  # noqa: E402
    User, Product, Customer, Vendor, Sale, Purchase, SaleItem, PurchaseItem, LedgerEntry
)
from bizdash.services.calculations import compute_invoice_total, compute_line_total  # noqa: E402

# 按照外键依赖顺序删除
BUSINESS_MODELS = [LedgerEntry, SaleItem, PurchaseItem, Sale, Purchase, Product, Customer, Vendor]


async def get_or_create_user(db: AsyncSession, username: str) -> User:
    user = (await db.execute(select(User).where(User.username == username))).scalar_one_or_none()
    if user is None:
        user = User(username=username, api_token=secrets.token_urlsafe(32))
        db.add(user)
        await db.flush()
        print(f"👤 创建用户: {username}")
    return user


async def clear_user_data(db: AsyncSession, user: User):
    print("🗑️  清除已有业务数据...")
    for model in BUSINESS_MODELS:
        await db.execute(delete(model).where(model.user_id == user.id))


async def create_demo_data(db: AsyncSession, user: User):
    today = date.today()

    print("📦 创建商品...")
    products = [
        Product(user_id=user.id, name="Cordless Drill", category="Tools", quantity=25, price=Decimal("89.00"), min_stock=5),
        Product(user_id=user.id, name="Widget", category="Tools", quantity=4, price=Decimal("2.50"), min_stock=10),
        Product(user_id=user.id, name="Packing Tape", category="Supplies", quantity=0, price=Decimal("3.20"), min_stock=20),
        Product(user_id=user.id, name="Printer Paper", category="Office", quantity=120, price=Decimal("6.75"), min_stock=30),
    ]
    db.add_all(products)

    print("👥 创建客户和供应商...")
    customers = [
        Customer(user_id=user.id, name="Acme Retail", email="orders@acme.example", phone="555-0101"),
        Customer(user_id=user.id, name="Blue Harbor Cafe", email="hello@blueharbor.example"),
    ]
    vendors = [
        Vendor(user_id=user.id, name="Northwind Supply", email="sales@northwind.example", phone="555-0199"),
    ]
    db.add_all(customers + vendors)
    await db.flush()

    print("🧾 创建销售单和采购单...")
    sale = Sale(
        user_id=user.id, customer_id=customers[0].id, customer_name=customers[0].name,
        sale_date=today, tax=Decimal("7.50"), status="pending",
    )
    purchase = Purchase(
        user_id=user.id, vendor_id=vendors[0].id, vendor_name=vendors[0].name,
        purchase_date=today - timedelta(days=3), tax=Decimal("12.00"), status="paid",
    )
    db.add_all([sale, purchase])
    await db.flush()

    sale_items = [
        SaleItem(user_id=user.id, sale_id=sale.id, product_id=products[1].id,
                 product_name=products[1].name, quantity=30, price=Decimal("2.50")),
    ]
    purchase_items = [
        PurchaseItem(user_id=user.id, purchase_id=purchase.id, product_id=products[0].id,
                     product_name=products[0].name, quantity=10, price=Decimal("60.00")),
    ]
    for item in sale_items + purchase_items:
        item.total = compute_line_total(item.quantity, item.price)
    db.add_all(sale_items + purchase_items)

    # 单据金额与明细一致
    sale.subtotal = sum(item.total for item in sale_items)
    sale.total = compute_invoice_total(sale.subtotal, sale.tax)
    purchase.subtotal = sum(item.total for item in purchase_items)
    purchase.total = compute_invoice_total(purchase.subtotal, purchase.tax)

    print("📒 创建往来账...")
    db.add_all([
        LedgerEntry(user_id=user.id, entity_type="customer", entity_id=customers[0].id,
                    entity_name=customers[0].name, transaction_type="debit", amount=sale.total,
                    description="Invoice issued", reference_id=str(sale.id), reference_type="sale"),
        LedgerEntry(user_id=user.id, entity_type="vendor", entity_id=vendors[0].id,
                    entity_name=vendors[0].name, transaction_type="credit", amount=purchase.total,
                    description="Goods received", reference_id=str(purchase.id), reference_type="purchase"),
    ])


async def main(username: str):
    print("=" * 60)
    print("🚀 初始化演示数据")
    print("=" * 60 + "\n")

    await ensure_tables_exist()
    async with SessionLocal() as db:
        try:
            user = await get_or_create_user(db, username)
            await clear_user_data(db, user)
            await create_demo_data(db, user)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

    print("\n✅ 演示数据初始化完成")
    print(f"   用户: {username}")
    print(f"   访问令牌: {user.api_token}")


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else "demo"))
