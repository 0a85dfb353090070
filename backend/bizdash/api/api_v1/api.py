"""V1 API 路由聚合"""
from fastapi import APIRouter

from bizdash.api.api_v1.endpoints import ledger, notifications, products
from bizdash.api.api_v1.endpoints.invoices import purchases_router, sales_router
from bizdash.api.api_v1.endpoints.line_items import purchase_items_router, sale_items_router
from bizdash.api.api_v1.endpoints.parties import customers_router, vendors_router

api_router = APIRouter()

# 库存
api_router.include_router(products.router, prefix="/products", tags=["商品管理"])

# 往来单位
api_router.include_router(customers_router, prefix="/customers", tags=["客户管理"])
api_router.include_router(vendors_router, prefix="/vendors", tags=["供应商管理"])

# 单据
api_router.include_router(sales_router, prefix="/sales", tags=["销售单"])
api_router.include_router(sale_items_router, prefix="/sale-items", tags=["销售明细"])
api_router.include_router(purchases_router, prefix="/purchases", tags=["采购单"])
api_router.include_router(purchase_items_router, prefix="/purchase-items", tags=["采购明细"])

# 往来账
api_router.include_router(ledger.router, prefix="/ledger", tags=["往来账"])

# 通知
api_router.include_router(notifications.router, prefix="/notifications", tags=["通知"])
