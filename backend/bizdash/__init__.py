"""bizdash - 业务账本与库存服务"""

__version__ = "1.0.0"
