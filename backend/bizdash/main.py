from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bizdash.api.api_v1.api import api_router as api_v1_router
from bizdash.core.config import settings
from bizdash.core.exceptions import AppError, AuthenticationError, ValidationError
from bizdash.core.logging_config import setup_logging, get_logger
from bizdash.core.notifications import NotificationCenter
from bizdash.db.init_db import ensure_tables_exist

# 初始化日志系统
setup_logging(settings.LOG_LEVEL, settings.LOG_DIR if settings.LOG_TO_FILE else None)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    logger.info("应用启动中...")

    # 确保数据库表存在
    await ensure_tables_exist()
    logger.info("数据库表已就绪")

    yield
    logger.info("应用关闭中...")


app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    description="销售、采购、库存、客户、供应商与往来账管理",
    lifespan=lifespan
)

# 通知收件箱（按用户）
app.state.notifications = NotificationCenter(settings.NOTIFICATION_INBOX_SIZE)

# CORS配置
if settings.cors_origins:
    logger.info(f"配置CORS，允许的源: {settings.cors_origins}")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """业务异常统一转换为 JSON，并给当前用户发送错误通知"""
    content = {"detail": exc.detail}
    if isinstance(exc, ValidationError):
        content["field"] = exc.field
    if isinstance(exc, AuthenticationError):
        content["redirect_to"] = exc.redirect_to or settings.LOGIN_PATH

    user_id = getattr(request.state, "user_id", None)
    if user_id is not None:
        request.app.state.notifications.for_user(user_id).error(exc.title, exc.detail)
    else:
        logger.warning(f"{request.method} {request.url.path} {exc.title}: {exc.detail}")

    return JSONResponse(status_code=exc.status_code, content=content)


logger.info(f"注册API v1路由，前缀: {settings.API_V1_STR}")
app.include_router(api_v1_router, prefix=settings.API_V1_STR)


@app.get("/")
async def root():
    return {"message": settings.PROJECT_NAME}


@app.get("/health")
async def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=8000, log_level="info")
