from typing import List
import logging

from pydantic import Field
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    PROJECT_NAME: str = "Business Dashboard"
    API_V1_STR: str = "/api/v1"

    # 数据库配置（异步驱动）
    DATABASE_URI: str = "sqlite+aiosqlite:///./bizdash.db"
    SQL_DEBUG: bool = False

    # CORS配置，逗号分隔
    BACKEND_CORS_ORIGINS: str = "http://localhost:3000,http://127.0.0.1:3000"

    # 未登录时前端应跳转的路径
    LOGIN_PATH: str = "/login"

    # 数值输入：False 时非法数值按 0 处理，True 时直接拒绝
    STRICT_NUMBERS: bool = Field(
        default=False,
        description="拒绝非数字输入，而不是按 0 处理"
    )

    # 分页
    DEFAULT_PAGE_LIMIT: int = 20
    MAX_PAGE_LIMIT: int = 100

    # 每个用户保留的最近通知条数
    NOTIFICATION_INBOX_SIZE: int = 50

    # 日志
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    LOG_TO_FILE: bool = True

    class Config:
        case_sensitive = True
        env_file = ".env"

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.BACKEND_CORS_ORIGINS.split(",") if origin.strip()]


settings = Settings()
logger.info(f"加载配置: API_V1_STR={settings.API_V1_STR}, CORS={settings.cors_origins}")
