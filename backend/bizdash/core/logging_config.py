"""
日志配置

控制台彩色输出；配置了日志目录时，另外按天写入 app_*.log 和 error_*.log
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# 只保留警告以上
QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "aiosqlite")


class ColoredFormatter(logging.Formatter):
    """按级别着色，只用于控制台"""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record):
        # 其他处理器共用同一个 record，不能直接改
        record = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname, self.RESET)
        record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


def _daily_file_handler(log_dir: Path, prefix: str, level: int) -> logging.Handler:
    today = datetime.now().strftime("%Y-%m-%d")
    handler = logging.FileHandler(log_dir / f"{prefix}_{today}.log", encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    return handler


def setup_logging(log_level: str = "INFO", log_dir: Optional[str] = None) -> None:
    """
    配置根日志器，重复调用会替换之前的处理器

    Args:
        log_level: DEBUG / INFO / WARNING / ERROR / CRITICAL
        log_dir: 日志文件目录，为 None 时只输出到控制台
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(ColoredFormatter(LOG_FORMAT, DATE_FORMAT))
    root_logger.addHandler(console_handler)

    if log_dir:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        root_logger.addHandler(_daily_file_handler(path, "app", logging.INFO))
        root_logger.addHandler(_daily_file_handler(path, "error", logging.ERROR))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(f"日志级别 {log_level}，日志目录 {log_dir or '(无)'}")


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
