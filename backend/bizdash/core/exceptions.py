"""
业务异常
- AuthenticationError: 没有有效会话，需要跳转登录
- ValidationError: 提交前的本地校验失败，不会写库
- PersistenceError: 数据库操作失败，状态保持不变，不重试
"""

from typing import Optional


class AppError(Exception):
    """所有业务异常的基类"""

    status_code = 400
    title = "Error"

    def __init__(self, detail: str, *, title: Optional[str] = None):
        super().__init__(detail)
        self.detail = detail
        if title is not None:
            self.title = title


class AuthenticationError(AppError):
    status_code = 401
    title = "Authentication Error"

    def __init__(self, detail: str = "Please log in to continue.", *, redirect_to: Optional[str] = None):
        super().__init__(detail)
        self.redirect_to = redirect_to


class ValidationError(AppError):
    status_code = 422
    title = "Validation Error"

    def __init__(self, detail: str, *, field: Optional[str] = None):
        super().__init__(detail)
        self.field = field


class PersistenceError(AppError):
    status_code = 400
    title = "Persistence Error"


class RecordNotFoundError(PersistenceError):
    """记录不存在，或属于其他用户"""

    status_code = 404
    title = "Not Found"
