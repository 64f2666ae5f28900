"""认证服务：校验固定的演示凭证并签发模拟令牌。"""

import secrets
from typing import Optional

from api_skeleton.core.config import get_settings
from api_skeleton.core.logger import logger


class AuthService:
    """封装登录校验逻辑，不涉及真实的用户存储与会话。"""

    @staticmethod
    def has_credentials(username: Optional[str], password: Optional[str]) -> bool:
        return bool(username) and bool(password)

    def login(self, username: str, password: str) -> Optional[dict[str, str]]:
        """凭证匹配时返回用户名与令牌，否则返回 ``None``。"""
        settings = get_settings()
        username_ok = secrets.compare_digest(username.encode(), settings.login_username.encode())
        password_ok = secrets.compare_digest(password.encode(), settings.login_password.encode())
        if not (username_ok and password_ok):
            logger.warning("Login rejected for user %s", username)
            return None

        logger.info("User %s logged in", username)
        return {"username": username, "token": settings.login_token}


auth_service = AuthService()
