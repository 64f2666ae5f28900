"""服务启动入口：使用 uvicorn 在配置的端口上运行应用。"""

import uvicorn

from api_skeleton.core.config import get_settings
from api_skeleton.core.logger import logger


def run() -> None:
    """启动 HTTP 服务；启动失败时记录错误并继续抛出。"""
    from api_skeleton.main import app

    settings = get_settings()
    logger.info("Server is running at http://localhost:%s", settings.port)
    try:
        uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
    except Exception:
        logger.exception("Error running server on port %s", settings.port)
        raise
