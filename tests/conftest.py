"""测试夹具：为 pytest 提供应用客户端与请求对象的共享配置。"""

import os

os.environ.setdefault("PORT", "3000")
os.environ.setdefault("LOG_TO_FILE", "false")

from typing import Callable, Generator

import pytest
from fastapi.testclient import TestClient
from starlette.requests import Request

from api_skeleton.main import app


@pytest.fixture()
def client() -> Generator[TestClient, None, None]:
    """构建 FastAPI TestClient。"""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def make_request() -> Callable[..., Request]:
    """构造不经过路由的裸请求对象，用于直接测试响应封装。"""

    def _make(
        path: str = "/api/v1/users",
        query: str = "",
        method: str = "GET",
        raw_path: bytes | None = None,
    ) -> Request:
        scope = {
            "type": "http",
            "method": method,
            "scheme": "http",
            "server": ("testserver", 80),
            "root_path": "",
            "path": path,
            "raw_path": raw_path if raw_path is not None else path.encode(),
            "query_string": query.encode(),
            "headers": [],
        }
        return Request(scope)

    return _make
