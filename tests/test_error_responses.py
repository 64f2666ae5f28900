"""异常经过完整中间件链后的统一响应集成测试。"""

import logging
from typing import Generator

import pytest
from fastapi.testclient import TestClient

from api_skeleton.core.enums import ResponseStatus
from api_skeleton.core.exceptions import AppException
from api_skeleton.core.logger import RequestIdFilter
from api_skeleton.main import app


def _raise_runtime_error() -> None:
    raise RuntimeError("boom")


def _raise_forbidden() -> None:
    raise AppException("forbidden area", ResponseStatus.FORBIDDEN, data={"required": "admin"})


def _raise_default_app_exception() -> None:
    raise AppException("quota exceeded")


_TEMPORARY_ROUTES = {
    "/__errors/runtime": _raise_runtime_error,
    "/__errors/forbidden": _raise_forbidden,
    "/__errors/default": _raise_default_app_exception,
}


class _CollectingHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__()
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


@pytest.fixture()
def error_client() -> Generator[TestClient, None, None]:
    """临时挂载会抛出异常的路由，测试结束后移除。"""
    existing = list(app.router.routes)
    for path, endpoint in _TEMPORARY_ROUTES.items():
        app.add_api_route(path, endpoint, methods=["GET"])
    try:
        with TestClient(app, raise_server_exceptions=False) as test_client:
            yield test_client
    finally:
        app.router.routes[:] = existing


@pytest.fixture()
def app_log_records() -> Generator[list[logging.LogRecord], None, None]:
    handler = _CollectingHandler()
    handler.addFilter(RequestIdFilter())
    app_logger = logging.getLogger("api_skeleton")
    app_logger.addHandler(handler)
    try:
        yield handler.records
    finally:
        app_logger.removeHandler(handler)


def test_unhandled_error_returns_envelope_with_request_id(error_client: TestClient, app_log_records):
    """未捕获异常：返回 500 统一响应，并保留请求 ID 响应头与日志字段。"""
    response = error_client.get("/__errors/runtime", headers={"X-Request-ID": "req-500"})

    assert response.status_code == 500
    assert response.headers["X-Request-ID"] == "req-500"
    payload = response.json()
    assert payload["message"] == "internal server error"
    assert payload["meta"]["path"] == "/__errors/runtime"
    assert "data" not in payload

    error_records = [record for record in app_log_records if record.levelno >= logging.ERROR]
    assert error_records
    assert all(record.request_id == "req-500" for record in error_records)


def test_unhandled_error_generates_request_id(error_client: TestClient):
    response = error_client.get("/__errors/runtime")

    assert response.status_code == 500
    assert response.headers.get("X-Request-ID")


def test_app_exception_renders_envelope_with_data(error_client: TestClient):
    """业务异常：按携带的状态码与数据生成统一响应。"""
    response = error_client.get("/__errors/forbidden", headers={"X-Request-ID": "req-403"})

    assert response.status_code == 403
    assert response.headers["X-Request-ID"] == "req-403"
    payload = response.json()
    assert payload["message"] == "forbidden area"
    assert payload["data"] == {"required": "admin"}
    assert payload["meta"]["path"] == "/__errors/forbidden"


def test_app_exception_defaults_to_bad_request(error_client: TestClient):
    response = error_client.get("/__errors/default")

    assert response.status_code == 400
    payload = response.json()
    assert payload["message"] == "quota exceeded"
    assert "data" not in payload
