"""异常处理器的单元测试。"""

import asyncio
import json

from fastapi import HTTPException

from api_skeleton.core.exceptions import generic_exception_handler, http_exception_handler


def test_generic_exception_becomes_internal_error(make_request):
    response = asyncio.run(generic_exception_handler(make_request("/boom"), RuntimeError("boom")))

    assert response.status_code == 500
    body = json.loads(response.body)
    assert body["message"] == "internal server error"
    assert body["meta"]["path"] == "/boom"
    assert "data" not in body


def test_http_exception_in_status_set_becomes_envelope(make_request):
    """401 属于统一响应状态集合，应转换为统一结构并保留响应头。"""
    exc = HTTPException(status_code=401, detail="unauthorized", headers={"WWW-Authenticate": "Bearer"})
    response = asyncio.run(http_exception_handler(make_request("/api/v1/users"), exc))

    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"
    body = json.loads(response.body)
    assert body["message"] == "unauthorized"
    assert body["meta"]["path"] == "/api/v1/users"


def test_http_exception_outside_status_set_uses_default(make_request):
    response = asyncio.run(http_exception_handler(make_request(), HTTPException(status_code=409, detail="conflict")))

    assert response.status_code == 409
    assert json.loads(response.body) == {"detail": "conflict"}
