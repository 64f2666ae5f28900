"""异常处理模块：定义业务异常，并将框架与未预料的异常转换为统一响应。"""

from typing import Any

from fastapi import HTTPException, Request
from fastapi.exception_handlers import http_exception_handler as default_http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from api_skeleton.core.enums import ResponseStatus
from api_skeleton.core.logger import get_request_id, logger
from api_skeleton.core.responses import ApiResponse, request_path
from api_skeleton.middleware.request_id import REQUEST_ID_HEADER

_ENVELOPE_STATUSES = {item.value for item in ResponseStatus}


class AppException(HTTPException):
    """携带统一响应结构的业务异常，方便在全局处理中转换响应体。"""

    def __init__(
        self,
        msg: str,
        status: ResponseStatus = ResponseStatus.BAD_REQUEST,
        data: Any = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        super().__init__(status_code=int(status), detail=msg, headers=headers)
        self.data = data


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
    """将 ``HTTPException`` 转换为统一响应；状态码不在枚举内时沿用框架默认输出。"""
    if exc.status_code not in _ENVELOPE_STATUSES:
        return await default_http_exception_handler(request, exc)
    envelope = ApiResponse(ResponseStatus(exc.status_code), str(exc.detail), getattr(exc, "data", None))
    return envelope.send(request, extra_headers=getattr(exc, "headers", None))


def _serialize(obj: Any) -> Any:
    if isinstance(obj, Exception):
        return str(obj)
    if isinstance(obj, dict):
        return {key: _serialize(value) for key, value in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_serialize(item) for item in obj]
    return obj


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> Response:
    """统一处理请求体验证失败的场景。"""
    logger.info("Request validation failed for %s", request_path(request))
    envelope = ApiResponse(ResponseStatus.BAD_REQUEST, "request validation failed", _serialize(exc.errors()))
    return envelope.send(request)


async def generic_exception_handler(request: Request, exc: Exception) -> Response:
    """兜底处理：记录异常并返回 500 统一响应。

    该处理器运行在所有用户中间件之外，请求 ID 响应头需在此处补齐。
    """
    logger.error("Unhandled error on %s", request_path(request), exc_info=exc)
    request_id = get_request_id()
    extra_headers = {REQUEST_ID_HEADER: request_id} if request_id else None
    envelope = ApiResponse(ResponseStatus.INTERNAL_ERROR, "internal server error")
    return envelope.send(request, extra_headers=extra_headers)
