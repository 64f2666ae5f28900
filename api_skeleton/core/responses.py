"""响应封装：构建系统统一的返回结构并写入 HTTP 响应。

每个接口结果都会被包装为如下结构::

    {
        "message": "...",
        "meta": {"timestamp": "...", "path": "...", "processingTimeMs": 1.234},
        "data": ...
    }

``data`` 仅在提供了负载时出现；``processingTimeMs`` 仅在构造时记录了起始时间时出现。
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from api_skeleton.core.enums import ResponseStatus


class ResponseAlreadySentError(RuntimeError):
    """同一个响应封装被重复发送。"""


def utc_timestamp() -> str:
    """返回毫秒精度、以 ``Z`` 结尾的 ISO-8601 UTC 时间字符串。"""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def request_path(request: Request) -> str:
    """返回请求的原始路径（保留百分号编码），包含查询字符串。"""
    raw_path = request.scope.get("raw_path")
    # 部分服务器的 raw_path 会带上查询字符串
    path = raw_path.split(b"?", 1)[0].decode("latin-1") if raw_path else request.url.path
    query = request.url.query
    return f"{path}?{query}" if query else path


@dataclass
class ApiResponse:
    """统一响应封装，一次构造、一次发送。

    成功与失败两种形态通过 :meth:`success` 与 :meth:`failure` 构造；
    其它状态码（401/403/500）可直接调用构造函数。
    """

    status: ResponseStatus
    message: str
    data: Any = None
    started_at: Optional[float] = None
    _sent: bool = field(default=False, init=False, repr=False, compare=False)

    @classmethod
    def success(cls, message: str, data: Any = None) -> "ApiResponse":
        return cls(ResponseStatus.SUCCESS, message, data, started_at=time.perf_counter())

    @classmethod
    def failure(cls, message: str) -> "ApiResponse":
        return cls(ResponseStatus.BAD_REQUEST, message, started_at=time.perf_counter())

    @property
    def sent(self) -> bool:
        return self._sent

    def build_meta(self, request: Request) -> dict[str, Any]:
        """生成 ``meta`` 元数据，时间戳取序列化时刻。"""
        meta: dict[str, Any] = {
            "timestamp": utc_timestamp(),
            "path": request_path(request),
        }
        if self.started_at is not None:
            elapsed_ms = (time.perf_counter() - self.started_at) * 1000
            meta["processingTimeMs"] = round(max(elapsed_ms, 0.0), 3)
        return meta

    def build_body(self, request: Request) -> dict[str, Any]:
        """按照 ``message``、``meta``、``data`` 组合出统一响应体。"""
        body: dict[str, Any] = {"message": self.message, "meta": self.build_meta(request)}
        if self.data is not None:
            body["data"] = jsonable_encoder(self.data)
        return body

    def send(self, request: Request, extra_headers: Optional[Mapping[str, str]] = None) -> JSONResponse:
        """序列化并生成最终响应，附加额外响应头后返回。

        返回值应由路由直接 ``return``；同一对象再次发送会抛出
        :class:`ResponseAlreadySentError`。
        """
        if self._sent:
            raise ResponseAlreadySentError(
                f"response '{self.message}' has already been sent for {request_path(request)}"
            )
        self._sent = True

        response = JSONResponse(status_code=int(self.status), content=self.build_body(request))
        for name, value in (extra_headers or {}).items():
            response.headers.append(name, value)
        return response
