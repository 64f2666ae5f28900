"""枚举定义：约束统一响应可使用的状态码。"""

from enum import IntEnum


class ResponseStatus(IntEnum):
    """统一响应允许出现的 HTTP 状态码，集合固定不可扩展。"""

    SUCCESS = 200
    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    FORBIDDEN = 403
    INTERNAL_ERROR = 500
