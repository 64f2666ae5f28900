"""通用响应封装模型，仅用于生成接口文档。"""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class Meta(BaseModel):
    """每个响应都会附带的元数据。"""

    timestamp: str = Field(..., examples=["2025-04-28T20:15:40.000Z"])
    path: str = Field(..., examples=["/api/v1/users"])
    processingTimeMs: Optional[float] = Field(default=None, examples=[32])


class ResponseEnvelope(BaseModel, Generic[T]):
    """系统统一的响应外层结构。"""

    message: str
    data: Optional[T] = None
    meta: Meta


class FailureEnvelope(BaseModel):
    """失败响应不携带 ``data``。"""

    message: str = Field(..., examples=["username or password not found"])
    meta: Meta
