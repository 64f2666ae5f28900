"""认证相关的请求与响应模型。"""

from typing import Optional

from pydantic import BaseModel, Field

from api_skeleton.api.v1.schemas.common import ResponseEnvelope


class LoginRequest(BaseModel):
    """登录请求体；字段缺失交由路由返回统一的失败响应。"""

    username: Optional[str] = Field(default=None, examples=["admin"])
    password: Optional[str] = Field(default=None, examples=["password123"])


class LoginResponseData(BaseModel):
    username: str = Field(..., examples=["admin"])
    token: str = Field(..., examples=["fake-jwt-token"])


LoginResponse = ResponseEnvelope[LoginResponseData]
