"""认证相关路由定义。"""

from typing import Optional

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from api_skeleton.api.v1.schemas.auth import LoginRequest, LoginResponse
from api_skeleton.api.v1.schemas.common import FailureEnvelope
from api_skeleton.core.responses import ApiResponse
from api_skeleton.services.auth_service import auth_service

router = APIRouter(tags=["Auth"])


@router.post(
    "/login",
    summary="User login",
    response_model=LoginResponse,
    responses={400: {"model": FailureEnvelope, "description": "Missing or invalid credentials"}},
)
def login(request: Request, payload: Optional[LoginRequest] = None) -> JSONResponse:
    """校验凭证；每个分支发送一次响应后立即返回。"""
    username = payload.username if payload else None
    password = payload.password if payload else None

    if not auth_service.has_credentials(username, password):
        return ApiResponse.failure("username or password not found").send(request)

    data = auth_service.login(username, password)
    if data is None:
        return ApiResponse.failure("invalid credentials").send(request)

    return ApiResponse.success("Connection succeded", data).send(request)
