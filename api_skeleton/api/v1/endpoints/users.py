"""用户相关路由定义。"""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from api_skeleton.api.v1.schemas.users import UserListResponse
from api_skeleton.core.responses import ApiResponse
from api_skeleton.services.user_service import user_service

router = APIRouter(tags=["Users"])


@router.get("/users", summary="List users", response_model=UserListResponse)
def list_users(request: Request) -> JSONResponse:
    return ApiResponse.success("Users list", user_service.list_users()).send(request)
