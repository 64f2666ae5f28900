"""API v1 汇总路由：统一挂载所有版本化的子路由。"""

from fastapi import APIRouter

from api_skeleton.api.v1.endpoints import auth, users

api_router = APIRouter()
api_router.include_router(auth.router)
api_router.include_router(users.router)
