"""应用入口：负责创建 FastAPI 实例并注册中间件、异常处理与路由。"""

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.requests import Request
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api_skeleton.api.v1 import api_router
from api_skeleton.core.config import get_settings
from api_skeleton.core.exceptions import (
    generic_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from api_skeleton.core.logger import logger, setup_logging
from api_skeleton.core.responses import ApiResponse
from api_skeleton.middleware.request_id import REQUEST_ID_HEADER, RequestIdMiddleware

settings = get_settings()
setup_logging()

app = FastAPI(
    title=settings.project_name,
    version=settings.app_version,
    debug=settings.debug,
    docs_url=settings.docs_url,
    redoc_url=None,
    openapi_url=settings.openapi_url,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[REQUEST_ID_HEADER],
)
app.add_middleware(RequestIdMiddleware)

app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)


@app.on_event("startup")
async def startup_event() -> None:
    logger.info("SUCCESS - Application ready, docs at %s", settings.docs_url)


@app.get("/", response_class=PlainTextResponse, include_in_schema=False)
async def root() -> str:
    return "Hello World"


@app.get("/health", tags=["_meta"])
async def health_check(request: Request) -> JSONResponse:
    """提供健康检查接口，便于编排器与监控系统探活。"""
    return ApiResponse.success("OK", {"status": "healthy"}).send(request)


app.include_router(api_router, prefix=settings.api_v1_str)
