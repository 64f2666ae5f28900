"""配置模块：负责加载、校验并缓存基于环境变量的应用设置。"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict


# 探测项目根目录并加载环境文件，支持通过 ENV_FILE/ENVIRONMENT 定制优先级。
def _detect_base_dir() -> Path:
    """向上遍历目录树，寻找包含 `api_skeleton` 目录的项目根路径。"""
    current = Path(__file__).resolve()
    for candidate in current.parents:
        if (candidate / "api_skeleton").is_dir():
            return candidate
    return current.parent


BASE_DIR = _detect_base_dir()


def _as_bool(value: Optional[str]) -> bool:
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _load_environment() -> None:
    env_file_override = os.getenv("ENV_FILE")
    if env_file_override:
        candidate = BASE_DIR / env_file_override
        if candidate.exists():
            load_dotenv(candidate, override=True, encoding="utf-8")
        return

    base_env = BASE_DIR / ".env"
    if base_env.exists():
        load_dotenv(base_env, override=False, encoding="utf-8")

    environment = os.getenv("ENVIRONMENT")
    if environment is None and _as_bool(os.getenv("DEBUG")):
        environment = "development"

    if environment:
        candidate_name = environment if environment.startswith(".env") else f".env.{environment}"
        candidate_path = BASE_DIR / candidate_name
        if candidate_path.exists():
            load_dotenv(candidate_path, override=True, encoding="utf-8")


_load_environment()


class ConfigurationError(RuntimeError):
    """启动时配置校验失败，一次性列出全部缺失与非法的环境变量。"""

    def __init__(self, missing: list[str], invalid: list[str]) -> None:
        self.missing = missing
        self.invalid = invalid
        parts = []
        if missing:
            parts.append(f"Missing environment variables: {', '.join(missing)}")
        if invalid:
            parts.append(f"Invalid environment variables: {', '.join(invalid)}")
        super().__init__("; ".join(parts) or "Invalid configuration")


class Settings(BaseSettings):
    """
    封装应用运行所需的所有配置项，每个字段都可以通过环境变量重写。
    除 ``PORT`` 外均有默认值，缺少 ``PORT`` 时服务拒绝启动。
    """

    project_name: str = Field(default="API TEST", alias="PROJECT_NAME")
    app_version: str = Field(default="1.0.0", alias="APP_VERSION")
    api_v1_str: str = Field(default="/api/v1", alias="API_V1_STR")
    docs_url: str = Field(default="/api-docs", alias="DOCS_URL")
    debug: bool = Field(default=False, alias="DEBUG")

    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(..., alias="PORT")
    cors_origins_raw: str = Field(default="*", alias="CORS_ORIGINS")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_dir: str = Field(default="log", alias="LOG_DIR")
    log_file_name: str = Field(default="app.log", alias="LOG_FILE_NAME")
    log_json: bool = Field(default=False, alias="LOG_JSON")
    log_to_file: bool = Field(default=False, alias="LOG_TO_FILE")

    # 演示用的固定登录凭证
    login_username: str = Field(default="admin", alias="LOGIN_USERNAME")
    login_password: str = Field(default="password123", alias="LOGIN_PASSWORD")
    login_token: str = Field(default="fake-jwt-token", alias="LOGIN_TOKEN")

    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)

    @property
    def openapi_url(self) -> str:
        """OpenAPI 文档挂载在接口文档路径之下。"""
        return f"{self.docs_url.rstrip('/')}/openapi.json"

    @property
    def cors_origins(self) -> list[str]:
        raw = (self.cors_origins_raw or "").strip()
        return [item.strip() for item in raw.split(",") if item.strip()]

    @property
    def log_directory(self) -> Path:
        """返回日志目录的绝对路径，支持相对路径配置。"""
        path = Path(self.log_dir)
        if not path.is_absolute():
            path = BASE_DIR / path
        return path

    @property
    def log_file_path(self) -> Path:
        return self.log_directory / self.log_file_name


def load_settings() -> Settings:
    """解析环境变量并校验，失败时汇总所有问题后抛出 ``ConfigurationError``。"""
    try:
        return Settings()
    except ValidationError as exc:
        missing: list[str] = []
        invalid: list[str] = []
        for error in exc.errors():
            key = ".".join(str(part) for part in error.get("loc", ()))
            if error.get("type") == "missing":
                missing.append(key)
            else:
                invalid.append(f"{key} ({error.get('msg')})")
        raise ConfigurationError(missing, invalid) from exc


@lru_cache
def get_settings() -> Settings:
    """返回单例化的配置对象，避免重复解析环境变量。"""
    return load_settings()
