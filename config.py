"""
应用程序配置
"""
# 标准库导包
import os
from typing import List, Optional

# 第三方库导包
from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """应用程序设置类"""

    # 应用基本信息
    APP_NAME: str = "S5 JOURNAL"
    APP_VERSION: str = "1.0.0"
    POD_ENV: str = Field(default="test", description="运行环境：test/online")
    DEBUG: bool = Field(default_factory=lambda: Settings._get_debug())
    RELOAD: bool = False

    # 服务器配置
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    WORKERS: int = 1

    # 数据库类型：sqlite（默认，嵌入式）或 mysql
    DB_BACKEND: str = Field(default="sqlite", description="数据库类型：sqlite/mysql")

    # SQLite 数据库文件路径
    DB_PATH: str = Field(default="db/db.sqlite", description="SQLite数据库文件路径")

    # MySQL 数据库配置
    DEV_DB_HOST: str = "localhost:3306"
    DEV_DB_USER: str = "root"
    DEV_DB_PASSWORD: str = ""
    ONLINE_DB_HOST: str = "localhost:3306"
    ONLINE_DB_USER: str = "root"
    ONLINE_DB_PASSWORD: str = ""
    DB_NAME: str = "s5_journal"

    # 数据库连接池配置（仅MySQL使用）
    DB_POOL_SIZE: int = 10
    DB_MAX_CONNECTIONS: int = 20
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 3600

    # 会话配置
    SESSION_COOKIE_NAME: str = Field(default="session", description="会话Cookie名称")

    # CORS配置
    CORS_ORIGINS: List[str] = ["*"]
    CORS_ALLOW_CREDENTIALS: bool = True
    CORS_ALLOW_METHODS: List[str] = ["*"]
    CORS_ALLOW_HEADERS: List[str] = ["*"]

    # 日志配置
    LOG_LEVEL: str = "info"

    @staticmethod
    def _get_debug() -> bool:
        """获取DEBUG模式，基于POD_ENV环境变量"""
        return os.getenv("POD_ENV", "test").lower() != "online"

    # 根据环境变量设置当前数据库配置
    @property
    def DB_HOST(self) -> str:
        if self.POD_ENV == "online":
            return self.ONLINE_DB_HOST
        else:  # 默认使用开发环境
            return self.DEV_DB_HOST

    @property
    def DB_USER(self) -> str:
        if self.POD_ENV == "online":
            return self.ONLINE_DB_USER
        else:
            return self.DEV_DB_USER

    @property
    def DB_PASSWORD(self) -> str:
        if self.POD_ENV == "online":
            return self.ONLINE_DB_PASSWORD
        else:
            return self.DEV_DB_PASSWORD

    # API文档配置
    @property
    def DOCS_URL(self) -> Optional[str]:
        return "/docs" if self.DEBUG else None

    @property
    def REDOC_URL(self) -> Optional[str]:
        return "/redoc" if self.DEBUG else None

    @property
    def OPENAPI_URL(self) -> Optional[str]:
        return "/openapi.json" if self.DEBUG else None

    class Config:
        """Pydantic配置"""
        env_file = ".env"  # 支持从.env文件读取配置
        env_file_encoding = "utf-8"
        case_sensitive = True


# 创建设置实例
settings = Settings()
