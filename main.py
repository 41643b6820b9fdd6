"""
S5 Journal 主应用程序

基于FastAPI和Uvicorn，负责数据库句柄的生命周期
"""
# 标准库导包
import logging
from contextlib import asynccontextmanager

# 第三方库导包
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# 项目内部导包
from config import settings
from storage.database import Database
from routers import basic

# 配置日志
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    应用程序生命周期管理
    """
    database: Database = getattr(app.state, "database", None) or Database()
    app.state.database = database

    # 启动时初始化数据库
    try:
        await database.init()
        logger.info("应用程序启动完成")
        yield
    except Exception as e:
        logger.error(f"应用程序启动失败: {str(e)}")
        raise
    finally:
        # 关闭时清理数据库连接
        try:
            await database.close()
            logger.info("应用程序关闭完成")
        except Exception as e:
            logger.error(f"应用程序关闭时发生错误: {str(e)}")


def create_app(database: Database = None) -> FastAPI:
    """
    创建FastAPI应用实例

    Args:
        database: 预先构建的数据库句柄，默认按配置创建

    Returns:
        FastAPI应用
    """
    app = FastAPI(
        title=settings.APP_NAME,
        description="S5 Journal Server",
        version=settings.APP_VERSION,
        docs_url=settings.DOCS_URL,
        redoc_url=settings.REDOC_URL,
        openapi_url=settings.OPENAPI_URL,
        lifespan=lifespan
    )
    if database is not None:
        app.state.database = database

    # 添加CORS中间件
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=settings.CORS_ALLOW_METHODS,
        allow_headers=settings.CORS_ALLOW_HEADERS,
    )

    # 注册路由
    app.include_router(basic.router)
    return app


app = create_app()


def main():
    """
    应用程序入口点
    """
    logging.basicConfig(level=settings.LOG_LEVEL.upper())
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD,
        log_level=settings.LOG_LEVEL,
        workers=settings.WORKERS
    )


if __name__ == "__main__":
    main()
