"""Database configuration module."""
# 标准库导包
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import AsyncIterator, Optional

# 第三方库导包
from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

# 项目内部导包
from config import settings

# 配置日志
logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all database models."""
    pass


def utcnow() -> datetime:
    """服务端时间戳（UTC，不带时区信息）"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def get_database_url() -> str:
    """构建数据库URL"""
    if settings.DB_BACKEND == "mysql":
        # 从HOST中分离主机和端口
        host_port = settings.DB_HOST
        if ':' in host_port:
            host, port = host_port.split(':')
        else:
            host = host_port
            port = "3306"
        return f"mysql+aiomysql://{settings.DB_USER}:{settings.DB_PASSWORD}@{host}:{port}/{settings.DB_NAME}"

    return f"sqlite+aiosqlite:///{settings.DB_PATH}"


def _enable_sqlite_features(engine: AsyncEngine) -> None:
    """
    为SQLite连接开启外键约束，并由SQLAlchemy自己发出BEGIN

    pysqlite默认的事务处理会让SAVEPOINT失效，这里关闭驱动层的隐式事务。
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


class Database:
    """
    数据库句柄

    进程内只创建一个实例，启动时调用 init()，关闭时调用 close()，
    由调用方显式传递给需要访问数据库的组件。
    """

    def __init__(self, url: Optional[str] = None, echo: Optional[bool] = None):
        """
        初始化数据库句柄（不会立即建立连接）

        Args:
            url: 异步数据库URL，默认根据配置构建
            echo: 是否打印SQL语句，默认跟随DEBUG
        """
        self.url = url or get_database_url()
        self.echo = settings.DEBUG if echo is None else echo
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def is_sqlite(self) -> bool:
        return make_url(self.url).get_backend_name() == "sqlite"

    def _engine_options(self) -> dict:
        if self.is_sqlite:
            return {"echo": self.echo}
        return {
            "pool_size": settings.DB_POOL_SIZE,
            "max_overflow": settings.DB_MAX_CONNECTIONS - settings.DB_POOL_SIZE,
            "pool_recycle": settings.DB_POOL_RECYCLE,
            "pool_timeout": settings.DB_POOL_TIMEOUT,
            "echo": self.echo,
            "echo_pool": self.echo,
        }

    async def init(self, create_tables: bool = True) -> None:
        """
        创建引擎和会话工厂，按需创建所有表

        Args:
            create_tables: 是否执行建表
        """
        if self.engine is not None:
            return

        url = make_url(self.url)
        if self.is_sqlite and url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)

        self.engine = create_async_engine(self.url, **self._engine_options())
        if self.is_sqlite:
            _enable_sqlite_features(self.engine)

        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False
        )
        logger.info(f"数据库连接URL: {url.render_as_string(hide_password=True)}")

        if create_tables:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            logger.info("数据库表初始化完成")

    async def close(self) -> None:
        """清理数据库连接"""
        if self.engine is None:
            return
        await self.engine.dispose()
        self.engine = None
        self.session_factory = None
        logger.info("数据库连接已关闭")

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        获取一个工作单元会话

        正常退出时提交，发生异常时回滚并重新抛出。

        Yields:
            AsyncSession: 数据库会话对象
        """
        if self.session_factory is None:
            raise RuntimeError("Database.init() must be awaited before opening a session")

        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except SQLAlchemyError as e:
                logger.error(f"数据库会话发生错误: {str(e)}")
                await session.rollback()
                raise
            except Exception:
                # 业务异常（如401）只回滚，不记为数据库错误
                await session.rollback()
                raise
