"""
认证工具
将会话Cookie解析为当前用户，供路由层通过Depends使用
"""
# 标准库导包
import logging
from typing import AsyncGenerator, Optional

# 第三方库导包
from fastapi import Cookie, Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

# 项目内部导包
from config import settings
from models import UserInfo
from storage.database import Database
from storage.repositories.session_repository import SessionRepository

# 配置日志
logger = logging.getLogger(__name__)


def get_database(request: Request) -> Database:
    """获取应用生命周期内创建的数据库句柄"""
    return request.app.state.database


async def get_session(database: Database = Depends(get_database)) -> AsyncGenerator[AsyncSession, None]:
    """
    获取数据库会话的异步生成器

    Yields:
        AsyncSession: 数据库会话对象，请求结束时提交
    """
    async with database.session() as session:
        yield session


async def get_optional_user(
    session_token: Optional[str] = Cookie(None, alias=settings.SESSION_COOKIE_NAME),
    session: AsyncSession = Depends(get_session)
) -> Optional[UserInfo]:
    """
    获取当前用户，未登录返回None

    Args:
        session_token: 会话Cookie
        session: 数据库会话

    Returns:
        UserInfo对象或None
    """
    if not session_token:
        return None

    session_user = await SessionRepository(session).get_session_user(session_token)
    if session_user is None:
        logger.info("会话令牌无效或已注销")
        return None

    return UserInfo(id=session_user.user_id, username=session_user.username)


async def get_current_user(
    user_info: Optional[UserInfo] = Depends(get_optional_user)
) -> UserInfo:
    """
    获取当前用户，未登录时返回401

    Returns:
        UserInfo对象
    """
    if user_info is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return user_info
