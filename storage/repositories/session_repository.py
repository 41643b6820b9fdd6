"""
SessionRepository - 登录会话Repository
"""
# 标准库导包
import logging
from typing import Optional, List

# 第三方库导包
from sqlalchemy import select, insert, delete
from sqlalchemy.ext.asyncio import AsyncSession

# 项目内部导包
from models import MutationResult, SessionRecord, SessionUser
from storage.models.session import Session
from storage.models.user import User
from storage.repositories.base import BaseRepository

# 配置日志
logger = logging.getLogger(__name__)


class SessionRepository(BaseRepository[Session]):
    """登录会话Repository"""

    def __init__(self, session: AsyncSession):
        super().__init__(session, Session)

    async def create_session(
        self,
        uuid: str,
        user_id: int,
        user_agent: Optional[str],
        host: Optional[str]
    ) -> MutationResult:
        """
        创建会话，创建时间由服务端写入

        uuid重复时抛出 IntegrityError，由调用方处理。

        Args:
            uuid: 会话令牌
            user_id: 用户ID
            user_agent: 客户端UA
            host: 客户端地址

        Returns:
            写操作结果
        """
        result = await self.session.execute(
            insert(Session.__table__).values(
                uuid=uuid,
                user_id=user_id,
                user_agent=user_agent,
                ip=host
            )
        )
        logger.info(f"创建会话: user_id={user_id}, ip={host}")
        return self._to_result(result)

    async def destroy_session(self, uuid: str) -> MutationResult:
        """
        删除会话，令牌不存在时影响行数为0

        Args:
            uuid: 会话令牌

        Returns:
            写操作结果
        """
        result = await self.session.execute(
            delete(Session)
            .where(Session.uuid == uuid)
            .execution_options(synchronize_session=False)
        )
        return self._to_result(result)

    async def destroy_user_sessions(self, user_id: int) -> MutationResult:
        """
        撤销用户的全部会话

        Args:
            user_id: 用户ID

        Returns:
            写操作结果
        """
        result = await self.session.execute(
            delete(Session)
            .where(Session.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        logger.info(f"撤销用户会话: user_id={user_id}, count={result.rowcount}")
        return self._to_result(result)

    async def get_session_user(self, uuid: str) -> Optional[SessionUser]:
        """
        根据会话令牌解析用户

        Args:
            uuid: 会话令牌

        Returns:
            会话用户，None表示未认证
        """
        result = await self.session.execute(
            select(User.username, Session.user_id)
            .join(User, Session.user_id == User.id)
            .where(Session.uuid == uuid)
        )
        row = result.first()
        if row is None:
            return None
        return SessionUser(username=row.username, user_id=row.user_id)

    async def get_user_sessions(self, user_id: int) -> List[SessionRecord]:
        """
        获取用户的全部会话，最新的在前

        Args:
            user_id: 用户ID

        Returns:
            会话列表
        """
        sessions = await self.query_by_filters(
            filters={"user_id": user_id},
            order_by="id",
            order_desc=True
        )
        return [SessionRecord.model_validate(s) for s in sessions]
