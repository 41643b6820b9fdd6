"""
UserRepository - 用户Repository
"""
# 标准库导包
from typing import Optional

# 第三方库导包
from sqlalchemy import select, insert
from sqlalchemy.ext.asyncio import AsyncSession

# 项目内部导包
from models import MutationResult, UserRecord
from storage.models.user import User
from storage.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """用户Repository，密码校验不在这里进行"""

    def __init__(self, session: AsyncSession):
        super().__init__(session, User)

    async def get_user(self, username: str) -> Optional[UserRecord]:
        """
        根据用户名精确查找用户

        Args:
            username: 用户名

        Returns:
            用户记录（含密码哈希）或None
        """
        result = await self.session.execute(
            select(User).where(User.username == username)
        )
        user = result.scalar_one_or_none()
        return UserRecord.model_validate(user) if user else None

    async def create_user(self, username: str, pwhash: str) -> MutationResult:
        """
        创建用户，用户名重复时抛出 IntegrityError

        Args:
            username: 用户名
            pwhash: 已经计算好的密码哈希

        Returns:
            写操作结果
        """
        result = await self.session.execute(
            insert(User.__table__).values(username=username, pwhash=pwhash)
        )
        return self._to_result(result)
