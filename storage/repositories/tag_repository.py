"""
TagRepository - 标签Repository
"""
# 标准库导包
from typing import Optional, List

# 第三方库导包
from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncSession

# 项目内部导包
from models import MutationResult, TagRecord
from storage.models.tag import Tag
from storage.repositories.base import BaseRepository


class TagRepository(BaseRepository[Tag]):
    """标签Repository，标签按用户隔离"""

    def __init__(self, session: AsyncSession):
        super().__init__(session, Tag)

    async def create_tag(self, user_id: int, name: str) -> MutationResult:
        """
        创建标签，同一用户下同名标签已存在时忽略

        Args:
            user_id: 用户ID
            name: 标签名称

        Returns:
            写操作结果，已存在时rows_affected为0
        """
        stmt = (
            insert(Tag.__table__)
            .values(user_id=user_id, name=name)
            .prefix_with("OR IGNORE", dialect="sqlite")
            .prefix_with("IGNORE", dialect="mysql")
        )
        result = await self.session.execute(stmt)
        return self._to_result(result)

    async def get_tags(self, user_id: int) -> List[TagRecord]:
        """
        获取用户的全部标签，按创建顺序

        Args:
            user_id: 用户ID

        Returns:
            标签列表
        """
        tags = await self.query_by_filters(
            filters={"user_id": user_id},
            order_by="id",
            order_desc=False
        )
        return [TagRecord.model_validate(t) for t in tags]

    async def get_by_name(self, user_id: int, name: str) -> Optional[TagRecord]:
        """
        根据名称获取用户的标签

        Args:
            user_id: 用户ID
            name: 标签名称

        Returns:
            标签记录或None
        """
        results = await self.query_by_filters(filters={"user_id": user_id, "name": name}, limit=1)
        return TagRecord.model_validate(results[0]) if results else None
