"""
EntryTagRepository - 条目标签关联Repository
"""
# 标准库导包
from typing import List

# 第三方库导包
from sqlalchemy import select, insert, delete, and_
from sqlalchemy.ext.asyncio import AsyncSession

# 项目内部导包
from models import MutationResult, TagRecord
from storage.models.entry_tag import EntryTag
from storage.models.tag import Tag
from storage.repositories.base import BaseRepository


class EntryTagRepository(BaseRepository[EntryTag]):
    """条目标签关联Repository"""

    def __init__(self, session: AsyncSession):
        super().__init__(session, EntryTag)

    async def link_entry_to_tag(self, entry_id: int, tag_id: int) -> MutationResult:
        """
        为条目关联标签，关联已存在时忽略

        Args:
            entry_id: 条目ID
            tag_id: 标签ID

        Returns:
            写操作结果，已存在时rows_affected为0
        """
        stmt = (
            insert(EntryTag.__table__)
            .values(entry_id=entry_id, tag_id=tag_id)
            .prefix_with("OR IGNORE", dialect="sqlite")
            .prefix_with("IGNORE", dialect="mysql")
        )
        result = await self.session.execute(stmt)
        return self._to_result(result)

    async def get_tags_by_entry_id(self, entry_id: int) -> List[TagRecord]:
        """
        根据条目ID获取所有标签

        Args:
            entry_id: 条目ID

        Returns:
            标签列表
        """
        result = await self.session.execute(
            select(Tag)
            .join(EntryTag, EntryTag.tag_id == Tag.id)
            .where(EntryTag.entry_id == entry_id)
            .order_by(EntryTag.id.asc())
        )
        return [TagRecord.model_validate(t) for t in result.scalars().all()]

    async def unlink_entry_from_tag(self, entry_id: int, tag_id: int) -> MutationResult:
        """
        从条目移除标签

        Args:
            entry_id: 条目ID
            tag_id: 标签ID

        Returns:
            写操作结果
        """
        result = await self.session.execute(
            delete(EntryTag)
            .where(and_(EntryTag.entry_id == entry_id, EntryTag.tag_id == tag_id))
            .execution_options(synchronize_session=False)
        )
        return self._to_result(result)

    async def delete_by_entry_id(self, entry_id: int) -> int:
        """
        删除指定条目的所有标签关联

        Args:
            entry_id: 条目ID

        Returns:
            删除的关联数量
        """
        result = await self.session.execute(
            delete(EntryTag)
            .where(EntryTag.entry_id == entry_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
