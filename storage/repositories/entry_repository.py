"""
EntryRepository - 条目/记录Repository
"""
# 标准库导包
import logging
from datetime import date, datetime
from typing import Optional, List, Union

# 第三方库导包
from sqlalchemy import select, insert
from sqlalchemy.ext.asyncio import AsyncSession

# 项目内部导包
from models import EntryRecord, EntryWithTagsAndImages, MutationResult
from storage.database import utcnow
from storage.models.entry import Entry, ENTRY_TYPES
from storage.repositories.base import BaseRepository
from storage.repositories.entry_tag_repository import EntryTagRepository
from storage.repositories.image_repository import ImageRepository

# 配置日志
logger = logging.getLogger(__name__)

# 手动日期的存储格式
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# 允许排序的字段
SORTABLE_COLUMNS = ("created_at", "updated_at", "manual_date", "id", "title", "pinned")

ManualDate = Union[str, date, datetime, None]


def format_manual_date(value: ManualDate) -> Optional[str]:
    """
    将手动日期统一为 YYYY-MM-DD HH:mm:ss 文本

    Args:
        value: 日期字符串（ISO格式）、date或datetime，空值返回None

    Returns:
        格式化后的日期字符串或None
    """
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        value = datetime.fromisoformat(value)
    elif not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)

    # 带时区偏移的时间换算为服务器本地时间
    if value.tzinfo is not None:
        value = value.astimezone().replace(tzinfo=None)
    return value.strftime(DATE_FORMAT)


def _check_type(entry_type: str) -> None:
    if entry_type not in ENTRY_TYPES:
        raise ValueError(f"Unknown entry type: {entry_type!r}")


class EntryRepository(BaseRepository[Entry]):
    """条目/记录Repository"""

    def __init__(self, session: AsyncSession):
        super().__init__(session, Entry)
        self.entry_tag_repo = EntryTagRepository(session)
        self.image_repo = ImageRepository(session)

    async def create_entry(
        self,
        user_id: int,
        type: str,
        title: str = "",
        content: str = "",
        comment: str = "",
        private: Union[bool, int] = False,
        pinned: Union[bool, int] = False,
        manual_date: ManualDate = None
    ) -> MutationResult:
        """
        创建条目，created_at总是由服务端写入

        Args:
            user_id: 所有者ID
            type: 条目类型（event/note/task/link）
            title: 标题
            content: 内容
            comment: 备注
            private: 是否私密
            pinned: 是否置顶
            manual_date: 手动指定的日期

        Returns:
            写操作结果，last_insert_id为新条目ID
        """
        _check_type(type)
        result = await self.session.execute(
            insert(Entry.__table__).values(
                user_id=user_id,
                type=type,
                title=title,
                content=content,
                comment=comment,
                private=bool(private),
                pinned=bool(pinned),
                manual_date=format_manual_date(manual_date)
            )
        )
        mutation = self._to_result(result)
        logger.info(f"创建Entry成功: entry_id={mutation.last_insert_id}, user_id={user_id}, type={type}")
        return mutation

    async def _with_tags_and_images(self, entry: Entry) -> EntryWithTagsAndImages:
        """读取条目当前的全部标签和图片"""
        tags = await self.entry_tag_repo.get_tags_by_entry_id(entry.id)
        images = await self.image_repo.get_by_entry_id(entry.id)
        return EntryWithTagsAndImages(
            entry=EntryRecord.model_validate(entry),
            tags=tags,
            images=images
        )

    async def get_entry(
        self,
        user_id: int,
        entry_id: int,
        logged_in: bool = False
    ) -> Optional[EntryWithTagsAndImages]:
        """
        获取单个条目及其标签和图片

        未登录时只返回公开条目。不存在、不属于该用户、私密未登录三种情况都返回None。

        Args:
            user_id: 所有者ID
            entry_id: 条目ID
            logged_in: 调用方是否以所有者身份登录

        Returns:
            条目或None
        """
        query = (
            select(Entry)
            .where(self._owned(entry_id, user_id))
            .execution_options(populate_existing=True)
        )
        if not logged_in:
            query = query.where(Entry.private == False)

        result = await self.session.execute(query)
        entry = result.scalar_one_or_none()
        if entry is None:
            return None
        return await self._with_tags_and_images(entry)

    async def get_entries(
        self,
        user_id: int,
        type: str,
        logged_in: bool = False,
        limit: Optional[int] = None,
        offset: int = 0,
        order_by: str = "created_at"
    ) -> List[EntryWithTagsAndImages]:
        """
        获取用户指定类型的条目列表，按排序字段降序

        Args:
            user_id: 所有者ID
            type: 条目类型
            logged_in: 调用方是否以所有者身份登录
            limit: 限制返回数量，None表示全部
            offset: 偏移量
            order_by: 排序字段

        Returns:
            条目列表
        """
        if order_by not in SORTABLE_COLUMNS:
            logger.warning(f"不支持的排序字段: {order_by}，使用created_at")
            order_by = "created_at"

        query = (
            select(Entry)
            .where(Entry.user_id == user_id, Entry.type == type)
            .execution_options(populate_existing=True)
        )
        if not logged_in:
            query = query.where(Entry.private == False)

        query = query.order_by(getattr(Entry, order_by).desc(), Entry.id.desc())
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)

        result = await self.session.execute(query)
        return [await self._with_tags_and_images(e) for e in result.scalars().all()]

    async def update_entry(
        self,
        user_id: int,
        entry_id: int,
        title: str = "",
        content: str = "",
        comment: str = "",
        private: Union[bool, int] = False,
        pinned: Union[bool, int] = False,
        manual_date: ManualDate = None
    ) -> MutationResult:
        """
        更新条目

        Args:
            user_id: 所有者ID
            entry_id: 条目ID
            title: 标题
            content: 内容
            comment: 备注
            private: 是否私密
            pinned: 是否置顶
            manual_date: 手动指定的日期

        Returns:
            写操作结果，rows_affected为0表示不存在或不属于该用户
        """
        return await self.update_owned(
            entry_id,
            user_id,
            title=title,
            content=content,
            comment=comment,
            private=bool(private),
            pinned=bool(pinned),
            manual_date=format_manual_date(manual_date),
            updated_at=utcnow()
        )

    async def delete_entry(self, entry_id: int, user_id: int) -> MutationResult:
        """
        删除条目，同时删除它的图片和标签关联

        Args:
            entry_id: 条目ID
            user_id: 所有者ID

        Returns:
            写操作结果
        """
        owned = await self.session.execute(
            select(Entry.id).where(self._owned(entry_id, user_id))
        )
        if owned.first() is None:
            return MutationResult(rows_affected=0)

        links = await self.entry_tag_repo.delete_by_entry_id(entry_id)
        images = await self.image_repo.delete_by_entry_id(entry_id, user_id)
        result = await self.delete_owned(entry_id, user_id)
        logger.info(f"删除Entry: entry_id={entry_id}, user_id={user_id}, tags={links}, images={images}")
        return result
