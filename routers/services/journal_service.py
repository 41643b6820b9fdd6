"""
日记服务类
处理条目与标签、图片的组合写入，以及按访问者身份的可见性判断
"""
# 标准库导包
import logging
from typing import Optional, List, Union

# 第三方库导包
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

# 项目内部导包
from models import CreateImageData, EntryWithTagsAndImages, UserInfo
from storage.repositories.entry_repository import EntryRepository, ManualDate
from storage.repositories.entry_tag_repository import EntryTagRepository
from storage.repositories.image_repository import ImageRepository
from storage.repositories.tag_repository import TagRepository
from routers.services.exceptions import JournalError, EntryNotFoundError

# 配置日志
logger = logging.getLogger(__name__)


def _clean_tag_names(tag_names: Optional[List[str]]) -> List[str]:
    """去掉空白和重复的标签名，保持原有顺序"""
    names = []
    for name in tag_names or []:
        name = name.strip()
        if name and name not in names:
            names.append(name)
    return names


class JournalService:
    """日记服务类"""

    def __init__(self, session: AsyncSession):
        """
        初始化日记服务

        Args:
            session: 数据库会话
        """
        self.session = session
        self.entry_repo = EntryRepository(session)
        self.image_repo = ImageRepository(session)
        self.tag_repo = TagRepository(session)
        self.entry_tag_repo = EntryTagRepository(session)

    async def _link_tags(self, user_id: int, entry_id: int, tag_names: List[str]) -> None:
        """创建缺失的标签并关联到条目"""
        if not tag_names:
            return

        for name in tag_names:
            await self.tag_repo.create_tag(user_id, name)

        # 按数据库的排序规则解析标签，MySQL下大小写不敏感
        for name in tag_names:
            tag = await self.tag_repo.get_by_name(user_id, name)
            if tag is None:
                raise JournalError(f"Tag {name!r} could not be resolved")
            await self.entry_tag_repo.link_entry_to_tag(entry_id, tag.id)

    async def create_entry_with_tags(
        self,
        user_id: int,
        type: str,
        title: str,
        content: str,
        comment: str = "",
        private: Union[bool, int] = False,
        pinned: Union[bool, int] = False,
        manual_date: ManualDate = None,
        tag_names: Optional[List[str]] = None,
        images: Optional[List[CreateImageData]] = None
    ) -> int:
        """
        创建条目，创建并关联标签，写入图片

        整个过程在一个SAVEPOINT内完成，任何一步失败都会全部回滚。

        Args:
            user_id: 所有者ID
            type: 条目类型
            title: 标题
            content: 内容
            comment: 备注
            private: 是否私密
            pinned: 是否置顶
            manual_date: 手动指定的日期
            tag_names: 标签名称列表，不存在的标签会被创建
            images: 图片列表

        Returns:
            新条目ID
        """
        names = _clean_tag_names(tag_names)

        try:
            async with self.session.begin_nested():
                result = await self.entry_repo.create_entry(
                    user_id=user_id,
                    type=type,
                    title=title,
                    content=content,
                    comment=comment,
                    private=private,
                    pinned=pinned,
                    manual_date=manual_date
                )
                if not result.rows_affected:
                    raise JournalError("Error creating entry")
                entry_id = result.last_insert_id

                await self._link_tags(user_id, entry_id, names)

                if images and not await self.image_repo.insert_images(images, entry_id, user_id):
                    raise JournalError(f"Error saving images for entry {entry_id}")
        except SQLAlchemyError as e:
            logger.error(f"创建Entry失败，已回滚: user_id={user_id}, error={str(e)}")
            raise JournalError("Error creating entry") from e

        logger.info(f"创建Entry及标签成功: entry_id={entry_id}, tags={names}, images={len(images or [])}")
        return entry_id

    async def update_entry_with_tags(
        self,
        user_id: int,
        entry_id: int,
        title: str,
        content: str,
        comment: str = "",
        private: Union[bool, int] = False,
        pinned: Union[bool, int] = False,
        manual_date: ManualDate = None,
        tag_names: Optional[List[str]] = None
    ) -> None:
        """
        更新条目并追加标签关联（不移除已有标签）

        Args:
            user_id: 所有者ID
            entry_id: 条目ID
            title: 标题
            content: 内容
            comment: 备注
            private: 是否私密
            pinned: 是否置顶
            manual_date: 手动指定的日期
            tag_names: 追加的标签名称列表

        Raises:
            EntryNotFoundError: 条目不存在或不属于该用户
        """
        names = _clean_tag_names(tag_names)

        try:
            async with self.session.begin_nested():
                result = await self.entry_repo.update_entry(
                    user_id=user_id,
                    entry_id=entry_id,
                    title=title,
                    content=content,
                    comment=comment,
                    private=private,
                    pinned=pinned,
                    manual_date=manual_date
                )
                if not result.rows_affected:
                    raise EntryNotFoundError(entry_id)

                await self._link_tags(user_id, entry_id, names)
        except SQLAlchemyError as e:
            logger.error(f"更新Entry失败，已回滚: entry_id={entry_id}, error={str(e)}")
            raise JournalError(f"Error updating entry {entry_id}") from e

        logger.info(f"更新Entry成功: entry_id={entry_id}, tags={names}")

    async def get_visible_entry(
        self,
        owner_id: int,
        entry_id: int,
        viewer: Optional[UserInfo]
    ) -> Optional[EntryWithTagsAndImages]:
        """
        以访问者身份读取某个用户的条目

        只有访问者就是所有者时才能看到私密条目。

        Args:
            owner_id: 条目所有者ID
            entry_id: 条目ID
            viewer: 当前访问者，匿名为None

        Returns:
            条目或None
        """
        logged_in = viewer is not None and viewer.id == owner_id
        return await self.entry_repo.get_entry(owner_id, entry_id, logged_in)

    async def get_visible_entries(
        self,
        owner_id: int,
        type: str,
        viewer: Optional[UserInfo],
        limit: Optional[int] = None,
        offset: int = 0
    ) -> List[EntryWithTagsAndImages]:
        """以访问者身份读取某个用户某类型的条目列表"""
        logged_in = viewer is not None and viewer.id == owner_id
        return await self.entry_repo.get_entries(owner_id, type, logged_in, limit=limit, offset=offset)
