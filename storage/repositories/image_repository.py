"""
ImageRepository - 条目图片Repository
"""
# 标准库导包
import logging
from typing import Optional, List

# 第三方库导包
from sqlalchemy import select, insert, delete, and_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

# 项目内部导包
from models import CreateImageData, ImageRecord, MutationResult
from storage.models.image import Image
from storage.repositories.base import BaseRepository

# 配置日志
logger = logging.getLogger(__name__)


class ImageRepository(BaseRepository[Image]):
    """条目图片Repository"""

    def __init__(self, session: AsyncSession):
        super().__init__(session, Image)

    async def insert_images(
        self,
        images: List[CreateImageData],
        entry_id: int,
        user_id: int
    ) -> bool:
        """
        批量写入同一条目的图片

        整批在一个SAVEPOINT内执行，任一条失败则整批回滚。

        Args:
            images: 图片列表
            entry_id: 条目ID
            user_id: 所有者ID

        Returns:
            是否全部写入成功
        """
        try:
            async with self.session.begin_nested():
                for image in images:
                    await self.session.execute(
                        insert(Image.__table__).values(
                            entry_id=entry_id,
                            user_id=user_id,
                            path=image.path,
                            comment=image.comment,
                            preview_data=image.preview_data,
                            exif_data=image.exif_data
                        )
                    )
        except SQLAlchemyError as e:
            logger.warning(f"图片批量写入失败，已回滚: entry_id={entry_id}, count={len(images)}, error={str(e)}")
            return False

        return True

    async def get_image(self, image_id: int, user_id: int) -> Optional[ImageRecord]:
        """
        获取属于指定用户的图片

        Args:
            image_id: 图片ID
            user_id: 所有者ID

        Returns:
            图片记录或None
        """
        image = await self.get_owned(image_id, user_id)
        return ImageRecord.model_validate(image) if image else None

    async def delete_image(self, image_id: int, user_id: int) -> MutationResult:
        """删除属于指定用户的图片"""
        return await self.delete_owned(image_id, user_id)

    async def update_image_comment(self, image_id: int, user_id: int, comment: str) -> MutationResult:
        """更新图片说明"""
        return await self.update_owned(image_id, user_id, comment=comment)

    async def get_by_entry_id(self, entry_id: int) -> List[ImageRecord]:
        """
        根据条目ID获取所有图片

        Args:
            entry_id: 条目ID

        Returns:
            图片列表，按写入顺序
        """
        result = await self.session.execute(
            select(Image)
            .where(Image.entry_id == entry_id)
            .order_by(Image.id.asc())
            .execution_options(populate_existing=True)
        )
        return [ImageRecord.model_validate(i) for i in result.scalars().all()]

    async def delete_by_entry_id(self, entry_id: int, user_id: int) -> int:
        """
        删除指定条目的所有图片

        Args:
            entry_id: 条目ID
            user_id: 所有者ID

        Returns:
            删除的图片数量
        """
        result = await self.session.execute(
            delete(Image)
            .where(and_(Image.entry_id == entry_id, Image.user_id == user_id))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
