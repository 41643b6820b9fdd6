"""
基础Repository类
"""
# 标准库导包
from typing import TypeVar, Generic, Optional, List, Dict, Any
from abc import ABC

# 第三方库导包
from sqlalchemy.engine import CursorResult
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, and_

# 项目内部导包
from models import MutationResult
from storage.database import Base

# 泛型类型
ModelType = TypeVar('ModelType', bound=Base)


class BaseRepository(Generic[ModelType], ABC):
    """
    基础Repository类，提供按所有者限定的通用CRUD操作

    所有按ID的读写都同时匹配 user_id，不存在与无权访问对调用方不可区分。
    """

    def __init__(self, session: AsyncSession, model: type[ModelType]):
        """
        初始化Repository

        Args:
            session: 数据库会话
            model: 数据库模型类
        """
        self.session = session
        self.model = model

    @staticmethod
    def _to_result(result: CursorResult) -> MutationResult:
        """将游标结果转换为写操作结果"""
        last_insert_id = None
        if result.is_insert and result.rowcount:
            last_insert_id = result.lastrowid
        return MutationResult(rows_affected=max(result.rowcount, 0), last_insert_id=last_insert_id)

    def _owned(self, id: int, user_id: int):
        """按 (user_id, id) 限定的条件"""
        return and_(self.model.user_id == user_id, self.model.id == id)

    async def get_owned(self, id: int, user_id: int) -> Optional[ModelType]:
        """
        获取属于指定用户的单条记录

        Args:
            id: 记录ID
            user_id: 所有者ID

        Returns:
            模型实例或None
        """
        result = await self.session.execute(
            select(self.model)
            .where(self._owned(id, user_id))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def update_owned(self, id: int, user_id: int, **kwargs) -> MutationResult:
        """
        更新属于指定用户的记录

        Args:
            id: 记录ID
            user_id: 所有者ID
            **kwargs: 要更新的字段值

        Returns:
            写操作结果，rows_affected为0表示不存在或不属于该用户
        """
        result = await self.session.execute(
            update(self.model)
            .where(self._owned(id, user_id))
            .values(**kwargs)
            .execution_options(synchronize_session=False)
        )
        return self._to_result(result)

    async def delete_owned(self, id: int, user_id: int) -> MutationResult:
        """
        删除属于指定用户的记录

        Args:
            id: 记录ID
            user_id: 所有者ID

        Returns:
            写操作结果
        """
        result = await self.session.execute(
            delete(self.model)
            .where(self._owned(id, user_id))
            .execution_options(synchronize_session=False)
        )
        return self._to_result(result)

    def _build_filter_conditions(self, filters: Dict[str, Any]) -> List:
        """
        构建过滤条件

        Args:
            filters: 过滤条件字典

        Returns:
            条件列表
        """
        conditions = []

        for key, value in filters.items():
            if not hasattr(self.model, key):
                continue

            column = getattr(self.model, key)

            conditions.append(column == value)

        return conditions

    async def query_by_filters(
        self,
        filters: Dict[str, Any],
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        order_by: Optional[str] = None,
        order_desc: bool = True
    ) -> List[ModelType]:
        """
        根据过滤条件查询记录

        Args:
            filters: 过滤条件字典
            limit: 限制返回数量
            offset: 偏移量
            order_by: 排序字段
            order_desc: 是否降序

        Returns:
            模型实例列表
        """
        conditions = self._build_filter_conditions(filters)
        query = select(self.model).execution_options(populate_existing=True)

        if conditions:
            query = query.where(and_(*conditions))

        if order_by and hasattr(self.model, order_by):
            column = getattr(self.model, order_by)
            if order_desc:
                query = query.order_by(column.desc())
            else:
                query = query.order_by(column.asc())

        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)

        result = await self.session.execute(query)
        return list(result.scalars().all())
