"""
conftest.py
-----------
测试公共fixture：临时SQLite数据库、工作单元会话、用户工厂
"""
# 标准库导包
from typing import Optional

# 第三方库导包
import pytest
from sqlalchemy import func, select

# 项目内部导包
from storage import Database
from storage.repositories import UserRepository


@pytest.fixture
async def database(tmp_path):
    """每个测试一个独立的数据库文件"""
    db = Database(url=f"sqlite+aiosqlite:///{tmp_path / 'test.sqlite'}", echo=False)
    await db.init()
    yield db
    await db.close()


@pytest.fixture
async def session(database):
    """测试期间共用的工作单元，结束时提交"""
    async with database.session() as session:
        yield session


@pytest.fixture
def make_user(session):
    """用户工厂，返回新用户ID"""

    async def _make_user(username: str, pwhash: Optional[str] = None) -> int:
        result = await UserRepository(session).create_user(username, pwhash or f"hash-{username}")
        return result.last_insert_id

    return _make_user


@pytest.fixture
async def alice(make_user):
    return await make_user("alice")


@pytest.fixture
async def bob(make_user):
    return await make_user("bob")


@pytest.fixture
def count_rows(session):
    """统计某个模型的行数"""

    async def _count_rows(model, *conditions) -> int:
        query = select(func.count()).select_from(model)
        if conditions:
            query = query.where(*conditions)
        return await session.scalar(query)

    return _count_rows
