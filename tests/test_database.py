"""Tests for the Database handle, foreign keys and the application lifespan."""
# 标准库导包
import logging

# 第三方库导包
import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

# 项目内部导包
from main import create_app, lifespan
from storage import Database
from storage.models import Entry, Session, Tag, User
from storage.repositories import EntryRepository, SessionRepository, TagRepository, UserRepository

MISSING_USER_ID = 424242


class TestOwnerMustExist:

    async def test_entry_for_unknown_user_is_rejected(self, database):
        with pytest.raises(IntegrityError):
            async with database.session() as session:
                await EntryRepository(session).create_entry(user_id=MISSING_USER_ID, type="note")

        async with database.session() as session:
            assert (await session.execute(select(Entry))).first() is None

    async def test_session_for_unknown_user_is_rejected(self, database):
        with pytest.raises(IntegrityError):
            async with database.session() as session:
                await SessionRepository(session).create_session("tok", MISSING_USER_ID, "ua", "127.0.0.1")

        async with database.session() as session:
            assert (await session.execute(select(Session))).first() is None

    async def test_tag_for_unknown_user_is_rejected(self, database):
        # OR IGNORE 不作用于外键约束
        with pytest.raises(IntegrityError):
            async with database.session() as session:
                await TagRepository(session).create_tag(MISSING_USER_ID, "go")

        async with database.session() as session:
            assert (await session.execute(select(Tag))).first() is None


class TestUnitOfWork:

    async def test_commit_on_clean_exit(self, database):
        async with database.session() as session:
            await UserRepository(session).create_user("alice", "h")

        async with database.session() as session:
            assert await UserRepository(session).get_user("alice") is not None

    async def test_rollback_on_error(self, database, caplog):
        caplog.set_level(logging.INFO)

        with pytest.raises(RuntimeError):
            async with database.session() as session:
                await UserRepository(session).create_user("alice", "h")
                raise RuntimeError("boom")

        async with database.session() as session:
            assert (await session.execute(select(User))).first() is None
        assert not [r for r in caplog.records if r.name == "storage.database" and r.levelno >= logging.ERROR]

    async def test_database_error_is_logged(self, database, caplog):
        with pytest.raises(IntegrityError):
            async with database.session() as session:
                await UserRepository(session).create_user("alice", "h")
                await UserRepository(session).create_user("alice", "h")

        assert [r for r in caplog.records if r.name == "storage.database" and r.levelno == logging.ERROR]

    async def test_session_requires_init(self, tmp_path):
        database = Database(url=f"sqlite+aiosqlite:///{tmp_path / 'lazy.sqlite'}", echo=False)

        with pytest.raises(RuntimeError):
            async with database.session():
                pass

    async def test_init_and_close_are_idempotent(self, tmp_path):
        database = Database(url=f"sqlite+aiosqlite:///{tmp_path / 'nested' / 'db.sqlite'}", echo=False)

        await database.init()
        engine = database.engine
        await database.init()
        assert database.engine is engine
        assert (tmp_path / "nested" / "db.sqlite").exists()

        await database.close()
        await database.close()
        assert database.engine is None
        assert database.session_factory is None


async def test_lifespan_opens_and_closes_database(tmp_path):
    database = Database(url=f"sqlite+aiosqlite:///{tmp_path / 'app.sqlite'}", echo=False)
    app = create_app(database)

    async with lifespan(app):
        assert app.state.database is database
        assert database.engine is not None
        async with database.session() as session:
            await UserRepository(session).create_user("alice", "h")

    assert database.engine is None
    assert database.session_factory is None
