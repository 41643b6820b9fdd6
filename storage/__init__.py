"""
Storage层包
提供数据库连接、模型和Repository的统一访问接口
"""
# 项目内部导包
from .database import (
    Base,
    Database,
    get_database_url,
)
from .models import (
    User,
    Session,
    Entry,
    ENTRY_TYPES,
    Image,
    Tag,
    EntryTag,
)
from .repositories import (
    BaseRepository,
    UserRepository,
    SessionRepository,
    EntryRepository,
    ImageRepository,
    TagRepository,
    EntryTagRepository,
)

__all__ = [
    # 数据库连接相关
    "Base",
    "Database",
    "get_database_url",

    # 模型相关
    "User",
    "Session",
    "Entry",
    "ENTRY_TYPES",
    "Image",
    "Tag",
    "EntryTag",

    # Repository相关
    "BaseRepository",
    "UserRepository",
    "SessionRepository",
    "EntryRepository",
    "ImageRepository",
    "TagRepository",
    "EntryTagRepository",
]
