"""
Storage repositories package.
"""
# 项目内部导包
from .base import BaseRepository
from .user_repository import UserRepository
from .session_repository import SessionRepository
from .entry_repository import EntryRepository, format_manual_date
from .image_repository import ImageRepository
from .tag_repository import TagRepository
from .entry_tag_repository import EntryTagRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "SessionRepository",
    "EntryRepository",
    "format_manual_date",
    "ImageRepository",
    "TagRepository",
    "EntryTagRepository",
]
