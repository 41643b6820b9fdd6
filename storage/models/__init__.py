"""
Storage models package.
"""
# 项目内部导包
from .user import User
from .session import Session
from .entry import Entry, ENTRY_TYPES
from .image import Image
from .tag import Tag
from .entry_tag import EntryTag

__all__ = [
    "User",
    "Session",
    "Entry",
    "ENTRY_TYPES",
    "Image",
    "Tag",
    "EntryTag",
]
