"""
Services layer
业务逻辑层
"""

from .exceptions import JournalError, EntryNotFoundError
from .journal_service import JournalService

__all__ = [
    "JournalError",
    "EntryNotFoundError",
    "JournalService",
]
