"""
业务异常定义
"""


class JournalError(Exception):
    """日记业务异常基类"""


class EntryNotFoundError(JournalError):
    """条目不存在或不属于当前用户"""

    def __init__(self, entry_id: int):
        super().__init__(f"Entry {entry_id} not found")
        self.entry_id = entry_id
