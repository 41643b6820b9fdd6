"""
Entry模型 - 条目/记录表
"""
# 标准库导包
from datetime import datetime
from typing import Optional

# 第三方库导包
from sqlalchemy import String, Text, Boolean, Integer, DateTime, ForeignKey, Index, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column

# 项目内部导包
from storage.database import Base, utcnow

# 条目类型
ENTRY_TYPES = ("event", "note", "task", "link")


class Entry(Base):
    """条目/记录表"""

    __tablename__ = "entries"

    # 核心字段
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    type: Mapped[str] = mapped_column(String(10), nullable=False, comment="类型：event/note/task/link")
    title: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    comment: Mapped[str] = mapped_column(Text, nullable=False, default="")
    private: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, comment="私密条目仅所有者可见")
    pinned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    manual_date: Mapped[Optional[str]] = mapped_column(String(19), nullable=True, comment="手动指定的日期，YYYY-MM-DD HH:mm:ss")

    __table_args__ = (
        Index("idx_user_type_created", "user_id", "type", "created_at"),
        CheckConstraint(
            "type IN ('event', 'note', 'task', 'link')",
            name="ck_entries_type"
        ),
    )

    def __repr__(self):
        return f"<Entry(id={self.id}, user_id={self.user_id}, type={self.type}, private={self.private})>"
