"""
EntryTag模型 - 条目标签关联表
"""
# 第三方库导包
from sqlalchemy import Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

# 项目内部导包
from storage.database import Base


class EntryTag(Base):
    """条目标签关联表"""

    __tablename__ = "entry_to_tag"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    entry_id: Mapped[int] = mapped_column(Integer, ForeignKey("entries.id", ondelete="CASCADE"), nullable=False, index=True)
    tag_id: Mapped[int] = mapped_column(Integer, ForeignKey("tags.id", ondelete="CASCADE"), nullable=False, index=True)

    # 唯一索引
    __table_args__ = (
        UniqueConstraint("entry_id", "tag_id", name="uq_entry_tag"),
    )

    def __repr__(self):
        return f"<EntryTag(id={self.id}, entry_id={self.entry_id}, tag_id={self.tag_id})>"
