"""
Image模型 - 条目图片表
"""
# 标准库导包
from datetime import datetime
from typing import Optional

# 第三方库导包
from sqlalchemy import Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

# 项目内部导包
from storage.database import Base, utcnow


class Image(Base):
    """条目图片表"""

    __tablename__ = "images"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    entry_id: Mapped[int] = mapped_column(Integer, ForeignKey("entries.id", ondelete="CASCADE"), nullable=False, index=True)
    # 冗余的所有者字段，用于按用户限定查询
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    path: Mapped[str] = mapped_column(String(500), nullable=False, comment="图片存储路径")
    comment: Mapped[str] = mapped_column(Text, nullable=False, default="")
    preview_data: Mapped[Optional[str]] = mapped_column(Text, nullable=True, comment="预览数据，由外部生成")
    exif_data: Mapped[Optional[str]] = mapped_column(Text, nullable=True, comment="EXIF数据，由外部提取")
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)

    def __repr__(self):
        return f"<Image(id={self.id}, entry_id={self.entry_id}, path={self.path})>"
