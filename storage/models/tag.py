"""
Tag模型 - 标签表
"""
# 标准库导包
from datetime import datetime

# 第三方库导包
from sqlalchemy import Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

# 项目内部导包
from storage.database import Base, utcnow


class Tag(Base):
    """标签表，标签按用户隔离"""

    __tablename__ = "tags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, comment="标签名称")
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)

    # 同一用户下标签名唯一
    __table_args__ = (
        UniqueConstraint("user_id", "name", name="uq_user_tag_name"),
    )

    def __repr__(self):
        return f"<Tag(id={self.id}, user_id={self.user_id}, name={self.name})>"
