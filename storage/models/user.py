"""
User模型 - 用户表
"""
# 标准库导包
from datetime import datetime

# 第三方库导包
from sqlalchemy import Integer, String, DateTime
from sqlalchemy.orm import Mapped, mapped_column

# 项目内部导包
from storage.database import Base, utcnow


class User(Base):
    """用户表，用户由外部流程创建"""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    pwhash: Mapped[str] = mapped_column(String(255), nullable=False, comment="密码哈希，校验在外部完成")
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f"<User(id={self.id}, username={self.username})>"
