"""
数据模型定义

Repository对外返回的记录类型。持久化行与带标签/图片的条目是两种类型，
后者通过组合构建，不修改原始记录。
"""
# 标准库导包
from datetime import datetime
from typing import Optional, List

# 第三方库导包
from pydantic import BaseModel, ConfigDict, Field


class UserInfo(BaseModel):
    """已认证的调用者"""
    id: int
    username: str


class MutationResult(BaseModel):
    """写操作结果"""
    rows_affected: int
    last_insert_id: Optional[int] = None


# ========== 持久化记录 ==========

class UserRecord(BaseModel):
    """用户记录，包含密码哈希"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    pwhash: str
    created_at: datetime
    updated_at: datetime


class SessionRecord(BaseModel):
    """会话记录"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    uuid: str
    user_id: int
    user_agent: Optional[str] = None
    ip: Optional[str] = None
    created_at: datetime


class SessionUser(BaseModel):
    """会话令牌解析出的用户"""
    username: str
    user_id: int


class TagRecord(BaseModel):
    """标签记录"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    name: str


class ImageRecord(BaseModel):
    """图片记录"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    entry_id: int
    user_id: int
    path: str
    comment: str = ""
    preview_data: Optional[str] = None
    exif_data: Optional[str] = None
    created_at: datetime


class EntryRecord(BaseModel):
    """条目记录（不含关联数据）"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    type: str
    title: str
    content: str
    comment: str
    private: bool
    pinned: bool
    created_at: datetime
    updated_at: datetime
    manual_date: Optional[str] = None


class EntryWithTagsAndImages(BaseModel):
    """条目及其读取时刻的全部标签和图片"""
    entry: EntryRecord
    tags: List[TagRecord] = Field(default_factory=list)
    images: List[ImageRecord] = Field(default_factory=list)

    @property
    def id(self) -> int:
        return self.entry.id


# ========== 写操作输入 ==========

class CreateImageData(BaseModel):
    """待写入的图片，预览和EXIF由外部生成"""
    path: str
    comment: str = ""
    preview_data: Optional[str] = None
    exif_data: Optional[str] = None
