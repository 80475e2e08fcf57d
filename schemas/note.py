from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime


class NoteCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    content: str
    markdown_content: Optional[str] = None
    folder_id: Optional[str] = None
    tag_ids: Optional[List[str]] = None


class NoteUpdate(BaseModel):
    """보내지 않은 필드는 그대로 유지. folder_id / markdown_content 는 null 허용."""
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    content: Optional[str] = None
    markdown_content: Optional[str] = None
    folder_id: Optional[str] = None
    is_favorite: Optional[bool] = None
    # 빈 배열이면 모든 태그 해제
    tag_ids: Optional[List[str]] = None

    @field_validator("title", "content", "is_favorite", "tag_ids")
    @classmethod
    def not_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v


class NoteResponse(BaseModel):
    id: str
    user_id: str
    folder_id: Optional[str]
    title: str
    content: str
    markdown_content: Optional[str]
    is_favorite: bool
    created_at: datetime
    updated_at: datetime

    tag_ids: List[str] = []

    class Config:
        from_attributes = True
