# Backend/schemas/folder.py

from datetime import datetime
from typing import Optional, List

from pydantic import BaseModel, Field, field_validator

class FolderCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    parent_folder_id: Optional[str] = None

class FolderUpdate(BaseModel):
    """
    부분 수정(merge-patch).
    ● 필드를 아예 보내지 않으면 → 변경 없음
    ● parent_folder_id 를 null 로 보내면 → 최상위(root)로 이동
    구분은 model_fields_set 으로 합니다.
    """
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    parent_folder_id: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_null(cls, v):
        if v is None:
            raise ValueError("name cannot be null")
        return v

class FolderResponse(BaseModel):
    id: str
    user_id: str
    name: str
    parent_folder_id: Optional[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class FolderNoteItem(BaseModel):
    id: str
    title: str
    is_favorite: bool
    updated_at: datetime

    class Config:
        from_attributes = True

class FolderTreeNode(FolderResponse):
    children: List['FolderTreeNode'] = []
    notes: List[FolderNoteItem] = []

FolderTreeNode.model_rebuild()
