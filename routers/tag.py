# Backend/routers/tag.py
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from db import get_db
from schemas.tag import TagCreate, TagUpdate, TagResponse
from services import tag_service
from utils.jwt_utils import get_current_user

router = APIRouter(prefix="/api/v1/tags", tags=["Tags"])

@router.get("", response_model=List[TagResponse])
def list_tags(db: Session = Depends(get_db), user=Depends(get_current_user)):
    """현재 사용자 태그 전체 목록 반환(이름순)."""
    return tag_service.get_user_tags(db, user.id)

@router.post("", response_model=TagResponse, status_code=status.HTTP_201_CREATED)
def create_tag(req: TagCreate, db: Session = Depends(get_db), user=Depends(get_current_user)):
    return tag_service.create_tag(db, obj_in=req, owner_id=user.id)

@router.patch("/{tag_id}", response_model=TagResponse)
def update_tag(tag_id: str, req: TagUpdate, db: Session = Depends(get_db), user=Depends(get_current_user)):
    return tag_service.update_tag(db, tag_id, req, user.id)

@router.delete("/{tag_id}")
def delete_tag(tag_id: str, db: Session = Depends(get_db), user=Depends(get_current_user)):
    return tag_service.delete_tag(db, tag_id, user.id)
