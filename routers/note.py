from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from db import get_db
from schemas.note import NoteCreate, NoteUpdate, NoteResponse
from services import note_service
from services.exceptions import NotFoundError
from services.note_service import serialize_note
from utils.jwt_utils import get_current_user

router = APIRouter(prefix="/api/v1", tags=["Notes"])


# ─────────────────────────────────────────────
# 목록/CRUD
# ─────────────────────────────────────────────
@router.get("/notes", response_model=List[NoteResponse])
def list_notes(
    folder_id: Optional[str] = Query(default=None, description="이 폴더의 노트만"),
    unfiled: bool = Query(default=False, description="폴더에 속하지 않은 노트만"),
    tag_id: Optional[str] = Query(default=None),
    q: Optional[str] = Query(default=None, description="Optional search query (title or content)"),
    is_favorite: Optional[bool] = Query(default=None),
    db: Session = Depends(get_db),
    user = Depends(get_current_user)
):
    notes = note_service.get_user_notes(
        db,
        user.id,
        folder_id=folder_id,
        unfiled=unfiled,
        tag_id=tag_id,
        search=q,
        is_favorite=is_favorite,
    )
    return [serialize_note(db, n) for n in notes]


@router.post("/notes", response_model=NoteResponse, status_code=status.HTTP_201_CREATED)
def create_note(
    req: NoteCreate,
    db: Session = Depends(get_db),
    user = Depends(get_current_user)
):
    note = note_service.create_note(db, obj_in=req, owner_id=user.id)
    return serialize_note(db, note)


@router.get("/notes/{note_id}", response_model=NoteResponse)
def get_note(
    note_id: str,
    db: Session = Depends(get_db),
    user = Depends(get_current_user)
):
    note = note_service.get_note_by_id(db, note_id, user.id)
    if not note:
        raise NotFoundError("Note not found")
    return serialize_note(db, note)


@router.patch("/notes/{note_id}", response_model=NoteResponse)
def update_note(
    note_id: str,
    req: NoteUpdate,
    db: Session = Depends(get_db),
    user = Depends(get_current_user)
):
    note = note_service.update_note(db, note_id, req, user.id)
    return serialize_note(db, note)


@router.delete("/notes/{note_id}")
def delete_note(
    note_id: str,
    db: Session = Depends(get_db),
    user = Depends(get_current_user)
):
    return note_service.delete_note(db, note_id, user.id)
