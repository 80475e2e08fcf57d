# services/note_service.py
import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.base import utcnow
from models.folder import Folder
from models.note import Note, NoteTag
from models.tag import Tag
from schemas.note import NoteCreate, NoteUpdate, NoteResponse
from services.exceptions import NotFoundError

logger = logging.getLogger("noteflow.notes")


# ─────────────────────────────────────────────
# 직렬화
# ─────────────────────────────────────────────
def serialize_note(db: Session, note: Note) -> NoteResponse:
    tag_ids = [
        row.tag_id
        for row in db.query(NoteTag.tag_id)
        .filter(NoteTag.note_id == note.id)
        .order_by(NoteTag.tag_id)
        .all()
    ]
    return NoteResponse(
        id=note.id,
        user_id=note.user_id,
        folder_id=note.folder_id,
        title=note.title,
        content=note.content,
        markdown_content=note.markdown_content,
        is_favorite=bool(note.is_favorite),
        created_at=note.created_at,
        updated_at=note.updated_at,
        tag_ids=tag_ids,
    )


def _owns_folder(db: Session, folder_id: str, user_id: str) -> bool:
    return (
        db.query(Folder.id)
        .filter(Folder.id == folder_id, Folder.user_id == user_id)
        .first()
        is not None
    )


def _owns_all_tags(db: Session, tag_ids: List[str], user_id: str) -> bool:
    wanted = set(tag_ids)
    if not wanted:
        return True
    owned = {
        row.id
        for row in db.query(Tag.id).filter(Tag.user_id == user_id, Tag.id.in_(wanted)).all()
    }
    return owned == wanted


def _replace_tags(db: Session, note_id: str, tag_ids: List[str]) -> None:
    # 같은 (note_id, tag_id)를 다시 추가할 수 있도록 세션에서도 제거
    db.query(NoteTag).filter(NoteTag.note_id == note_id).delete(synchronize_session="fetch")
    now = utcnow()
    for tag_id in dict.fromkeys(tag_ids):
        db.add(NoteTag(note_id=note_id, tag_id=tag_id, created_at=now))


def reassign_notes_folder(db: Session, old_folder_id: str, new_folder_id: Optional[str]) -> int:
    """old_folder_id 에 있던 노트들을 new_folder_id 로 옮김 (commit 은 호출자가 함)"""
    return (
        db.query(Note)
        .filter(Note.folder_id == old_folder_id)
        .update({Note.folder_id: new_folder_id}, synchronize_session=False)
    )


# ─────────────────────────────────────────────
# 목록/CRUD
# ─────────────────────────────────────────────
def create_note(db: Session, *, obj_in: NoteCreate, owner_id: str) -> Note:
    if obj_in.folder_id and not _owns_folder(db, obj_in.folder_id, owner_id):
        raise NotFoundError("Folder not found or access denied")

    if obj_in.tag_ids and not _owns_all_tags(db, obj_in.tag_ids, owner_id):
        raise NotFoundError("One or more tags not found or access denied")

    now = utcnow()
    note = Note(
        user_id=owner_id,
        folder_id=obj_in.folder_id or None,
        title=obj_in.title,
        content=obj_in.content,
        markdown_content=obj_in.markdown_content,
        is_favorite=False,
        created_at=now,
        updated_at=now,
    )
    db.add(note)
    db.flush()
    if obj_in.tag_ids:
        _replace_tags(db, note.id, obj_in.tag_ids)

    db.commit()
    db.refresh(note)
    logger.info("Created note %s for user %s", note.id, owner_id)
    return note


def get_user_notes(
    db: Session,
    owner_id: str,
    folder_id: Optional[str] = None,
    unfiled: bool = False,
    tag_id: Optional[str] = None,
    search: Optional[str] = None,
    is_favorite: Optional[bool] = None,
) -> List[Note]:
    query = db.query(Note).filter(Note.user_id == owner_id)

    if unfiled:
        query = query.filter(Note.folder_id.is_(None))
    elif folder_id is not None:
        query = query.filter(Note.folder_id == folder_id)

    if is_favorite is not None:
        query = query.filter(Note.is_favorite == is_favorite)

    if search and search.strip():
        like = f"%{search.strip()}%"
        query = query.filter((Note.title.ilike(like)) | (Note.content.ilike(like)))

    if tag_id:
        # (note_id, tag_id)가 PK라서 조인해도 중복 없음
        query = query.join(NoteTag, NoteTag.note_id == Note.id).filter(NoteTag.tag_id == tag_id)

    return query.order_by(Note.created_at.desc()).all()


def get_note_by_id(db: Session, note_id: str, owner_id: str) -> Optional[Note]:
    return db.query(Note).filter(Note.id == note_id, Note.user_id == owner_id).first()


def update_note(db: Session, note_id: str, obj_in: NoteUpdate, owner_id: str) -> Note:
    note = get_note_by_id(db, note_id, owner_id)
    if not note:
        raise NotFoundError("Note not found")

    changes = obj_in.model_dump(exclude_unset=True)

    folder_id = changes.get("folder_id")
    if folder_id is not None and not _owns_folder(db, folder_id, owner_id):
        raise NotFoundError("Folder not found or does not belong to user")

    tag_ids = changes.pop("tag_ids", None)
    if tag_ids and not _owns_all_tags(db, tag_ids, owner_id):
        raise NotFoundError("One or more tags do not belong to user")

    for field, value in changes.items():
        setattr(note, field, value)
    if tag_ids is not None:
        _replace_tags(db, note.id, tag_ids)

    note.updated_at = utcnow()
    db.commit()
    db.refresh(note)
    logger.info("Updated note %s", note.id)
    return note


def delete_note(db: Session, note_id: str, owner_id: str) -> dict:
    note = get_note_by_id(db, note_id, owner_id)
    if not note:
        raise NotFoundError("Note not found or access denied")

    try:
        db.query(NoteTag).filter(NoteTag.note_id == note_id).delete(synchronize_session=False)
        db.query(Note).filter(
            Note.id == note_id, Note.user_id == owner_id
        ).delete(synchronize_session=False)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to delete note %s, rolled back", note_id)
        raise

    logger.info("Deleted note %s", note_id)
    return {"success": True}
