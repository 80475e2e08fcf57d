# services/tag_service.py
import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.base import utcnow
from models.note import NoteTag
from models.tag import Tag
from schemas.tag import TagCreate, TagUpdate
from services.exceptions import ConflictError, NotFoundError
from services.user_service import user_exists

logger = logging.getLogger("noteflow.tags")


def _name_taken(db: Session, owner_id: str, name: str) -> bool:
    # 대소문자 구분 비교
    return (
        db.query(Tag.id)
        .filter(Tag.user_id == owner_id, Tag.name == name)
        .first()
        is not None
    )


def create_tag(db: Session, *, obj_in: TagCreate, owner_id: str) -> Tag:
    if not user_exists(db, owner_id):
        raise NotFoundError(f"User with ID {owner_id} not found")

    if _name_taken(db, owner_id, obj_in.name):
        raise ConflictError(f'Tag with name "{obj_in.name}" already exists for this user')

    now = utcnow()
    tag = Tag(
        user_id=owner_id,
        name=obj_in.name,
        color=obj_in.color,
        created_at=now,
        updated_at=now,
    )
    db.add(tag)
    db.commit()
    db.refresh(tag)
    logger.info("Created tag %s for user %s", tag.id, owner_id)
    return tag


def get_user_tags(db: Session, owner_id: str) -> List[Tag]:
    return (
        db.query(Tag)
        .filter(Tag.user_id == owner_id)
        .order_by(Tag.name.asc())
        .all()
    )


def update_tag(db: Session, tag_id: str, obj_in: TagUpdate, owner_id: str) -> Tag:
    tag = db.query(Tag).filter(Tag.id == tag_id, Tag.user_id == owner_id).first()
    if not tag:
        raise NotFoundError("Tag not found")

    changes = obj_in.model_dump(exclude_unset=True)

    new_name = changes.get("name")
    if new_name is not None and new_name != tag.name and _name_taken(db, owner_id, new_name):
        raise ConflictError("Tag with this name already exists")

    if "name" in changes:
        tag.name = new_name
    if "color" in changes:
        tag.color = changes["color"]

    tag.updated_at = utcnow()
    db.commit()
    db.refresh(tag)
    logger.info("Updated tag %s", tag.id)
    return tag


def delete_tag(db: Session, tag_id: str, owner_id: str) -> dict:
    tag = db.query(Tag).filter(Tag.id == tag_id, Tag.user_id == owner_id).first()
    if not tag:
        raise NotFoundError("Tag not found")

    try:
        removed = (
            db.query(NoteTag)
            .filter(NoteTag.tag_id == tag_id)
            .delete(synchronize_session=False)
        )
        db.query(Tag).filter(Tag.id == tag_id, Tag.user_id == owner_id).delete(synchronize_session=False)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to delete tag %s, rolled back", tag_id)
        raise

    logger.info("Deleted tag %s and %d note associations", tag_id, removed)
    return {"success": True}
