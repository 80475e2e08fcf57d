# services/folder_service.py
import logging
from typing import Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.base import utcnow
from models.folder import Folder
from models.note import Note
from schemas.folder import FolderCreate, FolderUpdate, FolderTreeNode, FolderNoteItem, FolderResponse
from services.exceptions import NotFoundError
from services.hierarchy import validate_parent
from services.note_service import reassign_notes_folder
from services.user_service import user_exists

logger = logging.getLogger("noteflow.folders")


def find_by_id(db: Session, folder_id: str, owner_id: Optional[str] = None) -> Optional[Folder]:
    query = db.query(Folder).filter(Folder.id == folder_id)
    if owner_id is not None:
        query = query.filter(Folder.user_id == owner_id)
    return query.first()


def find_by_parent(db: Session, parent_id: Optional[str], owner_id: Optional[str] = None) -> List[Folder]:
    if parent_id is None:
        query = db.query(Folder).filter(Folder.parent_folder_id.is_(None))
    else:
        query = db.query(Folder).filter(Folder.parent_folder_id == parent_id)
    if owner_id is not None:
        query = query.filter(Folder.user_id == owner_id)
    return query.order_by(Folder.name).all()


def create_folder(db: Session, *, obj_in: FolderCreate, owner_id: str) -> Folder:
    if not user_exists(db, owner_id):
        raise NotFoundError("User not found")

    if obj_in.parent_folder_id is not None:
        # 없는 폴더와 남의 폴더를 같은 에러로 처리
        parent = find_by_id(db, obj_in.parent_folder_id, owner_id=owner_id)
        if parent is None:
            logger.warning("User %s tried to create folder under unknown parent %s",
                           owner_id, obj_in.parent_folder_id)
            raise NotFoundError("Parent folder not found or does not belong to user")

    now = utcnow()
    folder = Folder(
        user_id=owner_id,
        name=obj_in.name,
        parent_folder_id=obj_in.parent_folder_id,
        created_at=now,
        updated_at=now,
    )
    db.add(folder)
    db.commit()
    db.refresh(folder)
    logger.info("Created folder %s for user %s", folder.id, owner_id)
    return folder


def get_user_folders(
    db: Session,
    owner_id: str,
    parent_folder_id: Optional[str] = None,
    root_only: bool = False,
) -> List[Folder]:
    """
    ● parent_folder_id 지정 → 해당 폴더의 하위 폴더
    ● root_only=True → 최상위 폴더
    ● 둘 다 없으면 → 유저의 모든 폴더
    """
    if parent_folder_id is not None or root_only:
        return find_by_parent(db, parent_folder_id, owner_id=owner_id)
    return (
        db.query(Folder)
        .filter(Folder.user_id == owner_id)
        .order_by(Folder.name)
        .all()
    )


def get_folder_tree(db: Session, owner_id: str) -> List[FolderTreeNode]:
    """
    1) 해당 유저의 모든 폴더와 노트를 가져옵니다.
    2) 노트들은 folder_id 기준으로 그룹핑합니다.
    3) 각 폴더 노드에 children(하위폴더)와 notes(폴더 내 노트)를 붙입니다.
    4) 부모가 없는(root) 폴더만 뽑아서 트리 형태로 반환합니다.
    """
    all_folders = get_user_folders(db, owner_id)
    all_notes = (
        db.query(Note)
        .filter(Note.user_id == owner_id, Note.folder_id.isnot(None))
        .order_by(Note.title)
        .all()
    )

    folder_note_map: Dict[str, List[FolderNoteItem]] = {}
    for n in all_notes:
        folder_note_map.setdefault(n.folder_id, []).append(FolderNoteItem.model_validate(n))

    nodes: Dict[str, FolderTreeNode] = {}
    for f in all_folders:
        nodes[f.id] = FolderTreeNode(
            **FolderResponse.model_validate(f).model_dump(),
            notes=folder_note_map.get(f.id, []),
        )

    roots: List[FolderTreeNode] = []
    for f in all_folders:
        node = nodes[f.id]
        if f.parent_folder_id is not None and f.parent_folder_id in nodes:
            nodes[f.parent_folder_id].children.append(node)
        else:
            roots.append(node)
    return roots


def update_folder(
    db: Session,
    folder_id: str,
    obj_in: FolderUpdate,
    owner_id: Optional[str] = None,
) -> Folder:
    folder = find_by_id(db, folder_id, owner_id=owner_id)
    if folder is None:
        raise NotFoundError("Folder not found")

    changes = obj_in.model_dump(exclude_unset=True)

    new_parent_id = changes.get("parent_folder_id")
    if new_parent_id is not None:
        validate_parent(db, folder.id, new_parent_id, owner_id=folder.user_id)

    if "name" in changes:
        folder.name = changes["name"]
    if "parent_folder_id" in changes:
        folder.parent_folder_id = new_parent_id

    # 값이 같아도 수정 시각은 항상 갱신
    folder.updated_at = utcnow()
    db.commit()
    db.refresh(folder)
    logger.info("Updated folder %s (%s)", folder.id, ", ".join(sorted(changes)) or "no fields")
    return folder


def delete_folder(db: Session, folder_id: str, owner_id: str) -> dict:
    """
    폴더 하나만 삭제하고, 그 안의 노트와 직속 하위 폴더는
    삭제되는 폴더의 부모(루트였다면 null)로 옮깁니다.
    세 작업은 하나의 트랜잭션으로 커밋됩니다.
    """
    folder = find_by_id(db, folder_id, owner_id=owner_id)
    if folder is None:
        raise NotFoundError("Folder not found or access denied")

    original_parent = folder.parent_folder_id

    try:
        moved_notes = reassign_notes_folder(db, folder_id, original_parent)
        moved_folders = (
            db.query(Folder)
            .filter(Folder.parent_folder_id == folder_id)
            .update(
                {Folder.parent_folder_id: original_parent, Folder.updated_at: utcnow()},
                synchronize_session=False,
            )
        )
        db.query(Folder).filter(
            Folder.id == folder_id, Folder.user_id == owner_id
        ).delete(synchronize_session=False)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to delete folder %s, rolled back", folder_id)
        raise

    logger.info(
        "Deleted folder %s: moved %d notes and %d subfolders to %s",
        folder_id, moved_notes, moved_folders, original_parent or "root",
    )
    return {"success": True}
