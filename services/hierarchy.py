# services/hierarchy.py
"""
폴더 계층 무결성 검사.

parent_folder_id 를 따라 올라가는 조상 체인을 명시적인 반복문 + visited 집합으로
순회한다. 순회 길이는 소유자의 전체 폴더 수로 제한되므로, 이미 DB에 순환이
들어가 있는 경우에도 반드시 종료된다.
"""
import logging
from typing import Iterator, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from models.folder import Folder
from services.exceptions import InvalidHierarchyError, NotFoundError

logger = logging.getLogger("noteflow.hierarchy")


def find_folder(db: Session, folder_id: str) -> Optional[Folder]:
    return db.query(Folder).filter(Folder.id == folder_id).first()


def count_user_folders(db: Session, user_id: str) -> int:
    return db.query(func.count(Folder.id)).filter(Folder.user_id == user_id).scalar() or 0


def walk_ancestors(db: Session, start: Folder, limit: int) -> Iterator[Folder]:
    """
    start 폴더부터 루트까지 (start 포함) 차례로 반환.

    ● 같은 id를 두 번 만나거나 limit 개를 넘기면 기존 데이터가 깨진 것으로 보고
      InvalidHierarchyError(CORRUPT_CHAIN)를 던집니다.
    ● 부모 id가 가리키는 폴더가 없으면 거기서 멈춥니다.
    """
    visited = set()
    current = start
    while current is not None:
        if current.id in visited or len(visited) >= limit:
            logger.error("Corrupt folder chain detected at folder %s", current.id)
            raise InvalidHierarchyError(
                "Circular reference in existing folder chain",
                reason=InvalidHierarchyError.CORRUPT_CHAIN,
            )
        visited.add(current.id)
        yield current

        if current.parent_folder_id is None:
            return
        current = find_folder(db, current.parent_folder_id)


def validate_parent(
    db: Session,
    folder_id: str,
    proposed_parent_id: str,
    owner_id: Optional[str] = None,
) -> Folder:
    """
    folder_id 의 부모를 proposed_parent_id 로 바꿔도 되는지 검사하고,
    문제가 없으면 새 부모 Folder 를 반환합니다. (DB는 변경하지 않음)

    owner_id 가 주어지면 부모 폴더의 소유자도 함께 확인합니다.
    """
    if proposed_parent_id == folder_id:
        raise InvalidHierarchyError(
            "Cannot set folder as its own parent",
            reason=InvalidHierarchyError.SELF_PARENT,
        )

    parent = find_folder(db, proposed_parent_id)
    if parent is None or (owner_id is not None and parent.user_id != owner_id):
        raise NotFoundError("Parent folder not found")

    limit = count_user_folders(db, parent.user_id)
    for ancestor in walk_ancestors(db, parent, limit):
        if ancestor.id == folder_id:
            logger.warning(
                "Rejected move of folder %s under %s: circular reference",
                folder_id, proposed_parent_id,
            )
            raise InvalidHierarchyError(
                "Circular reference detected: folder cannot be moved into its own descendant",
                reason=InvalidHierarchyError.CYCLE,
            )

    return parent
