# Backend/routers/folder.py

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from db import get_db
from schemas.folder import FolderCreate, FolderResponse, FolderUpdate, FolderTreeNode
from services import folder_service
from utils.jwt_utils import get_current_user

router = APIRouter(prefix="/api/v1", tags=["Folders"])


@router.get(
    "/folders",
    response_model=List[FolderResponse],
    summary="유저의 폴더 목록 (이름순)"
)
def list_folders(
    parent_folder_id: Optional[str] = Query(default=None, description="이 폴더의 하위 폴더만"),
    root_only: bool = Query(default=False, description="최상위 폴더만"),
    db: Session = Depends(get_db),
    user = Depends(get_current_user)
):
    return folder_service.get_user_folders(
        db, user.id, parent_folder_id=parent_folder_id, root_only=root_only
    )


@router.get(
    "/folders/tree",
    response_model=List[FolderTreeNode],
    summary="유저의 모든 폴더(트리 구조) 및 폴더별 노트 리스트 반환"
)
def folder_tree(
    db: Session = Depends(get_db),
    user = Depends(get_current_user)
):
    return folder_service.get_folder_tree(db, user.id)


@router.post(
    "/folders",
    response_model=FolderResponse,
    status_code=status.HTTP_201_CREATED,
    summary="새 폴더 생성"
)
def create_folder(
    req: FolderCreate,
    db: Session = Depends(get_db),
    user = Depends(get_current_user)
):
    """
    • req.name (문자열, 필수)
    • req.parent_folder_id (문자열 or null) - 최상위 폴더면 None
    """
    return folder_service.create_folder(db, obj_in=req, owner_id=user.id)


@router.patch(
    "/folders/{folder_id}",
    response_model=FolderResponse,
    summary="폴더 이름 변경 및/또는 부모 폴더 이동"
)
def update_folder(
    folder_id: str,
    req: FolderUpdate,
    db: Session = Depends(get_db),
    user = Depends(get_current_user)
):
    """
    ● 이름(name) 변경이 있으면 바꿔주고,
    ● 부모폴더(parent_folder_id) 변경이 있으면 순환 여부를 검사한 뒤 바꿔줍니다.
      null 을 보내면 최상위로 이동합니다.
    """
    return folder_service.update_folder(db, folder_id, req, owner_id=user.id)


@router.delete(
    "/folders/{folder_id}",
    summary="폴더 삭제 (하위 폴더·노트는 상위 폴더로 이동)"
)
def delete_folder(
    folder_id: str,
    db: Session = Depends(get_db),
    user = Depends(get_current_user)
):
    return folder_service.delete_folder(db, folder_id, user.id)
