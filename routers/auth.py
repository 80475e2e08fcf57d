# routers/auth.py

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from db import get_db
from schemas.user import (
    RegisterRequest, UserResponse,
    LoginRequest,    LoginResponse,
)
from services import user_service
from utils.jwt_utils import create_access_token, get_current_user, ACCESS_TOKEN_EXPIRE_MINUTES

router = APIRouter(prefix="/api/v1", tags=["Auth"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(req: RegisterRequest, db: Session = Depends(get_db)):
    return user_service.create_user(db, obj_in=req)


@router.post("/login", response_model=LoginResponse)
def login(req: LoginRequest, db: Session = Depends(get_db)):
    user = user_service.authenticate(db, req.email, req.password)

    # 토큰 생성 (expires_delta 없이 호출하면 환경변수에 설정된 만료 시간이 적용됩니다)
    access_token = create_access_token(user_id=user.id)

    return LoginResponse(
        message="Login successful",
        user=UserResponse.model_validate(user),
        access_token=access_token,
        expires_in_minutes=ACCESS_TOKEN_EXPIRE_MINUTES
    )


@router.get("/me", response_model=UserResponse)
def me(user = Depends(get_current_user)):
    return user
