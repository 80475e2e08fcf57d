# services/user_service.py
import logging

from sqlalchemy import or_
from sqlalchemy.orm import Session

from models.user import User
from schemas.user import RegisterRequest
from services.exceptions import AuthenticationError, ConflictError
from utils.password import hash_password, verify_password

logger = logging.getLogger("noteflow.users")


def user_exists(db: Session, user_id: str) -> bool:
    return db.query(User.id).filter(User.id == user_id).first() is not None


def create_user(db: Session, *, obj_in: RegisterRequest) -> User:
    # 중복 검사
    existing = (
        db.query(User)
        .filter(or_(User.email == obj_in.email, User.username == obj_in.username))
        .first()
    )
    if existing:
        if existing.email == obj_in.email:
            raise ConflictError("User with this email already exists")
        raise ConflictError("User with this username already exists")

    user = User(
        email=obj_in.email,
        username=obj_in.username,
        password_hash=hash_password(obj_in.password),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Registered user %s", user.id)
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    """이메일이 없거나 비밀번호가 틀려도 같은 메시지로 실패"""
    user = db.query(User).filter(User.email == email).first()
    if not user or not verify_password(password, user.password_hash):
        logger.warning("Failed login attempt for %s", email)
        raise AuthenticationError("Invalid email or password")
    return user
