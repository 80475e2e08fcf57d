import uuid

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from .base import Base, Timestamp, utcnow

class User(Base):
    __tablename__ = "users"

    id            = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email         = Column(String(150), nullable=False, unique=True)
    username      = Column(String(50),  nullable=False, unique=True)
    password_hash = Column(String(255), nullable=False)
    created_at    = Column(Timestamp, nullable=False, default=utcnow)
    updated_at    = Column(Timestamp, nullable=False, default=utcnow, onupdate=utcnow)

    # relations (삭제 시 하위 데이터는 DB의 ON DELETE CASCADE에 맡김)
    folders = relationship("Folder", back_populates="user", passive_deletes=True)
    tags    = relationship("Tag",    back_populates="user", passive_deletes=True)
    notes   = relationship("Note",   back_populates="user", passive_deletes=True)
