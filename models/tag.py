import uuid

from sqlalchemy import Column, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from .base import Base, Timestamp, utcnow

class Tag(Base):
    __tablename__ = "tags"
    __table_args__ = (UniqueConstraint("user_id", "name", name="uq_tags_user_name"),)

    id         = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id    = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name       = Column(String(50), nullable=False)
    color      = Column(String(32), nullable=True)   # null이면 클라이언트 기본 색상
    created_at = Column(Timestamp, nullable=False, default=utcnow)
    updated_at = Column(Timestamp, nullable=False, default=utcnow)

    user      = relationship("User", back_populates="tags")
    note_tags = relationship("NoteTag", back_populates="tag", passive_deletes=True)
