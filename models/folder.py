import uuid

from sqlalchemy import Column, String, ForeignKey
from sqlalchemy.orm import relationship
from .base import Base, Timestamp, utcnow

class Folder(Base):
    __tablename__ = "folders"

    id               = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id          = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name             = Column(String(100), nullable=False)
    parent_folder_id = Column(String(36), ForeignKey("folders.id", ondelete="SET NULL"), nullable=True, index=True)
    created_at       = Column(Timestamp, nullable=False, default=utcnow)
    updated_at       = Column(Timestamp, nullable=False, default=utcnow)

    # relations
    user   = relationship("User", back_populates="folders")
    parent = relationship("Folder", remote_side=[id])
    notes  = relationship("Note", back_populates="folder")
