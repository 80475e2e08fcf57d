import uuid

from sqlalchemy import Column, String, Text, Boolean, ForeignKey, text
from sqlalchemy.orm import relationship
from .base import Base, Timestamp, utcnow

class Note(Base):
    __tablename__ = "notes"

    id               = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id          = Column(String(36), ForeignKey("users.id",   ondelete="CASCADE"), nullable=False, index=True)
    folder_id        = Column(String(36), ForeignKey("folders.id", ondelete="SET NULL"), nullable=True, index=True)
    title            = Column(String(200), nullable=False)
    content          = Column(Text, nullable=False, default="")
    markdown_content = Column(Text, nullable=True)
    is_favorite      = Column(Boolean, nullable=False, default=False, server_default=text("FALSE"))
    created_at       = Column(Timestamp, nullable=False, default=utcnow)
    updated_at       = Column(Timestamp, nullable=False, default=utcnow)

    # relations
    user      = relationship("User", back_populates="notes")
    folder    = relationship("Folder", back_populates="notes")
    note_tags = relationship("NoteTag", back_populates="note", passive_deletes=True)


class NoteTag(Base):
    __tablename__ = "note_tags"

    note_id    = Column(String(36), ForeignKey("notes.id", ondelete="CASCADE"), primary_key=True)
    tag_id     = Column(String(36), ForeignKey("tags.id",  ondelete="CASCADE"), primary_key=True)
    created_at = Column(Timestamp, nullable=False, default=utcnow)

    note = relationship("Note", back_populates="note_tags")
    tag  = relationship("Tag",  back_populates="note_tags")
