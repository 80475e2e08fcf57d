from .base import Base
from .user import User
from .folder import Folder
from .tag import Tag
from .note import Note, NoteTag

__all__ = ["Base", "User", "Folder", "Tag", "Note", "NoteTag"]
