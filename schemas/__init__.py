# schemas/__init__.py

from .user import (
    RegisterRequest, UserResponse,
    LoginRequest,    LoginResponse,
)

from .folder import (
    FolderCreate, FolderUpdate,
    FolderResponse, FolderTreeNode,
)

from .tag import TagCreate, TagUpdate, TagResponse

from .note import NoteCreate, NoteUpdate, NoteResponse
