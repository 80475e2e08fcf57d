from .auth import router as auth_router
from .folder import router as folder_router
from .tag import router as tag_router
from .note import router as note_router

routers = [
    auth_router,
    folder_router,
    tag_router,
    note_router,
]
