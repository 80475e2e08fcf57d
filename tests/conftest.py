"""Shared fixtures.

DATABASE_URL must point at SQLite before `db` / `main` are imported, since the
engine is created at import time.
"""
import os
import tempfile

_DB_DIR = tempfile.mkdtemp(prefix="noteflow-test-")
os.environ["DATABASE_URL"] = "sqlite:///" + os.path.join(_DB_DIR, "test.db")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient

from db import engine, SessionLocal
from main import app
from models import Base, User, Folder, Note
from utils.jwt_utils import create_access_token
from utils.password import hash_password


@pytest.fixture(autouse=True)
def reset_schema():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_user(db):
    def _make(email="alice@example.com", username="alice", password="password123"):
        user = User(email=email, username=username, password_hash=hash_password(password))
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make


@pytest.fixture
def user(make_user):
    return make_user()


@pytest.fixture
def other_user(make_user):
    return make_user(email="bob@example.com", username="bob")


@pytest.fixture
def auth_headers(user):
    return {"Authorization": f"Bearer {create_access_token(user_id=user.id)}"}


@pytest.fixture
def other_headers(other_user):
    return {"Authorization": f"Bearer {create_access_token(user_id=other_user.id)}"}


@pytest.fixture
def make_folder(db):
    """Insert a folder row directly, bypassing the service checks."""
    def _make(owner, name="Folder", parent=None):
        folder = Folder(
            user_id=owner.id,
            name=name,
            parent_folder_id=parent.id if parent is not None else None,
        )
        db.add(folder)
        db.commit()
        db.refresh(folder)
        return folder
    return _make


@pytest.fixture
def make_note(db):
    def _make(owner, title="Note", content="body", folder=None, is_favorite=False):
        note = Note(
            user_id=owner.id,
            title=title,
            content=content,
            folder_id=folder.id if folder is not None else None,
            is_favorite=is_favorite,
        )
        db.add(note)
        db.commit()
        db.refresh(note)
        return note
    return _make
