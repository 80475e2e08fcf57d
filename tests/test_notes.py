import pytest

from models import NoteTag, Tag
from schemas.note import NoteCreate, NoteUpdate
from services import note_service
from services.exceptions import NotFoundError


@pytest.fixture
def make_tag(db):
    def _make(owner, name):
        tag = Tag(user_id=owner.id, name=name)
        db.add(tag)
        db.commit()
        db.refresh(tag)
        return tag
    return _make


# ─────────────────────────────────────────────
# service
# ─────────────────────────────────────────────
def test_create_note_with_folder_and_tags(db, user, make_folder, make_tag):
    folder = make_folder(user, "Work")
    t1, t2 = make_tag(user, "a"), make_tag(user, "b")

    note = note_service.create_note(
        db,
        obj_in=NoteCreate(title="Plan", content="text", folder_id=folder.id, tag_ids=[t1.id, t2.id]),
        owner_id=user.id,
    )

    assert note.folder_id == folder.id
    assert note.is_favorite is False
    assert note.markdown_content is None
    assert sorted(note_service.serialize_note(db, note).tag_ids) == sorted([t1.id, t2.id])


def test_create_note_rejects_foreign_folder(db, user, other_user, make_folder):
    theirs = make_folder(other_user, "Theirs")

    with pytest.raises(NotFoundError, match="Folder not found or access denied"):
        note_service.create_note(
            db, obj_in=NoteCreate(title="x", content="", folder_id=theirs.id), owner_id=user.id
        )


def test_create_note_rejects_mixed_tags(db, user, other_user, make_tag):
    mine = make_tag(user, "mine")
    theirs = make_tag(other_user, "theirs")

    with pytest.raises(NotFoundError, match="tags not found or access denied"):
        note_service.create_note(
            db, obj_in=NoteCreate(title="x", content="", tag_ids=[mine.id, theirs.id]), owner_id=user.id
        )


def test_update_note_replaces_and_clears_tags(db, user, make_note, make_tag):
    note = make_note(user)
    t1, t2 = make_tag(user, "one"), make_tag(user, "two")

    note_service.update_note(db, note.id, NoteUpdate(tag_ids=[t1.id]), user.id)
    note_service.update_note(db, note.id, NoteUpdate(tag_ids=[t2.id, t1.id]), user.id)
    assert sorted(note_service.serialize_note(db, note).tag_ids) == sorted([t1.id, t2.id])

    note_service.update_note(db, note.id, NoteUpdate(title="retitled"), user.id)
    assert len(note_service.serialize_note(db, note).tag_ids) == 2

    note_service.update_note(db, note.id, NoteUpdate(tag_ids=[]), user.id)
    assert db.query(NoteTag).filter(NoteTag.note_id == note.id).count() == 0


def test_update_note_folder_and_null(db, user, other_user, make_note, make_folder):
    folder = make_folder(user, "F")
    theirs = make_folder(other_user, "T")
    note = make_note(user, folder=folder)

    with pytest.raises(NotFoundError, match="Folder not found or does not belong to user"):
        note_service.update_note(db, note.id, NoteUpdate(folder_id=theirs.id), user.id)

    updated = note_service.update_note(db, note.id, NoteUpdate(folder_id=None), user.id)
    assert updated.folder_id is None


def test_update_note_rejects_foreign_tags(db, user, other_user, make_note, make_tag):
    note = make_note(user)
    theirs = make_tag(other_user, "theirs")

    with pytest.raises(NotFoundError, match="One or more tags do not belong to user"):
        note_service.update_note(db, note.id, NoteUpdate(tag_ids=[theirs.id]), user.id)


def test_update_missing_note(db, user):
    with pytest.raises(NotFoundError, match="Note not found"):
        note_service.update_note(db, "nope", NoteUpdate(title="x"), user.id)


def test_get_user_notes_filters_compose(db, user, other_user, make_note, make_folder, make_tag):
    folder = make_folder(user, "F")
    tag = make_tag(user, "t")
    a = make_note(user, "Alpha meeting", "agenda", folder=folder, is_favorite=True)
    b = make_note(user, "Beta", "MEETING notes")
    make_note(user, "Gamma", "nothing", folder=folder)
    make_note(other_user, "Alpha meeting", "not mine")
    note_service.update_note(db, a.id, NoteUpdate(tag_ids=[tag.id]), user.id)
    note_service.update_note(db, b.id, NoteUpdate(tag_ids=[tag.id]), user.id)

    def titles(**kwargs):
        return sorted(n.title for n in note_service.get_user_notes(db, user.id, **kwargs))

    assert titles() == ["Alpha meeting", "Beta", "Gamma"]
    assert titles(folder_id=folder.id) == ["Alpha meeting", "Gamma"]
    assert titles(unfiled=True) == ["Beta"]
    assert titles(is_favorite=True) == ["Alpha meeting"]
    assert titles(is_favorite=False) == ["Beta", "Gamma"]
    assert titles(search="meeting") == ["Alpha meeting", "Beta"]
    assert titles(tag_id=tag.id) == ["Alpha meeting", "Beta"]
    assert titles(tag_id=tag.id, folder_id=folder.id, search="AGENDA") == ["Alpha meeting"]
    assert titles(tag_id="missing") == []
    assert titles(folder_id="missing") == []


def test_reassign_notes_folder_does_not_commit(db, user, make_folder, make_note):
    old, new = make_folder(user, "old"), make_folder(user, "new")
    note = make_note(user, folder=old)

    moved = note_service.reassign_notes_folder(db, old.id, new.id)
    db.rollback()

    assert moved == 1
    db.expire_all()
    assert note.folder_id == old.id


# ─────────────────────────────────────────────
# API
# ─────────────────────────────────────────────
def test_note_crud_over_http(client, auth_headers, other_headers):
    created = client.post(
        "/api/v1/notes",
        json={"title": "Hello", "content": "world", "markdown_content": "# world"},
        headers=auth_headers,
    )
    assert created.status_code == 201
    note = created.json()
    assert note["folder_id"] is None
    assert note["tag_ids"] == []

    assert client.get(f"/api/v1/notes/{note['id']}", headers=other_headers).status_code == 404

    patched = client.patch(
        f"/api/v1/notes/{note['id']}",
        json={"is_favorite": True, "markdown_content": None},
        headers=auth_headers,
    ).json()
    assert patched["is_favorite"] is True
    assert patched["markdown_content"] is None
    assert patched["title"] == "Hello"

    favorites = client.get("/api/v1/notes", params={"is_favorite": True}, headers=auth_headers).json()
    assert [n["id"] for n in favorites] == [note["id"]]

    assert client.delete(f"/api/v1/notes/{note['id']}", headers=other_headers).status_code == 404
    assert client.delete(f"/api/v1/notes/{note['id']}", headers=auth_headers).json() == {"success": True}
    assert client.get(f"/api/v1/notes/{note['id']}", headers=auth_headers).status_code == 404


def test_note_title_validation(client, auth_headers):
    resp = client.post("/api/v1/notes", json={"title": "", "content": "x"}, headers=auth_headers)
    assert resp.status_code == 422

    resp = client.post("/api/v1/notes", json={"title": "x" * 201, "content": "x"}, headers=auth_headers)
    assert resp.status_code == 422


def test_search_over_http(client, auth_headers):
    for title, content in [("Groceries", "milk"), ("Ideas", "buy MILK later"), ("Other", "none")]:
        client.post("/api/v1/notes", json={"title": title, "content": content}, headers=auth_headers)

    found = client.get("/api/v1/notes", params={"q": "milk"}, headers=auth_headers).json()

    assert sorted(n["title"] for n in found) == ["Groceries", "Ideas"]


def test_missing_note_uses_error_body(client, auth_headers):
    resp = client.get("/api/v1/notes/nope", headers=auth_headers)

    assert resp.status_code == 404
    assert resp.json() == {"detail": "Note not found", "error_code": "NOT_FOUND"}
