# /tests/test_content_service.py

import pytest

from app.core.errors import CorruptedContentError, ForbiddenError, NotFoundError, UnauthenticatedError
from app.models.content_model import GeneratedContent
from app.services import content_service

OWNER = "user-owner"
STRANGER = "user-stranger"


@pytest.fixture
def content(sample_content):
    return GeneratedContent.model_validate(sample_content)


def test_list_on_empty_store_returns_empty_list(db_service):
    assert content_service.list_contents(db_service, caller_id=OWNER) == []


def test_save_then_get_round_trips_data_and_owner(db_service, content):
    saved = content_service.save_content(db_service, "Budget Tokyo", content, owner_id=OWNER)

    fetched = content_service.get_content_by_id(db_service, saved.id, caller_id=OWNER)
    assert fetched.id == saved.id
    assert fetched.topic == "Budget Tokyo"
    assert fetched.data == content
    assert fetched.user_id == OWNER
    assert fetched.created_at is not None


def test_save_requires_an_owner(db_service, content):
    with pytest.raises(UnauthenticatedError):
        content_service.save_content(db_service, "Budget Tokyo", content, owner_id=None)
    assert db_service.get_contents_by_user_id("") == []


def test_list_after_save_and_delete(db_service, content):
    saved = content_service.save_content(db_service, "Budget Tokyo", content, owner_id=OWNER)

    items = content_service.list_contents(db_service, caller_id=OWNER)
    assert len(items) == 1
    assert items[0].id == saved.id

    content_service.delete_content(db_service, saved.id, caller_id=OWNER)
    assert saved.id not in [item.id for item in content_service.list_contents(db_service, caller_id=OWNER)]


def test_list_returns_newest_first(db_service, content):
    first = content_service.save_content(db_service, "First topic", content, owner_id=OWNER)
    second = content_service.save_content(db_service, "Second topic", content, owner_id=OWNER)

    items = content_service.list_contents(db_service, caller_id=OWNER)
    assert [item.id for item in items] == [second.id, first.id]


def test_list_is_scoped_to_caller(db_service, content):
    content_service.save_content(db_service, "Mine", content, owner_id=OWNER)
    assert content_service.list_contents(db_service, caller_id=STRANGER) == []


def test_list_search_matches_topic_and_body(db_service, content):
    content_service.save_content(db_service, "Budget Tokyo", content, owner_id=OWNER)
    other = content.model_copy(update={"content": "Sunrise over Ha Long Bay"})
    content_service.save_content(db_service, "Vietnam cruise", other, owner_id=OWNER)

    assert [i.topic for i in content_service.list_contents(db_service, OWNER, search="tokyo")] == ["Budget Tokyo"]
    assert [i.topic for i in content_service.list_contents(db_service, OWNER, search="HA LONG")] == ["Vietnam cruise"]


def test_get_missing_item_is_not_found(db_service, content):
    saved = content_service.save_content(db_service, "Mine", content, owner_id=OWNER)
    with pytest.raises(NotFoundError):
        content_service.get_content_by_id(db_service, saved.id + 100, caller_id=OWNER)


def test_foreign_item_is_readable_but_flagged_not_owned(db_service, content):
    saved = content_service.save_content(db_service, "Mine", content, owner_id=OWNER)

    as_owner = content_service.get_content_by_id(db_service, saved.id, caller_id=OWNER)
    as_stranger = content_service.get_content_by_id(db_service, saved.id, caller_id=STRANGER)

    assert as_owner.is_owner is True
    assert as_stranger.is_owner is False
    assert as_stranger.user_id == OWNER
    assert as_stranger.data == content


def test_update_replaces_data_only(db_service, content):
    saved = content_service.save_content(db_service, "Budget Tokyo", content, owner_id=OWNER)
    replacement = content.model_copy(update={"content": "Rewritten body", "captions": ["only one"]})

    updated = content_service.update_content(db_service, saved.id, replacement, caller_id=OWNER)

    assert updated.data == replacement
    assert updated.topic == "Budget Tokyo"
    assert updated.user_id == OWNER
    assert content_service.get_content_by_id(db_service, saved.id, OWNER).data.content == "Rewritten body"


def test_update_text_keeps_other_fields(db_service, content):
    saved = content_service.save_content(db_service, "Budget Tokyo", content, owner_id=OWNER)

    updated = content_service.update_content_text(db_service, saved.id, "Edited body", caller_id=OWNER)

    assert updated.data.content == "Edited body"
    assert updated.data.captions == content.captions
    assert updated.data.hashtags == content.hashtags


def test_non_owner_cannot_update_or_delete(db_service, content):
    saved = content_service.save_content(db_service, "Mine", content, owner_id=OWNER)
    replacement = content.model_copy(update={"content": "hijacked"})

    with pytest.raises(ForbiddenError):
        content_service.update_content(db_service, saved.id, replacement, caller_id=STRANGER)
    with pytest.raises(ForbiddenError):
        content_service.delete_content(db_service, saved.id, caller_id=STRANGER)

    still_there = content_service.get_content_by_id(db_service, saved.id, caller_id=OWNER)
    assert still_there.data == content


def test_update_or_delete_missing_item_is_not_found(db_service, content):
    with pytest.raises(NotFoundError):
        content_service.update_content(db_service, 999, content, caller_id=OWNER)
    with pytest.raises(NotFoundError):
        content_service.delete_content(db_service, 999, caller_id=OWNER)


def test_corrupted_rows_are_skipped_in_listing(db_service, content):
    content_service.save_content(db_service, "Good", content, owner_id=OWNER)
    db_service.add_content_record({"topic": "Bad", "data": {"unexpected": True}, "user_id": OWNER})

    items = content_service.list_contents(db_service, caller_id=OWNER)
    assert [item.topic for item in items] == ["Good"]


def test_corrupted_row_read_or_edit_raises_typed_error(db_service):
    bad = db_service.add_content_record({"topic": "Bad", "data": {"unexpected": True}, "user_id": OWNER})

    with pytest.raises(CorruptedContentError):
        content_service.get_content_by_id(db_service, bad.id, caller_id=OWNER)
    with pytest.raises(CorruptedContentError):
        content_service.update_content_text(db_service, bad.id, "New body", caller_id=OWNER)
