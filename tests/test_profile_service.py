# /tests/test_profile_service.py

from sqlalchemy.exc import OperationalError

from app.models.user_model import Identity
from app.services import profile_service


class FakeUserStore:
    """Records calls the way DatabaseService would receive them."""

    def __init__(self, existing=None, lookup_error=None, insert_error=None):
        self.existing = existing
        self.lookup_error = lookup_error
        self.insert_error = insert_error
        self.inserted = []

    def get_user_by_id(self, user_id):
        if self.lookup_error:
            raise self.lookup_error
        return self.existing

    def add_user(self, record):
        self.inserted.append(record)
        if self.insert_error:
            raise self.insert_error
        return dict(record)


def test_new_identity_gets_fallback_from_email_and_one_insert():
    identity = Identity(id="u-1", email="mai.nguyen@example.com")
    store = FakeUserStore()

    result = profile_service.sync_user_profile(identity, store)

    assert result.persisted is True
    assert result.profile.fullname == "mai.nguyen"
    assert result.profile.apikey == ""
    assert result.profile.avatar == ""
    assert len(store.inserted) == 1
    assert store.inserted[0]["id"] == "u-1"


def test_metadata_name_avatar_and_key_seed_the_profile():
    identity = Identity(id="u-2", email="a@b.co", full_name="Mai Nguyen", avatar_url="https://cdn/x.png", apikey="gAAAA-cipher")
    result = profile_service.sync_user_profile(identity, FakeUserStore())

    assert result.profile.fullname == "Mai Nguyen"
    assert result.profile.avatar == "https://cdn/x.png"
    assert result.profile.apikey == "gAAAA-cipher"


def test_stored_row_wins_over_identity_metadata():
    stored = {"id": "u-3", "fullname": "Stored Name", "avatar": "", "apikey": "stored-cipher"}
    identity = Identity(id="u-3", email="x@y.co", full_name="Provider Name")
    store = FakeUserStore(existing=stored)

    result = profile_service.sync_user_profile(identity, store)

    assert result.persisted is True
    assert result.profile.fullname == "Stored Name"
    assert result.profile.apikey == "stored-cipher"
    assert store.inserted == []


def test_insert_failure_returns_unpersisted_fallback():
    identity = Identity(id="u-4", email="fail@example.com")
    store = FakeUserStore(insert_error=OperationalError("INSERT", {}, Exception("disk full")))

    result = profile_service.sync_user_profile(identity, store)

    assert result.persisted is False
    assert result.profile.fullname == "fail"
    assert len(store.inserted) == 1


def test_lookup_failure_returns_fallback_without_insert():
    identity = Identity(id="u-5", email="nolookup@example.com")
    store = FakeUserStore(lookup_error=OperationalError("SELECT", {}, Exception("no such table: users")))

    result = profile_service.sync_user_profile(identity, store)

    assert result.persisted is False
    assert store.inserted == []


def test_no_storage_and_no_email_falls_back_to_default_name():
    result = profile_service.sync_user_profile(Identity(id="u-6"), None)
    assert result.persisted is False
    assert result.profile.fullname == "Creator"


def test_sync_against_real_store_is_idempotent(db_service):
    identity = Identity(id="u-7", email="real@example.com", apikey="cipher")

    first = profile_service.sync_user_profile(identity, db_service)
    second = profile_service.sync_user_profile(identity.model_copy(update={"full_name": "Renamed"}), db_service)

    assert first.persisted and second.persisted
    assert second.profile.fullname == "real"
    assert second.profile.apikey == "cipher"
