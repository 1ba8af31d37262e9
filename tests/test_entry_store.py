"""Unit tests for the in-memory entry store."""

import threading

import pytest

from blog_tracker_api.app.core.errors import (
    BlankFieldError,
    DuplicateEntryError,
    MissingFieldError,
    NotFoundError,
    ValidationFailedError,
)
from blog_tracker_api.app.services.entry_store import EntryStore

POST_FIELDS = {"title", "author", "content"}


def _post(title: str = "Hi", author: str = "Bo", content: str = "World") -> dict:
    return {"title": title, "author": author, "content": content}


@pytest.fixture
def store(clock) -> EntryStore:
    return EntryStore(POST_FIELDS, clock=clock)


def test_create_assigns_first_id_and_timestamps(store: EntryStore, clock) -> None:
    entry = store.create(_post())

    assert entry.id == 1
    assert entry.fields == {"title": "Hi", "author": "Bo", "content": "World"}
    assert entry.created_at == entry.updated_at == clock.now


def test_create_with_blank_field_leaves_store_unchanged(store: EntryStore) -> None:
    store.create(_post())

    with pytest.raises(BlankFieldError):
        store.create(_post(title=""))

    assert len(store) == 1


def test_create_with_missing_field_leaves_store_unchanged(store: EntryStore) -> None:
    with pytest.raises(MissingFieldError):
        store.create({"title": "Hi", "author": "Bo"})

    assert store.list() == []


def test_create_prepends_and_ids_increase(store: EntryStore) -> None:
    ids = []
    for n in range(5):
        before = len(store.list())
        entry = store.create(_post(title=f"Post {n}"))
        listed = store.list()
        assert len(listed) == before + 1
        assert listed[0].id == entry.id
        assert all(entry.id > previous for previous in ids)
        ids.append(entry.id)

    assert len(set(ids)) == len(ids)
    assert [e.fields["title"] for e in store.list()] == [f"Post {n}" for n in reversed(range(5))]


def test_ids_are_not_reused_after_delete(store: EntryStore) -> None:
    first = store.create(_post())
    store.delete(first.id)

    second = store.create(_post())

    assert second.id == first.id + 1


def test_list_returns_a_snapshot(store: EntryStore) -> None:
    store.create(_post())

    snapshot = store.list()
    snapshot[0].fields["title"] = "changed"
    snapshot.clear()

    assert store.list()[0].fields["title"] == "Hi"


def test_get_returns_copy_or_none(store: EntryStore) -> None:
    entry = store.create(_post())

    fetched = store.get(entry.id)
    fetched.fields["title"] = "changed"

    assert store.get(entry.id).fields["title"] == "Hi"
    assert store.get(999) is None


def test_update_replaces_fields_and_preserves_identity(store: EntryStore, clock) -> None:
    target = store.create(_post(title="Target"))
    other = store.create(_post(title="Other"))
    clock.advance(minutes=5)

    updated = store.update(target.id, _post(title=" New title ", author="Al", content="Body"))

    assert updated.id == target.id
    assert updated.created_at == target.created_at
    assert updated.updated_at == clock.now
    assert updated.fields == {"title": "New title", "author": "Al", "content": "Body"}
    assert store.get(other.id) == other


def test_update_unknown_id_raises_not_found(store: EntryStore) -> None:
    store.create(_post())
    before = store.list()

    with pytest.raises(NotFoundError) as exc_info:
        store.update(42, _post())

    assert exc_info.value.entry_id == 42
    assert store.list() == before


def test_update_with_invalid_fields_returns_original_entry(store: EntryStore, clock) -> None:
    entry = store.create(_post())
    clock.advance(minutes=1)

    with pytest.raises(ValidationFailedError) as exc_info:
        store.update(entry.id, _post(title="Changed", content="   "))

    assert exc_info.value.entry == entry
    assert isinstance(exc_info.value.error, BlankFieldError)
    assert exc_info.value.error.field == "content"
    assert store.get(entry.id) == entry


def test_update_never_moves_updated_at_before_created_at(store: EntryStore, clock) -> None:
    entry = store.create(_post())
    clock.advance(hours=-1)

    updated = store.update(entry.id, _post(title="Later"))

    assert updated.updated_at == entry.created_at


def test_delete_removes_exactly_one_entry(store: EntryStore) -> None:
    first = store.create(_post(title="First"))
    second = store.create(_post(title="Second"))

    removed = store.delete(first.id)

    assert removed == first
    assert [e.id for e in store.list()] == [second.id]
    with pytest.raises(NotFoundError):
        store.delete(first.id)


def test_natural_key_rejects_case_insensitive_duplicates(clock) -> None:
    store = EntryStore({"country_code"}, natural_key="country_code", clock=clock)
    store.create({"country_code": "FR"})

    with pytest.raises(DuplicateEntryError) as exc_info:
        store.create({"country_code": " fr "})

    assert exc_info.value.key == "fr"
    assert len(store) == 1


def test_natural_key_update_allows_own_key_but_not_others(clock) -> None:
    store = EntryStore({"country_code"}, natural_key="country_code", clock=clock)
    france = store.create({"country_code": "FR"})
    store.create({"country_code": "DE"})

    assert store.update(france.id, {"country_code": "fr"}).fields["country_code"] == "fr"
    with pytest.raises(DuplicateEntryError):
        store.update(france.id, {"country_code": "DE"})
    assert store.get(france.id).fields["country_code"] == "fr"


def test_concurrent_creates_allocate_distinct_ids() -> None:
    store = EntryStore(POST_FIELDS)

    def worker() -> None:
        for _ in range(50):
            store.create(_post())

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    ids = [entry.id for entry in store.list()]
    assert len(ids) == 400
    assert sorted(ids) == list(range(1, 401))
    assert ids == sorted(ids, reverse=True)
