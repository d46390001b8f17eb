"""
Test the in-memory record store.

Run with: python tests/test_record_store.py
"""

import asyncio
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

import pytest

from backend.src.services.events import MESSAGE_CREATED
from backend.src.services.records import (
    IdentifierExhausted,
    NotFound,
    RecordKind,
    RecordStore,
)
from backend.src.services.records import ids


class RecordingPublisher:
    def __init__(self):
        self.events = []

    def publish(self, topic, payload):
        self.events.append((topic, payload))


def test_ada_scenario():
    store = RecordStore()

    first = asyncio.run(store.create_message("hello", "Ada", author_age=36))
    assert first.content == "hello"
    assert first.author.to_dict() == {
        "id": first.author.id,
        "name": "Ada",
        "age": 36,
        "nationality": None,
    }
    assert store.count_authors() == 1
    assert store.count_messages() == 1

    second = asyncio.run(store.create_message("world", "Ada"))
    assert second.author.id == first.author.id
    assert second.id != first.id
    assert store.count_authors() == 1
    assert store.count_messages() == 2
    assert [m.content for m in store.list_messages("Ada")] == ["hello", "world"]


def test_same_name_reuses_author_and_ignores_new_details():
    store = RecordStore()

    async def scenario():
        await store.create_message("a", "Grace", author_age=40, author_nationality="US")
        await store.create_message("b", "Grace", author_age=99, author_nationality="UK")
        await store.create_message("c", "Grace")

    asyncio.run(scenario())

    authors = store.list_authors()
    assert len(authors) == 1
    assert authors[0].age == 40
    assert authors[0].nationality == "US"


def test_get_message_round_trip():
    store = RecordStore()
    created = asyncio.run(store.create_message("content", "Linus"))

    fetched = store.get_message(created.id)
    assert fetched.content == "content"
    assert fetched.author.name == "Linus"


def test_list_messages_keeps_creation_order_per_author():
    store = RecordStore()

    async def scenario():
        for i in range(5):
            await store.create_message(f"ada-{i}", "Ada")
            await store.create_message(f"alan-{i}", "Alan")

    asyncio.run(scenario())

    assert [m.content for m in store.list_messages("Ada")] == [f"ada-{i}" for i in range(5)]
    assert [m.content for m in store.list_messages("Alan")] == [f"alan-{i}" for i in range(5)]
    assert [a.name for a in store.list_authors()] == ["Ada", "Alan"]


def test_update_replaces_content_only():
    store = RecordStore()
    created = asyncio.run(store.create_message("before", "Ada"))
    author_before = created.author

    updated = asyncio.run(store.update_message(created.id, "after"))
    assert updated.content == "after"
    assert store.get_message(created.id).content == "after"
    assert store.get_message(created.id).author is author_before

    cleared = asyncio.run(store.update_message(created.id, None))
    assert cleared.content is None


def test_unknown_message_raises_not_found():
    store = RecordStore()

    with pytest.raises(NotFound) as exc_info:
        store.get_message("deadbeef")
    assert exc_info.value.kind == RecordKind.MESSAGE
    assert exc_info.value.key == "deadbeef"

    with pytest.raises(NotFound):
        asyncio.run(store.update_message("deadbeef", "x"))


def test_unknown_author_raises_not_found():
    store = RecordStore()
    asyncio.run(store.create_message("x", "Ada"))

    with pytest.raises(NotFound) as exc_info:
        store.list_messages("Nobody")
    assert exc_info.value.kind == RecordKind.AUTHOR
    assert exc_info.value.key == "Nobody"
    assert "Nobody" in str(exc_info.value)


def test_author_without_indexed_messages_raises_not_found():
    store = RecordStore()
    created = asyncio.run(store.create_message("x", "Ada"))
    # Only reachable if the index entry is empty; simulate it
    store._author_messages[created.author.id].clear()

    with pytest.raises(NotFound) as exc_info:
        store.list_messages("Ada")
    assert exc_info.value.kind == RecordKind.AUTHOR_MESSAGES


def test_empty_store_counts():
    store = RecordStore()
    assert store.count_messages() == 0
    assert store.count_authors() == 0
    assert store.list_authors() == []


def test_identifiers_are_hex_tokens_of_configured_length():
    store = RecordStore(id_bytes=16)
    created = asyncio.run(store.create_message("x", "Ada"))

    assert len(created.id) == 32
    assert len(created.author.id) == 32
    int(created.id, 16)
    int(created.author.id, 16)


def test_create_publishes_detached_snapshot():
    publisher = RecordingPublisher()
    store = RecordStore(publisher=publisher)

    created = asyncio.run(store.create_message("hello", "Ada"))
    assert len(publisher.events) == 1

    topic, snapshot = publisher.events[0]
    assert topic == MESSAGE_CREATED
    assert snapshot.to_dict() == created.to_dict()

    asyncio.run(store.update_message(created.id, "changed"))
    assert snapshot.content == "hello"
    assert len(publisher.events) == 1


def test_concurrent_creates_keep_one_author_and_full_index():
    store = RecordStore()

    async def scenario():
        await asyncio.gather(*(store.create_message(str(i), "Ada") for i in range(50)))

    asyncio.run(scenario())

    assert store.count_authors() == 1
    assert store.count_messages() == 50
    listed = store.list_messages("Ada")
    assert len({m.id for m in listed}) == 50
    assert sorted(int(m.content) for m in listed) == list(range(50))


def test_colliding_identifier_is_redrawn(monkeypatch):
    tokens = iter(["aa", "aa", "bb"])
    monkeypatch.setattr(ids, "new_token", lambda nbytes: next(tokens))

    assert ids.new_unique_token(set()) == "aa"
    assert ids.new_unique_token({"aa"}) == "bb"


def test_identifier_exhaustion_is_fatal(monkeypatch):
    monkeypatch.setattr(ids, "new_token", lambda nbytes: "aa")

    with pytest.raises(IdentifierExhausted):
        ids.new_unique_token({"aa"})


def main() -> int:
    test_ada_scenario()
    test_same_name_reuses_author_and_ignores_new_details()
    test_get_message_round_trip()
    test_list_messages_keeps_creation_order_per_author()
    test_update_replaces_content_only()
    test_unknown_message_raises_not_found()
    test_unknown_author_raises_not_found()
    test_author_without_indexed_messages_raises_not_found()
    test_empty_store_counts()
    test_identifiers_are_hex_tokens_of_configured_length()
    test_create_publishes_detached_snapshot()
    test_concurrent_creates_keep_one_author_and_full_index()
    with pytest.MonkeyPatch.context() as mp:
        test_colliding_identifier_is_redrawn(mp)
    with pytest.MonkeyPatch.context() as mp:
        test_identifier_exhaustion_is_fatal(mp)
    print("test_record_store: OK")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
