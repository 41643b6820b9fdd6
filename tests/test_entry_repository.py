"""Tests for EntryRepository."""
# 标准库导包
from datetime import date, datetime, timezone

# 第三方库导包
import pytest

# 项目内部导包
from models import CreateImageData
from storage.models import EntryTag, Image
from storage.repositories import (
    EntryRepository,
    EntryTagRepository,
    ImageRepository,
    TagRepository,
    format_manual_date,
)


async def _create(session, user_id, **kwargs):
    data = {"type": "note", "title": "t", "content": "c", "comment": ""}
    data.update(kwargs)
    result = await EntryRepository(session).create_entry(user_id=user_id, **data)
    return result.last_insert_id


class TestFormatManualDate:

    def test_date_only_string(self):
        assert format_manual_date("2024-03-01") == "2024-03-01 00:00:00"

    def test_datetime_string(self):
        assert format_manual_date("2024-03-01T14:05:09") == "2024-03-01 14:05:09"

    def test_date_and_datetime_objects(self):
        assert format_manual_date(date(2024, 3, 1)) == "2024-03-01 00:00:00"
        assert format_manual_date(datetime(2024, 3, 1, 8, 30)) == "2024-03-01 08:30:00"

    def test_offset_is_converted_to_local_time(self):
        expected = datetime(2024, 3, 2, 4, 30, tzinfo=timezone.utc).astimezone().strftime("%Y-%m-%d %H:%M:%S")

        assert format_manual_date("2024-03-01T23:30:00-05:00") == expected
        assert format_manual_date("2024-03-02T04:30:00Z") == expected
        assert format_manual_date(datetime(2024, 3, 2, 4, 30, tzinfo=timezone.utc)) == expected

    def test_empty_values(self):
        assert format_manual_date(None) is None
        assert format_manual_date("") is None
        assert format_manual_date("   ") is None

    def test_garbage_is_rejected(self):
        with pytest.raises(ValueError):
            format_manual_date("not a date")


class TestCreateEntry:

    async def test_manual_date_round_trip(self, session, alice):
        entry_id = await _create(session, alice, manual_date="2024-03-01")

        entry = await EntryRepository(session).get_entry(alice, entry_id, True)

        assert entry.entry.manual_date == "2024-03-01 00:00:00"

    async def test_created_at_is_server_assigned(self, session, alice):
        entry_id = await _create(session, alice, manual_date="1999-01-01")

        entry = await EntryRepository(session).get_entry(alice, entry_id, True)

        assert entry.entry.created_at.year >= 2024
        assert entry.entry.manual_date == "1999-01-01 00:00:00"

    async def test_missing_manual_date_is_null(self, session, alice):
        entry_id = await _create(session, alice, manual_date="")

        entry = await EntryRepository(session).get_entry(alice, entry_id, True)

        assert entry.entry.manual_date is None

    async def test_flags_are_stored(self, session, alice):
        entry_id = await _create(session, alice, private=1, pinned=1)

        entry = await EntryRepository(session).get_entry(alice, entry_id, True)

        assert entry.entry.private is True
        assert entry.entry.pinned is True

    async def test_unknown_type_is_rejected(self, session, alice):
        with pytest.raises(ValueError):
            await _create(session, alice, type="diary")


class TestGetEntry:

    async def test_other_user_cannot_read(self, session, alice, bob):
        entry_id = await _create(session, alice)
        repo = EntryRepository(session)

        assert await repo.get_entry(bob, entry_id, True) is None
        assert await repo.get_entry(bob, entry_id, False) is None

    async def test_private_entry_visibility(self, session, alice):
        entry_id = await _create(session, alice, private=1)
        repo = EntryRepository(session)

        assert await repo.get_entry(alice, entry_id, False) is None
        entry = await repo.get_entry(alice, entry_id, True)
        assert entry is not None
        assert entry.id == entry_id

    async def test_public_entry_visible_anonymously(self, session, alice):
        entry_id = await _create(session, alice, private=0)

        entry = await EntryRepository(session).get_entry(alice, entry_id, False)

        assert entry is not None

    async def test_missing_entry(self, session, alice):
        assert await EntryRepository(session).get_entry(alice, 9999, True) is None

    async def test_no_tags_or_images_gives_empty_lists(self, session, alice):
        entry_id = await _create(session, alice)

        entry = await EntryRepository(session).get_entry(alice, entry_id, True)

        assert entry.tags == []
        assert entry.images == []

    async def test_tags_and_images_reflect_current_state(self, session, alice):
        entry_id = await _create(session, alice)
        repo = EntryRepository(session)
        tag_repo = TagRepository(session)
        await tag_repo.create_tag(alice, "a")
        await tag_repo.create_tag(alice, "b")
        tags = {t.name: t.id for t in await tag_repo.get_tags(alice)}
        await EntryTagRepository(session).link_entry_to_tag(entry_id, tags["a"])
        await ImageRepository(session).insert_images(
            [CreateImageData(path="/img/1.jpg", comment="first")], entry_id, alice
        )

        first = await repo.get_entry(alice, entry_id, True)
        assert [t.name for t in first.tags] == ["a"]
        assert [i.path for i in first.images] == ["/img/1.jpg"]

        await EntryTagRepository(session).link_entry_to_tag(entry_id, tags["b"])
        await EntryTagRepository(session).unlink_entry_from_tag(entry_id, tags["a"])
        await ImageRepository(session).update_image_comment(first.images[0].id, alice, "edited")

        second = await repo.get_entry(alice, entry_id, True)
        assert [t.name for t in second.tags] == ["b"]
        assert second.images[0].comment == "edited"


class TestGetEntries:

    async def test_filters_by_type_and_owner(self, session, alice, bob):
        note = await _create(session, alice, type="note")
        await _create(session, alice, type="link")
        await _create(session, bob, type="note")

        entries = await EntryRepository(session).get_entries(alice, "note", True)

        assert [e.id for e in entries] == [note]

    async def test_hides_private_when_anonymous(self, session, alice):
        public = await _create(session, alice, type="link", private=0)
        private = await _create(session, alice, type="link", private=1)
        repo = EntryRepository(session)

        anonymous = await repo.get_entries(alice, "link", False)
        owner = await repo.get_entries(alice, "link", True)

        assert [e.id for e in anonymous] == [public]
        assert [e.id for e in owner] == [private, public]

    async def test_newest_first_with_pagination(self, session, alice):
        ids = [await _create(session, alice, type="task", title=f"t{i}") for i in range(5)]
        repo = EntryRepository(session)

        page = await repo.get_entries(alice, "task", True, limit=2, offset=1)

        assert [e.id for e in page] == [ids[3], ids[2]]

    async def test_offset_without_limit(self, session, alice):
        ids = [await _create(session, alice, type="task") for _ in range(3)]

        rest = await EntryRepository(session).get_entries(alice, "task", True, offset=1)

        assert [e.id for e in rest] == [ids[1], ids[0]]

    async def test_order_by_title(self, session, alice):
        b = await _create(session, alice, type="event", title="b")
        a = await _create(session, alice, type="event", title="a")
        c = await _create(session, alice, type="event", title="c")

        entries = await EntryRepository(session).get_entries(alice, "event", True, order_by="title")

        assert [e.id for e in entries] == [c, b, a]

    async def test_unknown_order_column_falls_back(self, session, alice):
        first = await _create(session, alice, type="event")
        second = await _create(session, alice, type="event")

        entries = await EntryRepository(session).get_entries(
            alice, "event", True, order_by="id; DROP TABLE entries"
        )

        assert [e.id for e in entries] == [second, first]

    async def test_each_row_is_enriched(self, session, alice):
        entry_id = await _create(session, alice, type="link")
        await TagRepository(session).create_tag(alice, "go")
        tag = await TagRepository(session).get_by_name(alice, "go")
        await EntryTagRepository(session).link_entry_to_tag(entry_id, tag.id)

        entries = await EntryRepository(session).get_entries(alice, "link", True)

        assert [t.name for t in entries[0].tags] == ["go"]
        assert entries[0].images == []

    async def test_empty_result(self, session, alice):
        assert await EntryRepository(session).get_entries(alice, "note", True) == []


class TestUpdateEntry:

    async def test_update_own_entry(self, session, alice):
        entry_id = await _create(session, alice, title="old")
        repo = EntryRepository(session)

        result = await repo.update_entry(
            user_id=alice,
            entry_id=entry_id,
            title="new",
            content="body",
            comment="note",
            private=1,
            pinned=0,
            manual_date="2024-05-06 07:08:09"
        )

        assert result.rows_affected == 1
        entry = await repo.get_entry(alice, entry_id, True)
        assert entry.entry.title == "new"
        assert entry.entry.content == "body"
        assert entry.entry.private is True
        assert entry.entry.manual_date == "2024-05-06 07:08:09"
        assert entry.entry.updated_at >= entry.entry.created_at

    async def test_update_other_users_entry_affects_nothing(self, session, alice, bob):
        entry_id = await _create(session, alice, title="mine")
        repo = EntryRepository(session)

        result = await repo.update_entry(user_id=bob, entry_id=entry_id, title="stolen")

        assert result.rows_affected == 0
        assert (await repo.get_entry(alice, entry_id, True)).entry.title == "mine"


class TestDeleteEntry:

    async def test_delete_removes_images_and_links(self, session, alice, count_rows):
        entry_id = await _create(session, alice)
        await TagRepository(session).create_tag(alice, "x")
        tag = await TagRepository(session).get_by_name(alice, "x")
        await EntryTagRepository(session).link_entry_to_tag(entry_id, tag.id)
        await ImageRepository(session).insert_images([CreateImageData(path="/a.jpg")], entry_id, alice)
        repo = EntryRepository(session)

        result = await repo.delete_entry(entry_id, alice)

        assert result.rows_affected == 1
        assert await repo.get_entry(alice, entry_id, True) is None
        assert await count_rows(Image, Image.entry_id == entry_id) == 0
        assert await count_rows(EntryTag, EntryTag.entry_id == entry_id) == 0
        # 标签本身保留
        assert await TagRepository(session).get_by_name(alice, "x") is not None

    async def test_delete_other_users_entry_affects_nothing(self, session, alice, bob, count_rows):
        entry_id = await _create(session, alice)
        await ImageRepository(session).insert_images([CreateImageData(path="/a.jpg")], entry_id, alice)

        result = await EntryRepository(session).delete_entry(entry_id, bob)

        assert result.rows_affected == 0
        assert await EntryRepository(session).get_entry(alice, entry_id, True) is not None
        assert await count_rows(Image, Image.entry_id == entry_id) == 1

    async def test_delete_missing_entry(self, session, alice):
        result = await EntryRepository(session).delete_entry(12345, alice)

        assert result.rows_affected == 0
