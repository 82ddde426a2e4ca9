"""Tests for insert / upsert / update / delete on the in-memory store."""

import re

import pytest

from takedesk.core.mutations import insert_rows, upsert_rows


class TestInsert:
    """insert() tests."""

    def test_generated_ids_increase(self, db):
        ids = [
            db.table("findings").insert({"url": f"https://x.test/{i}"}).execute().data[0]["id"]
            for i in range(4)
        ]

        assert ids == ["findings-3", "findings-4", "findings-5", "findings-6"]
        assert len(set(ids)) == len(ids)
        for row_id in ids:
            assert re.fullmatch(r"findings-\d+", row_id)

    def test_batch_insert_keeps_input_order(self, db):
        data = db.table("takedowns").insert([{"channel": "a"}, {"channel": "b"}]).execute().data
        assert [(r["id"], r["channel"]) for r in data] == [("takedowns-1", "a"), ("takedowns-2", "b")]

    def test_explicit_id_and_timestamp_kept(self, db):
        row = db.table("takedowns").insert({"id": "mine", "created_at": "2024-01-01T00:00:00+00:00"}).execute().data[0]
        assert row["id"] == "mine"
        assert row["created_at"] == "2024-01-01T00:00:00+00:00"

    def test_timestamp_stamped_when_missing(self, db):
        row = db.table("takedowns").insert({"channel": "email"}).execute().data[0]
        assert row["created_at"]

    def test_table_defaults_on_insert(self, db):
        user = db.table("users").insert({"auth_user_id": "u2", "email": "u2@example.com"}).execute().data[0]
        identity = db.table("identities").insert({"user_id": "user-1"}).execute().data[0]

        assert user["is_admin"] is False
        assert identity["status"] == "submitted"

    def test_returned_rows_are_copies(self, db):
        row = insert_rows("takedowns", {"channel": "email"})[0]
        row["channel"] = "changed"

        stored = db.table("takedowns").select("*").single().execute().data
        assert stored["channel"] == "email"

    def test_insert_is_deferred_until_execute(self, db):
        query = db.table("takedowns").insert({"channel": "email"})
        assert db.table("takedowns").select("*").execute().data == []

        query.execute()
        assert len(db.table("takedowns").select("*").execute().data) == 1

    def test_generated_id_skips_explicit_ids(self, db):
        table = db.table("findings")
        table.insert({"id": "findings-3", "url": "https://x.test/a"}).execute()
        generated = table.insert({"url": "https://x.test/b"}).execute().data[0]

        assert generated["id"] == "findings-4"
        ids = [r["id"] for r in table.select("id").execute().data]
        assert len(ids) == len(set(ids))


class TestUpsert:
    """upsert() tests."""

    def test_merges_into_existing_row(self, db):
        data = (
            db.table("users")
            .upsert({"auth_user_id": "auth-test-user", "email": "new@example.com"}, on_conflict="auth_user_id")
            .execute()
            .data
        )

        assert len(data) == 1
        assert data[0]["id"] == "user-1"
        assert data[0]["email"] == "new@example.com"
        assert data[0]["name"] == "Test User"

        users = db.table("users").select("*").execute().data
        assert len(users) == 1
        assert users[0]["email"] == "new@example.com"

    def test_inserts_when_key_unmatched(self, db):
        data = (
            db.table("users")
            .upsert({"auth_user_id": "u1", "email": "u1@example.com"}, on_conflict="auth_user_id")
            .execute()
            .data
        )

        assert data[0]["id"] == "users-2"
        assert data[0]["is_admin"] is False
        assert len(db.table("users").select("*").execute().data) == 2

    def test_merge_keeps_existing_defaults(self, db):
        db.table("users").update({"is_admin": True}).eq("id", "user-1").execute()

        merged = upsert_rows("users", {"auth_user_id": "auth-test-user", "name": "Renamed"}, on_conflict="auth_user_id")

        assert merged[0]["is_admin"] is True
        assert merged[0]["name"] == "Renamed"

    def test_merge_keeps_identity_status(self, db):
        db.table("identities").insert({"user_id": "user-1", "status": "verified"}).execute()

        merged = upsert_rows("identities", {"user_id": "user-1", "doc_type": "passport"}, on_conflict="user_id")

        assert merged[0]["status"] == "verified"
        assert merged[0]["doc_type"] == "passport"

    def test_merge_never_changes_id(self, db):
        merged = upsert_rows("users", {"id": "other", "auth_user_id": "auth-test-user"}, on_conflict="auth_user_id")
        assert merged[0]["id"] == "user-1"

    def test_merge_restamps_empty_created_at(self, db):
        merged = upsert_rows("users", {"auth_user_id": "auth-test-user", "created_at": None}, on_conflict="auth_user_id")

        assert merged[0]["created_at"]
        stored = db.table("users").select("created_at").eq("id", "user-1").single().execute().data
        assert stored["created_at"]

    def test_without_conflict_column_inserts(self, db):
        upsert_rows("users", {"auth_user_id": "auth-test-user"})
        assert len(db.table("users").select("*").execute().data) == 2

    def test_none_key_inserts(self, db):
        upsert_rows("users", {"auth_user_id": None, "email": "anon@example.com"}, on_conflict="auth_user_id")
        assert len(db.table("users").select("*").execute().data) == 2

    def test_batch_never_duplicates_key(self, db):
        upsert_rows(
            "users",
            [
                {"auth_user_id": "u9", "email": "first@example.com"},
                {"auth_user_id": "u9", "email": "second@example.com"},
            ],
            on_conflict="auth_user_id",
        )

        rows = db.table("users").select("*").eq("auth_user_id", "u9").execute().data
        assert len(rows) == 1
        assert rows[0]["email"] == "second@example.com"


class TestUpdate:
    """update().eq() tests."""

    @pytest.fixture
    def three_rows(self, db):
        db.table("takedowns").insert(
            [
                {"id": "t1", "user_id": "u1", "status": "Pending"},
                {"id": "t2", "user_id": "u2", "status": "Pending", "meta": {"k": [1, 2]}},
                {"id": "t3", "user_id": "u1", "status": "Pending"},
            ]
        ).execute()

    def test_updates_only_matches(self, db, three_rows):
        untouched = db.table("takedowns").select("*").eq("id", "t2").single().execute().data

        data = db.table("takedowns").update({"status": "Removed"}).eq("user_id", "u1").execute().data

        assert [(r["id"], r["status"]) for r in data] == [("t1", "Removed"), ("t3", "Removed")]
        assert db.table("takedowns").select("*").eq("id", "t2").single().execute().data == untouched

    def test_filters_compose(self, db, three_rows):
        data = db.table("takedowns").update({"status": "Removed"}).eq("user_id", "u1").eq("id", "t3").execute().data
        assert [r["id"] for r in data] == ["t3"]

    def test_no_match_is_empty(self, db, three_rows):
        assert db.table("takedowns").update({"status": "Removed"}).eq("user_id", "nobody").execute().data == []

    def test_update_merges_fields(self, db):
        db.table("findings").update({"status": "Removed"}).eq("id", "finding-1").execute()
        row = db.table("findings").select("*").eq("id", "finding-1").single().execute().data
        assert row["status"] == "Removed"
        assert row["url"] == "https://example.com/infringing/1"

    def test_update_values_not_aliased(self, db):
        values = {"evidence": {"note": "a"}}
        db.table("findings").update(values).eq("id", "finding-1").execute()
        values["evidence"]["note"] = "b"

        row = db.table("findings").select("evidence").eq("id", "finding-1").single().execute().data
        assert row["evidence"] == {"note": "a"}


class TestDelete:
    """delete().eq() tests."""

    def test_removes_matches(self, db):
        data = db.table("findings").delete().eq("id", "finding-1").execute().data

        assert [r["id"] for r in data] == ["finding-1"]
        assert [r["id"] for r in db.table("findings").select("id").execute().data] == ["finding-2"]

    def test_no_match(self, db):
        assert db.table("findings").delete().eq("id", "nope").execute().data == []
        assert len(db.table("findings").select("*").execute().data) == 2
