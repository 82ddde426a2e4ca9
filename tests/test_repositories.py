"""Repositories and services running unchanged against the in-memory client."""

import pytest

from takedesk.auth.schemas import AuthUser
from takedesk.exceptions import NotFoundException
from takedesk.modules.findings.repository import FindingsRepository
from takedesk.modules.findings.schemas import FindingCreateRequest
from takedesk.modules.findings.service import FindingsService
from takedesk.modules.identity.service import IdentityService, identity_state, object_path
from takedesk.modules.users.repository import UsersRepository


class TestBaseRepository:
    """Generic CRUD through BaseRepository."""

    @pytest.mark.asyncio
    async def test_get_by_id(self, db):
        repo = FindingsRepository(db)
        assert (await repo.get_by_id("finding-2"))["status"] == "Submitted"
        assert await repo.get_by_id("missing") is None

    @pytest.mark.asyncio
    async def test_get_by_id_or_raise(self, db):
        with pytest.raises(NotFoundException):
            await FindingsRepository(db).get_by_id_or_raise("missing")

    @pytest.mark.asyncio
    async def test_list_paginates(self, db):
        repo = FindingsRepository(db)

        first, token = await repo.list(page_size=1, filters={"user_id": "user-1"})
        assert len(first) == 1
        assert token == "1"

        second, token = await repo.list(page_size=1, page_token=token, filters={"user_id": "user-1"})
        assert len(second) == 1
        assert token is None
        assert first[0]["id"] != second[0]["id"]

    @pytest.mark.asyncio
    async def test_update_missing_raises(self, db):
        with pytest.raises(NotFoundException):
            await FindingsRepository(db).update("missing", {"status": "Removed"})

    @pytest.mark.asyncio
    async def test_delete(self, db):
        repo = FindingsRepository(db)
        assert await repo.delete("finding-1") is True
        assert await repo.get_by_id("finding-1") is None


class TestUsersRepository:
    """Profile handling."""

    @pytest.mark.asyncio
    async def test_existing_profile(self, db):
        profile = await UsersRepository(db).ensure_profile(AuthUser(id="auth-test-user", email="test@example.com"))
        assert profile["id"] == "user-1"

    @pytest.mark.asyncio
    async def test_profile_created_on_first_sight(self, db):
        user = AuthUser(id="auth-new", email="new@example.com", user_metadata={"full_name": "New Person"})

        profile = await UsersRepository(db).ensure_profile(user)

        assert profile["id"] == "users-2"
        assert profile["name"] == "New Person"
        assert profile["is_admin"] is False

    @pytest.mark.asyncio
    async def test_no_profile_without_email(self, db):
        assert await UsersRepository(db).ensure_profile(AuthUser(id="auth-new")) is None

    @pytest.mark.asyncio
    async def test_is_admin(self, db):
        repo = UsersRepository(db)
        assert await repo.is_admin("auth-test-user") is False
        assert await repo.is_admin(None) is False

        db.table("users").update({"is_admin": True}).eq("auth_user_id", "auth-test-user").execute()
        assert await repo.is_admin("auth-test-user") is True


class TestFindingsService:
    """Findings review flow."""

    @pytest.mark.asyncio
    async def test_approve_files_takedown(self, db):
        finding, takedown = await FindingsService(db).approve("finding-1", "user-1")

        assert finding["status"] == "Pending"
        assert takedown["id"] == "takedowns-1"
        assert takedown["finding_id"] == "finding-1"
        assert takedown["channel"] == "search_form"
        assert takedown["submitted_at"]

    @pytest.mark.asyncio
    async def test_approve_other_users_finding(self, db):
        with pytest.raises(NotFoundException):
            await FindingsService(db).approve("finding-1", "someone-else")
        assert db.table("takedowns").select("*").execute().data == []

    @pytest.mark.asyncio
    async def test_reject(self, db):
        finding = await FindingsService(db).reject("finding-2", "user-1")
        assert finding["status"] == "Rejected"

    @pytest.mark.asyncio
    async def test_list_by_status(self, db):
        rows = await FindingsService(db).list_findings("user-1", status="Found")
        assert [r["id"] for r in rows] == ["finding-1"]

    @pytest.mark.asyncio
    async def test_stats(self, db):
        db.table("findings").update({"status": "Removed"}).eq("id", "finding-1").execute()
        db.table("takedowns").insert(
            [
                {"user_id": "user-1", "finding_id": "finding-1", "result": "Removed"},
                {"user_id": "user-1", "finding_id": "finding-2", "result": "delisted"},
                {"user_id": "user-1", "finding_id": None, "result": "removed"},
                {"user_id": "user-1", "finding_id": None, "result": "pending"},
                {"user_id": "user-2", "finding_id": "x", "result": "removed"},
            ]
        ).execute()

        stats = await FindingsService(db).get_stats("user-1")

        assert (stats.removed, stats.delisted, stats.total) == (2, 1, 3)

    @pytest.mark.asyncio
    async def test_create_with_note(self, db):
        finding = await FindingsService(db).create(
            FindingCreateRequest(user_id="user-1", url=" https://x.test/leak ", source_type="host", note=" urgent ")
        )

        assert finding["id"] == "findings-3"
        assert finding["url"] == "https://x.test/leak"
        assert finding["status"] == "Found"
        assert finding["evidence"] == {"note": "urgent"}


class TestIdentityService:
    """Identity submissions."""

    def test_identity_state(self):
        assert identity_state(None) == "missing"
        assert identity_state({"verified_at": None}) == "uploaded"
        assert identity_state({"verified_at": "2024-01-01T00:00:00+00:00"}) == "verified"

    def test_object_path(self):
        path = object_path("auth-test-user", "my passport scan.png")
        assert path.startswith("auth-test-user/")
        assert path.endswith("-my-passport-scan.png")

    @pytest.mark.asyncio
    async def test_submit_then_resubmit(self, db):
        service = IdentityService(db)
        kwargs = dict(user_id="user-1", auth_user_id="auth-test-user", filename="id.png", content=b"png", content_type="image/png")

        first = await service.submit_document(doc_type="id_card", **kwargs)
        assert first.state == "uploaded"
        assert first.identity.id == "identities-1"
        assert first.identity.status == "submitted"

        await service.verify("identities-1")
        assert (await service.get_status("user-1")).state == "verified"

        second = await service.submit_document(doc_type="passport", **kwargs)
        assert second.identity.id == "identities-1"
        assert second.identity.doc_type == "passport"
        assert second.state == "uploaded"
        assert len(db.table("identities").select("*").execute().data) == 1

    @pytest.mark.asyncio
    async def test_verify_missing(self, db):
        with pytest.raises(NotFoundException):
            await IdentityService(db).verify("identities-9")
