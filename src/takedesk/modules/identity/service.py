"""
Takedesk Identity - Service.

Users upload one identity document; re-uploading replaces the latest
submission and sends it back to review. Admins mark submissions verified.
"""

import logging
import re
import time
from typing import Any

from takedesk.config import get_settings
from takedesk.core.protocols import DatabaseClient
from takedesk.core.supabase_client import get_supabase_client
from takedesk.core.table_store import utcnow_iso
from takedesk.exceptions import NotFoundException, ValidationException
from takedesk.modules.identity.repository import IdentitiesRepository
from takedesk.modules.identity.schemas import IdentityStatusResponse

logger = logging.getLogger(__name__)


def identity_state(identity: dict[str, Any] | None) -> str:
    if not identity:
        return "missing"
    return "verified" if identity.get("verified_at") else "uploaded"


def object_path(auth_user_id: str, filename: str) -> str:
    """Storage key ``{auth_user_id}/{epoch_ms}-{filename}`` with whitespace dashed."""
    safe_name = re.sub(r"\s+", "-", filename)
    return f"{auth_user_id}/{int(time.time() * 1000)}-{safe_name}"


class IdentityService:
    """Service for identity submissions."""

    def __init__(self, db: DatabaseClient | None = None):
        self._db = db or get_supabase_client()
        self.identities = IdentitiesRepository(self._db)

    async def get_status(self, user_id: str) -> IdentityStatusResponse:
        identity = await self.identities.latest_for_user(user_id)
        return IdentityStatusResponse(state=identity_state(identity), identity=identity)

    async def submit_document(
        self,
        *,
        user_id: str,
        auth_user_id: str,
        doc_type: str,
        filename: str,
        content: bytes,
        content_type: str,
    ) -> IdentityStatusResponse:
        """Store the file, then update the latest submission or create one."""
        if not content:
            raise ValidationException("Select a document before saving.")

        bucket = self._db.storage.from_(get_settings().storage.ids_bucket)
        path = object_path(auth_user_id, filename)
        bucket.upload(path, content, {"content-type": content_type, "cache-control": "3600", "upsert": "false"})
        doc_url = bucket.get_public_url(path)

        values = {
            "doc_type": doc_type,
            "doc_url": doc_url,
            "status": "submitted",
            "verified_at": None,
        }
        current = await self.identities.latest_for_user(user_id)
        if current:
            identity = await self.identities.update_for_user(current["id"], user_id, values)
        else:
            identity = await self.identities.create({"user_id": user_id, **values})

        logger.info("Identity document stored for %s at %s", user_id, path)
        return IdentityStatusResponse(state=identity_state(identity), identity=identity)

    async def verify(self, identity_id: str) -> dict[str, Any]:
        """Admin: mark a submission verified."""
        identity = await self.identities.get_by_id_or_raise(identity_id)
        updated = await self.identities.update_for_user(
            identity_id,
            identity["user_id"],
            {"verified_at": utcnow_iso(), "status": "verified"},
        )
        if not updated:
            raise NotFoundException("identity", identity_id)
        logger.info("Identity %s verified", identity_id)
        return updated
