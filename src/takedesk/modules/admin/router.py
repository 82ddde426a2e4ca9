"""
Takedesk Admin Module

Back-office endpoints, admin profiles only:
- Account listing
- Manual findings and status changes
- Identity verification
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from takedesk.core.protocols import DatabaseClient
from takedesk.deps import get_db
from takedesk.modules.findings.schemas import (
    FindingCreateRequest,
    FindingListResponse,
    FindingResponse,
    FindingStatusUpdate,
)
from takedesk.modules.findings.service import FindingsService
from takedesk.modules.identity.schemas import IdentityRecord
from takedesk.modules.identity.service import IdentityService
from takedesk.modules.users.repository import UsersRepository
from takedesk.modules.users.schemas import ProfileListResponse
from takedesk.modules.users.service import require_admin

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[require_admin])

logger = logging.getLogger(__name__)

Db = Annotated[DatabaseClient, Depends(get_db)]


@router.get("/users", response_model=ProfileListResponse)
async def list_users(db: Db):
    """All account profiles, newest first."""
    return {"items": await UsersRepository(db).list_profiles()}


@router.get("/findings", response_model=FindingListResponse)
async def list_findings(db: Db):
    return {"items": await FindingsService(db).list_all()}


@router.post("/findings", response_model=FindingResponse, status_code=201)
async def create_finding(request: FindingCreateRequest, db: Db):
    """Create a manual finding for a user."""
    return await FindingsService(db).create(request)


@router.patch("/findings/{finding_id}", response_model=FindingResponse)
async def update_finding_status(finding_id: str, update: FindingStatusUpdate, db: Db):
    finding = await FindingsService(db).set_status(finding_id, update.status)
    logger.info(f"[ADMIN] Finding {finding_id} set to {update.status}")
    return finding


@router.post("/identities/{identity_id}/verify", response_model=IdentityRecord)
async def verify_identity(identity_id: str, db: Db):
    return await IdentityService(db).verify(identity_id)
