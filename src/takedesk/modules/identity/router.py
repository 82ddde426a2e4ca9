"""
Takedesk Identity - Router.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, File, Form, UploadFile

from takedesk.auth import AuthUser, get_current_user
from takedesk.core.protocols import DatabaseClient
from takedesk.deps import get_db
from takedesk.modules.identity.schemas import IdentityStatusResponse
from takedesk.modules.identity.service import IdentityService
from takedesk.modules.users.service import get_current_profile

router = APIRouter(prefix="/identity", tags=["identity"])


def get_service(db: Annotated[DatabaseClient, Depends(get_db)]) -> IdentityService:
    return IdentityService(db)


@router.get("", response_model=IdentityStatusResponse)
async def get_identity(
    profile: dict[str, Any] = Depends(get_current_profile),
    service: IdentityService = Depends(get_service),
):
    """Latest identity submission and whether it is verified."""
    return await service.get_status(profile["id"])


@router.post("", response_model=IdentityStatusResponse, status_code=201)
async def upload_identity(
    doc_type: str = Form(default="id_card"),
    file: UploadFile = File(..., description="Identity document image or PDF"),
    user: AuthUser = Depends(get_current_user),
    profile: dict[str, Any] = Depends(get_current_profile),
    service: IdentityService = Depends(get_service),
):
    """Upload an identity document; it goes back to review."""
    content = await file.read()
    return await service.submit_document(
        user_id=profile["id"],
        auth_user_id=user.id,
        doc_type=doc_type,
        filename=file.filename or "document",
        content=content,
        content_type=file.content_type or "application/octet-stream",
    )
