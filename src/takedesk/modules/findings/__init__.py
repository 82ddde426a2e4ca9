"""Takedesk Findings Module - infringing URLs and takedown requests."""

from takedesk.modules.findings.repository import FindingsRepository, TakedownsRepository
from takedesk.modules.findings.router import router
from takedesk.modules.findings.service import FindingsService

__all__ = ["router", "FindingsService", "FindingsRepository", "TakedownsRepository"]
