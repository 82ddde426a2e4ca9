"""Takedesk Users Module - account profiles."""

from takedesk.modules.users.repository import UsersRepository
from takedesk.modules.users.router import router

__all__ = ["router", "UsersRepository"]
