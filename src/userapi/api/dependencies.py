"""
Shared FastAPI dependencies
"""

from fastapi import Request

from userapi.services.base_store import UserStore


def get_user_store(request: Request) -> UserStore:
    """User store attached to the application at startup"""
    return request.app.state.user_store
