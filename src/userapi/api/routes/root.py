"""
Welcome route
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter()

WELCOME_TEXT = "Welcome! Try GET /users, POST /users, or DELETE /users/:id"


@router.get("/", response_class=PlainTextResponse)
async def welcome():
    return WELCOME_TEXT
