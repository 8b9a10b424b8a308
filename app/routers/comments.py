# app/routers/comments.py

from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.schemas.poster import CommentCreate
from app.services.security import require_user, AuthUser
from app.services.metrics import record_comment
from app.services import catalog

router = APIRouter(prefix="/api/comments", tags=["comments"])


@router.post("")
async def create_comment(payload: CommentCreate, auth: AuthUser = Depends(require_user)):
    poster_id = catalog.parse_uuid(payload.poster_id)
    comment = await catalog.add_comment(poster_id, auth.user_id, payload.content)
    record_comment()
    return {"comment": catalog.comment_out(comment)}


@router.get("")
async def list_comments(poster_id: Optional[str] = Query(default=None)):
    pid = catalog.parse_uuid(poster_id)
    comments = await catalog.list_comments(pid)
    return {"comments": [catalog.comment_out(c) for c in comments]}
