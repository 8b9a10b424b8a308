from fastapi import APIRouter
import logging

from .auth import router as auth_router
from .upload import router as upload_router
from .files import router as files_router
from .posters import router as posters_router
from .parties import router as parties_router
from .comments import router as comments_router
from .ratings import router as ratings_router
from .profile import router as profile_router
from .health import router as health_router


def build_router() -> APIRouter:
    router = APIRouter()
    log = logging.getLogger("routers")

    for name, sub in (
        ("auth", auth_router),
        ("upload", upload_router),
        ("files", files_router),
        ("posters", posters_router),
        ("parties", parties_router),
        ("comments", comments_router),
        ("ratings", ratings_router),
        ("profile", profile_router),
        ("health", health_router),
    ):
        router.include_router(sub)
        log.info("Loaded router: %s", name)
    return router

# Export module-level router so app.main can import it
router = build_router()
