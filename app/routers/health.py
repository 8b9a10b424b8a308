from fastapi import APIRouter, Request
from tortoise import Tortoise
from tortoise.exceptions import BaseORMException
import time
import os

router = APIRouter(prefix="/ops", tags=["ops"])

# Store startup time for uptime calculation
startup_time = time.time()

@router.get("/db-health")
async def db_health():
    """Simple database health check using Tortoise ORM"""
    try:
        await Tortoise.get_connection("default").execute_query("SELECT 1")
        return {"db_ok": True}
    except (BaseORMException, OSError) as e:
        return {"db_ok": False, "error": str(e)}

@router.get("/status")
async def get_status():
    """Basic process info for monitoring"""
    return {
        "status": "healthy",
        "uptime_seconds": round(time.time() - startup_time, 2),
        "process_id": os.getpid(),
        "timestamp": time.time(),
    }

@router.get("/routes")
async def list_routes(request: Request):
    routes = []
    for r in request.app.routes:
        path = getattr(r, "path", "")
        methods = sorted(getattr(r, "methods", []) or [])
        name = getattr(r, "name", "")
        routes.append({"path": path, "methods": methods, "name": name})
    return {"count": len(routes), "routes": routes}
