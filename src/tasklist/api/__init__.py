"""API route aggregation.

All routers registered here get mounted in main.py.

Learn: Auth is applied at the include_router level using FastAPI's
dependencies parameter, so every task route sits behind the auth gate
even before its own handler asks for the identity. FastAPI caches a
dependency per request, so the gate still runs only once. Health and
auth routers are open.
"""

from fastapi import APIRouter, Depends

from tasklist.api.auth import router as auth_router
from tasklist.api.health import router as health_router
from tasklist.api.tasks import router as tasks_router
from tasklist.auth.dependencies import get_current_user

# All protected routers require authentication
_auth = [Depends(get_current_user)]

api_router = APIRouter(prefix="/api")

# Open routes — no auth required
api_router.include_router(auth_router, tags=["auth"])

# Protected routes — require a valid bearer token
api_router.include_router(tasks_router, tags=["tasks"], dependencies=_auth)

__all__ = ["api_router", "health_router"]
