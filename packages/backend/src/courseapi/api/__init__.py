"""API route aggregation.

All routers registered here get mounted in main.py under /api.

Learn: Auth is applied per route with Depends(get_current_user), since
users and courses each mix public and protected endpoints.
"""

from fastapi import APIRouter

from courseapi.api.courses import router as courses_router
from courseapi.api.health import router as health_router
from courseapi.api.users import router as users_router

api_router = APIRouter(prefix="/api")

api_router.include_router(health_router, tags=["health"])
api_router.include_router(users_router, tags=["users"])
api_router.include_router(courses_router, tags=["courses"])
