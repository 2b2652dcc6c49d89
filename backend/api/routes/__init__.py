"""API routes module."""

from api.routes.admin import router as admin_router
from api.routes.bets import router as bets_router
from api.routes.hackathons import router as hackathons_router
from api.routes.users import router as users_router

__all__ = [
    "admin_router",
    "bets_router",
    "hackathons_router",
    "users_router",
]
