"""API routes."""
from healfit.routes.auth import router as auth_router
from healfit.routes.profile import router as profile_router
from healfit.routes.plan import router as plan_router
from healfit.routes.workout import router as workout_router
from healfit.routes.trainer import router as trainer_router
from healfit.routes.admin import router as admin_router
from healfit.routes.entry import router as entry_router
from healfit.routes.measurement import router as measurement_router
from healfit.routes.tools import router as tools_router

__all__ = [
    "auth_router",
    "profile_router",
    "plan_router",
    "workout_router",
    "trainer_router",
    "admin_router",
    "entry_router",
    "measurement_router",
    "tools_router",
]
