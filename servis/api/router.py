"""Central router that includes all sub-routers."""

from fastapi import APIRouter

from servis.api.auth import router as auth_router
from servis.api.payments import router as payments_router

api_router = APIRouter()
api_router.include_router(auth_router)
api_router.include_router(payments_router)
