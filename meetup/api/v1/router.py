"""Main API router for v1."""
from fastapi import APIRouter

from meetup.api.v1.endpoints import meetings, participations, notifications, users

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(meetings.router, prefix="/meetings", tags=["Meetings"])
api_router.include_router(participations.router, tags=["Participations"])
api_router.include_router(notifications.router, prefix="/notifications", tags=["Notifications"])
api_router.include_router(users.router, prefix="/users", tags=["Users"])
