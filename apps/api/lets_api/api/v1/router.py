from fastapi import APIRouter

from lets_api.api.v1.activities import router as activities_router
from lets_api.api.v1.feed import router as feed_router
from lets_api.api.v1.social import router as social_router
from lets_api.api.v1.users import router as users_router

api_router = APIRouter()
api_router.include_router(feed_router)
api_router.include_router(users_router)
api_router.include_router(social_router)
api_router.include_router(activities_router)
